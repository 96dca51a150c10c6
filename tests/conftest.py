"""Pytest configuration and fixtures."""

import pytest

from clarity.config.settings import Settings
from clarity.services.scoring.models import Selections


@pytest.fixture
def settings():
    """Provide settings fixture."""
    return Settings(anthropic_api_key=None, enrichment_deadline=0.5, narrative_timeout=1.0)


@pytest.fixture
def reactive_solo_selections():
    """Word-of-mouth solo operator who is reactive all the time."""
    return Selections(
        presence_channels=frozenset({"word_of_mouth"}),
        team_shape="solo",
        scheduling="memory",
        invoicing="paper",
        call_handling="personal_phone",
        business_feeling="reactive_all_the_time",
    )


@pytest.fixture
def no_presence_selections():
    """No digital presence, solo, overwhelmed."""
    return Selections(
        presence_channels=frozenset({"none"}),
        team_shape="solo",
        scheduling="phone",
        invoicing="paper",
        call_handling="voicemail",
        business_feeling="overwhelmed",
    )


@pytest.fixture
def selections_payload():
    """A valid camelCase selections body."""
    return {
        "presenceChannels": ["website", "word_of_mouth"],
        "teamShape": "small_crew",
        "scheduling": "phone",
        "invoicing": "inconsistent",
        "callHandling": "business_phone",
        "businessFeeling": "stuck_in_day_to_day",
    }
