"""Request fingerprinting for the response cache."""

import hashlib
import json

from clarity.config.constants import CACHE_KEY_PREFIX
from clarity.services.enrichment.models import EnrichmentRequest
from clarity.services.scoring.models import Selections


def build_fingerprint(
    selections: Selections,
    enrichment_request: EnrichmentRequest,
    business_id: str | None = None,
) -> str:
    """Deterministic cache key for a request.

    Presence channels are sorted so their input order does not matter. The
    business name is a display label and is left out. Parts are encoded as a
    JSON list so a separator inside a reference cannot shift field boundaries.
    """
    parts = [
        sorted(c.value for c in selections.presence_channels),
        selections.team_shape.value,
        selections.scheduling.value,
        selections.invoicing.value,
        selections.call_handling.value,
        selections.business_feeling.value,
        (enrichment_request.website_ref or "").strip(),
        (enrichment_request.listing_ref or "").strip(),
        (enrichment_request.social_ref or "").strip(),
        (business_id or "").strip(),
    ]
    digest = hashlib.sha256(json.dumps(parts).encode()).hexdigest()
    return f"{CACHE_KEY_PREFIX}_{digest}"
