"""Signal scoring service."""

from clarity.services.scoring.models import Classification, Selections
from clarity.services.scoring.scorer import SignalScorer

__all__ = [
    "Classification",
    "Selections",
    "SignalScorer",
]
