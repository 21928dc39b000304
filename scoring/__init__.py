"""Property scoring."""

from .profiles import ClassicProfile, ScoringProfile, StrictProfile, get_profile
from .scorer import PropertyScorer

__all__ = [
    "PropertyScorer",
    "ScoringProfile",
    "StrictProfile",
    "ClassicProfile",
    "get_profile",
]
