"""Data models for listings, facilities and configuration."""

from .config import ScraperConfig, load_config
from .constants import (
    CITY_CENTRE,
    PAGE_SIZE,
    RoutingProfile,
    ScoringProfileName,
)
from .errors import (
    ConfigError,
    ListingParseError,
    RoutingError,
    ScrapeError,
    ScraperError,
)
from .facility import Facility, FacilityMatch, load_facilities
from .property import ScoredProperty

__all__ = [
    "ScraperConfig",
    "load_config",
    "CITY_CENTRE",
    "PAGE_SIZE",
    "RoutingProfile",
    "ScoringProfileName",
    "ScraperError",
    "ConfigError",
    "ScrapeError",
    "ListingParseError",
    "RoutingError",
    "Facility",
    "FacilityMatch",
    "load_facilities",
    "ScoredProperty",
]
