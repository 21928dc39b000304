"""Daft.ie listing constants and enums."""

from enum import Enum
from typing import Tuple

# Search results pagination (daft.ie serves 20 listings per page)
PAGE_SIZE: int = 20
DEFAULT_MAX_PAGES: int = 50

# Embedded Next.js payload holding the search results
NEXT_DATA_PATTERN: str = r'<script id="__NEXT_DATA__" type="application/json">(.*?)</script>'

DAFT_BASE_URL: str = "https://www.daft.ie"

# Floor area unit accepted for scoring
METRES_SQUARED: str = "METRES_SQUARED"

# Building Energy Rating: one letter A-G followed by one digit
BER_PATTERN: str = r"[A-G][0-9]"

# O'Connell Bridge, Dublin
CITY_CENTRE: Tuple[float, float] = (53.347256812999525, -6.259080753374189)

# Spherical law of cosines: degrees of arc to km (nautical mile chain)
KM_PER_DEGREE: float = 60 * 1.1515 * 1.609344


class RoutingProfile(Enum):
    """Travel modes supported by the routing service."""

    WALKING = "foot-walking"
    DRIVING = "driving-car"


# Routing eligibility for transport stations
COMMUTER_STATION_TYPE: str = "commuter"
COMMUTER_MAX_DISTANCE_KM: float = 10.0
WALKING_MAX_DISTANCE_KM: float = 2.0

# openrouteservice free tier: 40 directions requests per minute
DEFAULT_ROUTING_RPM_LIMIT: int = 40


class ScoringProfileName(Enum):
    """Named scoring formulas."""

    STRICT = "strict"
    CLASSIC = "classic"
