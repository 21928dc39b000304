"""Great-circle distance between GPS coordinates."""

import math
from typing import Tuple

from models.constants import CITY_CENTRE, KM_PER_DEGREE


def distance(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """
    Calculate the distance between two GPS locations in kilometers.

    Uses the spherical law of cosines. The cosine of the angular separation
    is clamped to 1.0 so floating point overshoot cannot leave acos' domain.
    """
    radlat1 = math.radians(lat1)
    radlat2 = math.radians(lat2)
    radtheta = math.radians(lng1 - lng2)

    cos_angle = (
        math.sin(radlat1) * math.sin(radlat2)
        + math.cos(radlat1) * math.cos(radlat2) * math.cos(radtheta)
    )
    if cos_angle > 1:
        cos_angle = 1.0

    return math.degrees(math.acos(cos_angle)) * KM_PER_DEGREE


def distance_from_reference(
    lat: float, lng: float, reference: Tuple[float, float] = CITY_CENTRE
) -> float:
    """Distance in km between a location and the reference point (city centre)."""
    return distance(lat, lng, reference[0], reference[1])
