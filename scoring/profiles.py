"""Scoring formulas.

Weights are ranking decisions, not fitted values. Keep them exact.
"""

from typing import Dict, Optional, Tuple

from models.config import ScraperConfig
from models.constants import ScoringProfileName
from utils.rounding import round_half_up

# Bedrooms and bathrooms are worth the same in every profile
POINTS_PER_BEDROOM = 25
POINTS_PER_BATHROOM = 10

# Price per m2 considered neutral
REFERENCE_PRICE_PER_SQM = 5000


class ScoringProfile:
    """Base formula. Subclasses define the profile-specific factors."""

    name: str = ""
    uses_store: bool = False
    floor_area_bounds: Optional[Tuple[int, int]] = None

    def __init__(self, config: ScraperConfig):
        self.config = config

    def ber_score(self, rating: str) -> Optional[int]:
        """Points for a BER rating, or None if the grade disqualifies."""
        raise NotImplementedError

    def floor_area_score(self, floor_area: int) -> int:
        raise NotImplementedError

    def distance_score(self, distance_km: float) -> int:
        raise NotImplementedError

    def transport_score(self, duration_min: int) -> int:
        raise NotImplementedError

    def store_score(self, duration_min: int) -> int:
        return 0

    def price_score(self, price: int) -> int:
        raise NotImplementedError

    def type_score(self, property_type: Optional[str]) -> int:
        raise NotImplementedError

    def bedrooms_score(self, bedrooms: int) -> int:
        return bedrooms * POINTS_PER_BEDROOM

    def bathrooms_score(self, bathrooms: int) -> int:
        return bathrooms * POINTS_PER_BATHROOM

    def price_per_sqm_score(self, price_per_sqm: int) -> int:
        return round_half_up((REFERENCE_PRICE_PER_SQM - price_per_sqm) / 100)

    def accepts_floor_area(self, floor_area: float) -> bool:
        if self.floor_area_bounds is None:
            return True
        low, high = self.floor_area_bounds
        return low <= floor_area <= high


class StrictProfile(ScoringProfile):
    """
    Canonical formula.

    All BER grades are scored (E-G negatively), floor area must be within
    100-400 m2, and the nearest store drive counts against the property.
    """

    name = ScoringProfileName.STRICT.value
    uses_store = True
    floor_area_bounds = (100, 400)

    BER_BASE: Dict[str, int] = {
        "A": 200,
        "B": 70,
        "C": 0,
        "D": -50,
        "E": -100,
        "F": -150,
        "G": -200,
    }
    # Percentage of |base| added for the grade digit
    BER_DIGIT_BONUS: Dict[str, float] = {"1": 0.20, "2": 0.10, "3": 0.05}

    TYPE_POINTS: Dict[str, int] = {
        "Detached": 100,
        "Semi-D": 50,
        "Bungalow": 30,
    }
    DEFAULT_TYPE_POINTS = -100

    def ber_score(self, rating: str) -> Optional[int]:
        base = self.BER_BASE.get(rating[0])
        if base is None:
            return None
        bonus = abs(base) * self.BER_DIGIT_BONUS.get(rating[1], 0.0)
        return round_half_up(base + bonus)

    def floor_area_score(self, floor_area: int) -> int:
        return (floor_area - 150) * 2

    def distance_score(self, distance_km: float) -> int:
        return -round_half_up(distance_km / 10)

    def transport_score(self, duration_min: int) -> int:
        return -round_half_up(duration_min * 3)

    def store_score(self, duration_min: int) -> int:
        return -round_half_up(duration_min * 2)

    def price_score(self, price: int) -> int:
        return round_half_up((self.config.price_midpoint - price) / 1000)

    def type_score(self, property_type: Optional[str]) -> int:
        return self.TYPE_POINTS.get(property_type, self.DEFAULT_TYPE_POINTS)


class ClassicProfile(ScoringProfile):
    """
    Earlier formula.

    Only BER A-D is accepted, distance from the city centre is penalised
    quadratically and there is no store factor.
    """

    name = ScoringProfileName.CLASSIC.value

    BER_BASE: Dict[str, int] = {"A": 100, "B": 70, "C": 20, "D": 0}
    BER_DIGIT_BONUS: Dict[str, int] = {"1": 20, "2": 10, "3": 5}

    TYPE_POINTS: Dict[str, int] = {
        "Detached": 100,
        "Semi-D": 50,
        "Bungalow": 30,
        "End of Terrace": 20,
        "Terrace": -100,
    }
    DEFAULT_TYPE_POINTS = 0

    PRICE_CEILING = 700000

    def ber_score(self, rating: str) -> Optional[int]:
        base = self.BER_BASE.get(rating[0])
        if base is None:
            return None
        return base + self.BER_DIGIT_BONUS.get(rating[1], 0)

    def floor_area_score(self, floor_area: int) -> int:
        return floor_area

    def distance_score(self, distance_km: float) -> int:
        return -round_half_up((distance_km * distance_km) / 10)

    def transport_score(self, duration_min: int) -> int:
        return -round_half_up(duration_min * 2)

    def price_score(self, price: int) -> int:
        return round_half_up((self.PRICE_CEILING - price) / 2000)

    def type_score(self, property_type: Optional[str]) -> int:
        return self.TYPE_POINTS.get(property_type, self.DEFAULT_TYPE_POINTS)


PROFILES = {
    StrictProfile.name: StrictProfile,
    ClassicProfile.name: ClassicProfile,
}


def get_profile(config: ScraperConfig) -> ScoringProfile:
    """Instantiate the scoring profile named in the configuration."""
    try:
        return PROFILES[config.scoring_profile](config)
    except KeyError:
        raise ValueError(
            f"Unknown scoring profile: {config.scoring_profile}. "
            f"Supported: {', '.join(PROFILES)}"
        ) from None
