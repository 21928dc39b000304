"""Scored property data model."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .constants import DAFT_BASE_URL
from .facility import FacilityMatch


@dataclass
class ScoredProperty:
    """A listing that passed eligibility, with derived metrics and scoring."""

    # Listing display fields
    id: int
    title: Optional[str]
    property_type: Optional[str]
    image: Optional[str]
    point: Dict[str, Any]
    seo_friendly_path: Optional[str]
    abbreviated_price: Optional[str]
    publish_date: Optional[int]
    ber: str
    lat: float
    lng: float

    # Derived metrics
    price: int
    floor_area: int
    bedrooms: int
    bathrooms: int
    price_per_square_meter: int
    distance: float
    transport: FacilityMatch
    store: Optional[FacilityMatch] = None

    # Factor name -> points, "total" last
    scoring: Dict[str, int] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return self.scoring.get("total", 0)

    @property
    def url(self) -> Optional[str]:
        if not self.seo_friendly_path:
            return None
        return f"{DAFT_BASE_URL}{self.seo_friendly_path}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase dictionary written to the output file."""
        return {
            "id": self.id,
            "title": self.title,
            "propertyType": self.property_type,
            "image": self.image,
            "floorArea": self.floor_area,
            "point": self.point,
            "seoFriendlyPath": self.seo_friendly_path,
            "abbreviatedPrice": self.abbreviated_price,
            "publishDate": self.publish_date,
            "ber": self.ber,
            "lat": self.lat,
            "lng": self.lng,
            "price": self.price,
            "bedrooms": self.bedrooms,
            "bathrooms": self.bathrooms,
            "pricePerSquareMeter": self.price_per_square_meter,
            "distance": self.distance,
            "transport": self.transport.to_dict(),
            "store": self.store.to_dict() if self.store else None,
            "scoring": dict(self.scoring),
        }
