"""Eligibility filtering, enrichment and scoring of raw listings."""

import logging
import math
import re
from typing import Any, Dict, Optional, Tuple

from models.constants import BER_PATTERN, CITY_CENTRE, METRES_SQUARED
from models.property import ScoredProperty
from routing.resolver import NearestFacilityResolver
from scoring.profiles import ScoringProfile
from utils.geo import distance_from_reference

logger = logging.getLogger(__name__)


def parse_count(text: Optional[str]) -> int:
    """Digits of a free-text count ("3 Bed" -> 3). Absent or empty -> 0."""
    if not text:
        return 0
    digits = re.sub(r"[^0-9]", "", str(text))
    return int(digits) if digits else 0


def parse_price(text: Any) -> Optional[int]:
    """Digits of a formatted price ("€450,000" -> 450000), None without digits."""
    if text is None:
        return None
    digits = re.sub(r"[^0-9]", "", str(text))
    return int(digits) if digits else None


def parse_floor_area(floor_area: Any) -> Optional[float]:
    """Floor area value in square meters, None if absent, not numeric or not m2."""
    if not isinstance(floor_area, dict):
        return None
    if floor_area.get("unit") != METRES_SQUARED:
        return None
    try:
        value = float(floor_area.get("value"))
    except (TypeError, ValueError):
        return None
    if math.isnan(value) or value <= 0:
        return None
    return value


def parse_coordinates(point: Any) -> Optional[Tuple[float, float]]:
    """(lat, lng) from a GeoJSON point ([lng, lat] order), None if unusable."""
    if not isinstance(point, dict):
        return None
    coordinates = point.get("coordinates")
    if not isinstance(coordinates, (list, tuple)) or len(coordinates) < 2:
        return None
    try:
        lng, lat = float(coordinates[0]), float(coordinates[1])
    except (TypeError, ValueError):
        return None
    return lat, lng


def parse_ber(ber: Any) -> Optional[str]:
    """BER rating code such as "B2", None if absent or not a graded rating."""
    if not isinstance(ber, dict):
        return None
    rating = ber.get("rating")
    if not isinstance(rating, str) or not re.match(BER_PATTERN, rating):
        return None
    return rating


def first_image(media: Any) -> Optional[Dict[str, Any]]:
    if not isinstance(media, dict):
        return None
    images = media.get("images")
    if not images:
        return None
    return images[0]


class PropertyScorer:
    """Turn raw listings into scored properties, or reject them."""

    def __init__(
        self,
        profile: ScoringProfile,
        transport_resolver: NearestFacilityResolver,
        store_resolver: Optional[NearestFacilityResolver] = None,
        reference_point: Tuple[float, float] = CITY_CENTRE,
    ):
        """
        Initialize the scorer.

        Args:
            profile: Scoring formula (carries the run configuration)
            transport_resolver: Nearest transit station resolver
            store_resolver: Nearest store resolver, used when the profile
                scores store access
            reference_point: (lat, lng) the distance factor is measured from
        """
        self.profile = profile
        self.config = profile.config
        self.transport_resolver = transport_resolver
        self.store_resolver = store_resolver
        self.reference_point = reference_point

    def _reject(self, listing: Dict[str, Any], reason: str) -> None:
        logger.debug(f"Skipping listing {listing.get('id')}: {reason}")
        return None

    async def score(self, listing: Dict[str, Any]) -> Optional[ScoredProperty]:
        """
        Filter, enrich and score one raw listing.

        Returns:
            The scored property, or None if the listing is not eligible
        """
        price = parse_price(listing.get("price"))
        if price is None or price <= 0:
            return self._reject(listing, "no price")
        if price < self.config.minimum_price or price > self.config.maximum_price:
            return self._reject(listing, f"price {price} outside range")

        floor_area_value = parse_floor_area(listing.get("floorArea"))
        if floor_area_value is None:
            return self._reject(listing, "no floor area in square meters")
        if not self.profile.accepts_floor_area(floor_area_value):
            return self._reject(listing, f"floor area {floor_area_value} m2 outside bounds")

        rating = parse_ber(listing.get("ber"))
        if rating is None:
            return self._reject(listing, "no BER rating")

        image = first_image(listing.get("media"))
        if image is None:
            return self._reject(listing, "no images")

        coordinates = parse_coordinates(listing.get("point"))
        if coordinates is None:
            return self._reject(listing, "no location")
        lat, lng = coordinates

        ber_points = self.profile.ber_score(rating)
        if ber_points is None:
            return self._reject(listing, f"BER {rating} not accepted")

        property_id = listing.get("id")
        transport = await self.transport_resolver.resolve(property_id, lat, lng)
        if transport is None:
            return self._reject(listing, "no transport nearby")

        store = None
        if self.profile.uses_store and self.store_resolver is not None:
            store = await self.store_resolver.resolve(property_id, lat, lng)

        floor_area = int(floor_area_value)
        bedrooms = parse_count(listing.get("numBedrooms"))
        bathrooms = parse_count(listing.get("numBathrooms"))
        price_per_sqm = math.ceil(price / floor_area_value)
        distance = distance_from_reference(lat, lng, self.reference_point)
        property_type = listing.get("propertyType")

        scoring: Dict[str, int] = {
            "ber": ber_points,
            "bedrooms": self.profile.bedrooms_score(bedrooms),
            "bathrooms": self.profile.bathrooms_score(bathrooms),
            "floorArea": self.profile.floor_area_score(floor_area),
            "distance": self.profile.distance_score(distance),
            "transport": self.profile.transport_score(transport.duration or 0),
        }
        if self.profile.uses_store:
            scoring["store"] = self.profile.store_score(store.duration or 0) if store else 0
        scoring["price"] = self.profile.price_score(price)
        scoring["pricePerSquareMeter"] = self.profile.price_per_sqm_score(price_per_sqm)
        scoring["type"] = self.profile.type_score(property_type)

        # Must stay last: total covers every factor above
        scoring["total"] = sum(scoring.values())

        return ScoredProperty(
            id=property_id,
            title=listing.get("title"),
            property_type=property_type,
            image=image.get("size300x200"),
            point=listing.get("point"),
            seo_friendly_path=listing.get("seoFriendlyPath"),
            abbreviated_price=listing.get("abbreviatedPrice"),
            publish_date=listing.get("publishDate"),
            ber=rating,
            lat=lat,
            lng=lng,
            price=price,
            floor_area=floor_area,
            bedrooms=bedrooms,
            bathrooms=bathrooms,
            price_per_square_meter=price_per_sqm,
            distance=distance,
            transport=transport,
            store=store,
            scoring=scoring,
        )
