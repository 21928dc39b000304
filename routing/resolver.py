"""Nearest facility resolution with routed distance and durable caching."""

import logging
from typing import Callable, List, Optional, Sequence

from models.constants import (
    COMMUTER_MAX_DISTANCE_KM,
    WALKING_MAX_DISTANCE_KM,
    RoutingProfile,
)
from models.facility import Facility, FacilityMatch
from routing.client import OpenRouteServiceClient
from utils.cache import FacilityCache
from utils.geo import distance
from utils.rounding import round_half_up

logger = logging.getLogger(__name__)

RoutingPolicy = Callable[[FacilityMatch], Optional[RoutingProfile]]


def transport_policy(nearest: FacilityMatch) -> Optional[RoutingProfile]:
    """
    Pick the travel mode to a transit station, or None if it is out of reach.

    Commuter stations are driven to within 10 km; any station within 2 km
    is walked to.
    """
    if nearest.is_commuter and nearest.distance <= COMMUTER_MAX_DISTANCE_KM:
        return RoutingProfile.DRIVING
    if nearest.distance <= WALKING_MAX_DISTANCE_KM:
        return RoutingProfile.WALKING
    return None


def store_policy(nearest: FacilityMatch) -> Optional[RoutingProfile]:
    """Stores are always driven to, whatever the distance."""
    return RoutingProfile.DRIVING


class NearestFacilityResolver:
    """Resolve a property to its nearest facility, routed and cached."""

    def __init__(
        self,
        facilities: Sequence[Facility],
        cache: FacilityCache,
        client: OpenRouteServiceClient,
        policy: RoutingPolicy = transport_policy,
        label: str = "facility",
    ):
        """
        Initialize the resolver.

        Args:
            facilities: Static candidate list (stations or stores)
            cache: Durable match cache keyed by property id
            client: Routing service client
            policy: Chooses the travel mode for the nearest candidate
            label: Facility kind used in log messages
        """
        self.facilities: List[Facility] = list(facilities)
        self.cache = cache
        self.client = client
        self.policy = policy
        self.label = label

    def find_nearest(self, lat: float, lng: float) -> Optional[FacilityMatch]:
        """Nearest facility as the crow flies, or None without candidates."""
        if not self.facilities:
            return None

        nearest = min(
            self.facilities,
            key=lambda facility: distance(lat, lng, facility.lat, facility.lng),
        )
        return FacilityMatch.from_facility(
            nearest, distance(lat, lng, nearest.lat, nearest.lng)
        )

    async def resolve(
        self, property_id: int, lat: float, lng: float
    ) -> Optional[FacilityMatch]:
        """
        Resolve the nearest facility for a property.

        A cached match is returned as-is. Otherwise the nearest facility is
        routed if the policy allows it, then cached. Routing errors propagate.

        Returns:
            The routed match, or None if no facility is eligible
        """
        cached = self.cache.get(property_id)
        if cached is not None:
            return cached

        logger.info(
            f"No cache found for property {property_id}, calculating closest {self.label}"
        )

        nearest = self.find_nearest(lat, lng)
        if nearest is None:
            logger.warning(f"No {self.label} candidates configured")
            return None

        profile = self.policy(nearest)
        if profile is None:
            logger.debug(
                f"No eligible {self.label} for property {property_id}: "
                f"{nearest.name} is {nearest.distance:.1f} km away"
            )
            return None

        try:
            summary = await self.client.route(
                profile, lat, lng, nearest.lat, nearest.lng
            )
        finally:
            await self.client.throttle()

        nearest.distance = round(summary.distance_m / 1000, 1)
        nearest.duration = round_half_up(summary.duration_s / 60)
        nearest.mode = profile.value

        logger.info(
            f"Closest {self.label} for {property_id}: {nearest.name} ({nearest.type}), "
            f"{nearest.duration} min by {profile.value}"
        )
        self.cache.put(property_id, nearest)
        return nearest
