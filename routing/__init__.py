"""Routing service integration and nearest facility resolution."""

from .client import OpenRouteServiceClient, RouteSummary
from .resolver import NearestFacilityResolver, store_policy, transport_policy

__all__ = [
    "OpenRouteServiceClient",
    "RouteSummary",
    "NearestFacilityResolver",
    "transport_policy",
    "store_policy",
]
