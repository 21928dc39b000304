"""openrouteservice directions client."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from models.constants import DEFAULT_ROUTING_RPM_LIMIT, RoutingProfile
from models.errors import RoutingError

logger = logging.getLogger(__name__)


@dataclass
class RouteSummary:
    """Length and travel time of a routed path."""

    distance_m: float
    duration_s: float


class OpenRouteServiceClient:
    """Client for the openrouteservice directions API with a fixed-delay throttle."""

    DEFAULT_BASE_URL = "https://api.openrouteservice.org"
    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        api_key: str,
        rpm_limit: int = DEFAULT_ROUTING_RPM_LIMIT,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the routing client.

        Args:
            api_key: openrouteservice API key
            rpm_limit: Requests per minute allowed by the API plan
            base_url: API base URL
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.api_key = api_key
        self.rpm_limit = rpm_limit
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.request_count = 0
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout, connect=10.0),
            transport=transport,
        )

    @property
    def request_delay(self) -> float:
        """Seconds to wait after each request to stay under the RPM budget."""
        return 60.0 / self.rpm_limit

    async def route(
        self,
        profile: RoutingProfile,
        start_lat: float,
        start_lng: float,
        end_lat: float,
        end_lng: float,
    ) -> RouteSummary:
        """
        Fetch the route summary between two points.

        HTTP and connection errors propagate to the caller.

        Raises:
            httpx.HTTPError: On transport failure or non-2xx status
            RoutingError: If the response holds no route summary
        """
        url = f"{self.base_url}/v2/directions/{profile.value}"
        params = {
            "api_key": self.api_key,
            "start": f"{start_lng},{start_lat}",
            "end": f"{end_lng},{end_lat}",
        }

        response = await self._client.get(url, params=params)
        self.request_count += 1
        response.raise_for_status()

        try:
            summary = response.json()["features"][0]["properties"]["summary"]
            return RouteSummary(
                distance_m=float(summary["distance"]),
                duration_s=float(summary["duration"]),
            )
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise RoutingError(
                f"No route summary in {profile.value} response: {e}"
            ) from e

    async def throttle(self) -> None:
        """Pause long enough to respect the requests-per-minute limit."""
        await asyncio.sleep(self.request_delay)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "OpenRouteServiceClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
