"""Daft.ie portal adapter."""

import json
import logging
import re
from typing import Any, Dict, List
from urllib.parse import urlencode

from models.constants import DAFT_BASE_URL, NEXT_DATA_PATTERN, PAGE_SIZE
from models.errors import ListingParseError
from portals.base import PortalAdapter

logger = logging.getLogger(__name__)


class DaftAdapter(PortalAdapter):
    """Adapter for the daft.ie Irish property portal."""

    def get_portal_name(self) -> str:
        """Return portal identifier."""
        return "daft"

    def build_search_url(self, region: str, page: int = 1) -> str:
        """Build daft.ie property-for-sale search URL for a region and page."""
        base_url = f"{DAFT_BASE_URL}/property-for-sale/{region}/{self.config.property_category}"

        params: Dict[str, Any] = {}

        # Floor filters from configuration
        if self.config.minimum_price is not None:
            params["salePrice_from"] = self.config.minimum_price
        if self.config.maximum_price is not None:
            params["salePrice_to"] = self.config.maximum_price
        if self.config.minimum_bedrooms is not None:
            params["numBeds_from"] = self.config.minimum_bedrooms
        if self.config.minimum_bathrooms is not None:
            params["numBaths_from"] = self.config.minimum_bathrooms

        # Newest first, fixed page size, offset pagination
        params["sort"] = "publishDateDesc"
        params["pageSize"] = PAGE_SIZE
        params["from"] = (page - 1) * PAGE_SIZE

        return f"{base_url}?{urlencode(params)}"

    def extract_listings(self, html: str) -> List[Dict[str, Any]]:
        """Extract listing records from the embedded __NEXT_DATA__ JSON block."""
        match = re.search(NEXT_DATA_PATTERN, html or "", re.DOTALL)
        if not match:
            raise ListingParseError("No __NEXT_DATA__ block found in search page")

        try:
            payload = json.loads(match.group(1))
            listings = payload["props"]["pageProps"]["listings"]
        except json.JSONDecodeError as e:
            raise ListingParseError(f"Invalid JSON in __NEXT_DATA__ block: {e}") from e
        except (KeyError, TypeError) as e:
            raise ListingParseError(f"Unexpected __NEXT_DATA__ structure: missing {e}") from e

        if not isinstance(listings, list):
            raise ListingParseError("'listings' in __NEXT_DATA__ is not a list")

        return [item.get("listing") for item in listings if isinstance(item, dict)]

    def extract_listing_id(self, listing: Dict[str, Any]) -> Any:
        """Daft listings carry a numeric id."""
        return listing.get("id")
