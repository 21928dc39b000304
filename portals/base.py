"""Abstract base class for portal-specific adapters."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List

from models.config import ScraperConfig


class PortalAdapter(ABC):
    """
    Abstract base class for real estate portal adapters.

    Each portal implements this interface to handle portal-specific logic
    like search URL building and extraction of the listings payload.

    Pagination, snapshot persistence and scoring remain in shared modules.
    """

    def __init__(self, config: ScraperConfig):
        """
        Initialize adapter with configuration.

        Args:
            config: Validated run configuration
        """
        self.config = config

    @abstractmethod
    def get_portal_name(self) -> str:
        """
        Return portal identifier.

        Returns:
            Portal name (e.g., "daft")
        """
        pass

    @abstractmethod
    def build_search_url(self, region: str, page: int = 1) -> str:
        """
        Build search URL for a listing results page.

        Args:
            region: Region slug (e.g., "dublin-city")
            page: Page number (1-indexed)

        Returns:
            Full search URL with filters and pagination
        """
        pass

    @abstractmethod
    def extract_listings(self, html: str) -> List[Dict[str, Any]]:
        """
        Extract raw listing records from a search results page.

        Args:
            html: Search results page HTML

        Returns:
            List of raw listing dicts, in page order

        Raises:
            ListingParseError: If the page holds no listings payload
        """
        pass

    @abstractmethod
    def extract_listing_id(self, listing: Dict[str, Any]) -> Any:
        """
        Return the unique identifier of a raw listing.

        Args:
            listing: Raw listing record
        """
        pass

    def get_search_crawler_config(self) -> Dict[str, Any]:
        """
        Get portal-specific crawler configuration for search results pages.

        Returns:
            Dict with crawl4ai configuration parameters

        Default implementation:
            {"wait_for": "css:body", "delay_before_return_html": 1.0}
        """
        return {
            "wait_for": "css:body",
            "delay_before_return_html": 1.0,
        }
