"""Paginated collection of raw listings for a region."""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, AsyncIterator, Dict, List, Union

from crawl4ai import AsyncWebCrawler

from models.constants import DEFAULT_MAX_PAGES, PAGE_SIZE
from models.errors import ScrapeError
from portals.base import PortalAdapter

logger = logging.getLogger(__name__)


class ListingCollector:
    """
    Walk a portal's search results page by page.

    A page with fewer than PAGE_SIZE listings is the last one. max_pages
    bounds the walk in case the upstream keeps returning full pages.
    """

    def __init__(
        self,
        adapter: PortalAdapter,
        crawler: AsyncWebCrawler,
        snapshot_dir: Union[str, Path],
        max_pages: int = DEFAULT_MAX_PAGES,
        delay_page: float = 1.0,
    ):
        """
        Initialize the collector.

        Args:
            adapter: Portal adapter building URLs and parsing pages
            crawler: Started crawl4ai crawler used to fetch search pages
            snapshot_dir: Folder receiving one snapshot file per region
            max_pages: Upper bound on pages fetched per region
            delay_page: Seconds to wait between page fetches
        """
        self.adapter = adapter
        self.crawler = crawler
        self.snapshot_dir = Path(snapshot_dir)
        self.max_pages = max_pages
        self.delay_page = delay_page

    async def fetch_page(self, region: str, page: int) -> List[Dict[str, Any]]:
        """
        Fetch and parse a single search results page.

        Raises:
            ScrapeError: If the page could not be fetched
            ListingParseError: If the page holds no listings payload
        """
        url = self.adapter.build_search_url(region, page)
        logger.info(f"Scraping {region} page {page}: {url}")

        result = await self.crawler.arun(
            url=url, **self.adapter.get_search_crawler_config()
        )
        if not result.success:
            raise ScrapeError(url, result.error_message or "unknown error")

        listings = self.adapter.extract_listings(result.html)
        logger.info(f"Found {len(listings)} listings on {region} page {page}")
        return listings

    async def iter_pages(self, region: str) -> AsyncIterator[List[Dict[str, Any]]]:
        """Yield the listings of each page until a short page or the page bound."""
        page = 1
        while True:
            listings = await self.fetch_page(region, page)
            yield listings

            if len(listings) < PAGE_SIZE:
                break

            if page >= self.max_pages:
                logger.warning(
                    f"Reached max page limit ({self.max_pages}) for {region}, "
                    f"results may be incomplete"
                )
                break

            page += 1
            if self.delay_page:
                await asyncio.sleep(self.delay_page)

    async def collect(self, region: str) -> List[Dict[str, Any]]:
        """
        Collect every listing of a region and write the region snapshot.

        Always fetches from the network. The snapshot is overwritten.
        """
        properties: List[Dict[str, Any]] = []
        async for listings in self.iter_pages(region):
            properties.extend(listings)

        self.snapshot_dir.mkdir(parents=True, exist_ok=True)
        snapshot_path = self.snapshot_dir / f"{region}.json"
        with open(snapshot_path, "w", encoding="utf-8") as f:
            json.dump({"properties": properties}, f, indent=2, ensure_ascii=False)

        logger.info(f"Collected {len(properties)} listings for {region} -> {snapshot_path}")
        return properties
