"""Daft.ie property scraper with proximity and affordability scoring."""

import argparse
import asyncio
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from crawl4ai import AsyncWebCrawler

from models.config import ScraperConfig, load_config
from models.errors import ScraperError
from models.facility import load_facilities
from models.property import ScoredProperty
from portals import get_adapter
from portals.collector import ListingCollector
from routing.client import OpenRouteServiceClient
from routing.resolver import NearestFacilityResolver, store_policy, transport_policy
from scoring.profiles import get_profile
from scoring.scorer import PropertyScorer
from utils.aggregator import aggregate, load_batches
from utils.cache import FacilityCache
from utils.markdown_generator import MarkdownGenerator
from utils.top_n_tracker import TopNTracker

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Routing requests are logged by the resolver already
logging.getLogger("httpx").setLevel(logging.WARNING)


class PropertyRanker:
    """Collect listings, score them and write the ranked dataset."""

    def __init__(self, config: ScraperConfig):
        """
        Initialize the ranker with configuration.

        Args:
            config: Validated run configuration
        """
        self.config = config
        self.run_timestamp = datetime.now()
        self.adapter = get_adapter(config)
        self.profile = get_profile(config)

        self.transports = load_facilities(config.transports_file)
        self.stores = load_facilities(config.stores_file) if self.profile.uses_store else []
        logger.info(
            f"Loaded {len(self.transports)} transport stations and {len(self.stores)} stores"
        )

        self.top_n_tracker = TopNTracker(config.summary_top_n)
        self.md_generator = MarkdownGenerator(output_dir=str(config.output_folder))

    def prepare_folders(self) -> None:
        """Create cache and output folders."""
        for folder in (
            self.config.cache_folder,
            self.config.listings_folder,
            self.config.output_folder,
        ):
            folder.mkdir(parents=True, exist_ok=True)

    async def collect(self) -> None:
        """Collect every configured region and refresh its snapshot."""
        async with AsyncWebCrawler(headless=True, verbose=False) as crawler:
            collector = ListingCollector(
                self.adapter,
                crawler,
                self.config.listings_folder,
                max_pages=self.config.max_pages,
                delay_page=self.config.delay_page,
            )
            for region in self.config.regions:
                await collector.collect(region)

    def load_candidates(self) -> List[Dict[str, Any]]:
        """All distinct listings from the region snapshots."""
        listings = aggregate(
            load_batches(self.config.listings_folder),
            key=self.adapter.extract_listing_id,
        )
        logger.info(f"{len(listings)} distinct listings in cache")
        return listings

    async def score(self, listings: List[Dict[str, Any]]) -> List[ScoredProperty]:
        """Score listings one after the other, in discovery order."""
        async with OpenRouteServiceClient(
            self.config.routing_api_key, rpm_limit=self.config.routing_rpm_limit
        ) as client:
            transport_resolver = NearestFacilityResolver(
                self.transports,
                FacilityCache(self.config.transports_cache_folder),
                client,
                policy=transport_policy,
                label="transport",
            )
            store_resolver = None
            if self.profile.uses_store:
                store_resolver = NearestFacilityResolver(
                    self.stores,
                    FacilityCache(self.config.stores_cache_folder),
                    client,
                    policy=store_policy,
                    label="store",
                )

            scorer = PropertyScorer(
                self.profile,
                transport_resolver,
                store_resolver,
                reference_point=self.config.reference_point,
            )

            results = []
            for listing in listings:
                scored = await scorer.score(listing)
                if scored:
                    results.append(scored)
                    self.top_n_tracker.add(scored)

            logger.info(f"Routing requests made: {client.request_count}")
            return results

    def write_output(self, properties: List[ScoredProperty]) -> Path:
        """Write the scored properties as a JSON array."""
        output_path = self.config.output_folder / self.config.output_filename
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump([p.to_dict() for p in properties], f, indent=2, ensure_ascii=False)
        return output_path

    def write_summary(self, properties: List[ScoredProperty], candidate_count: int) -> None:
        """Write summary.md with the top N properties."""
        summary_path = self.md_generator.generate_summary_file(
            top_properties=self.top_n_tracker.get_sorted_properties(),
            all_properties=properties,
            run_timestamp=self.run_timestamp,
            regions=self.config.regions,
            profile=self.profile.name,
            candidate_count=candidate_count,
        )
        logger.info(f"Summary saved: {summary_path}")

    async def run(self, skip_collection: bool = False) -> List[ScoredProperty]:
        """
        Run the full pipeline.

        Args:
            skip_collection: Score from existing snapshots without scraping

        Returns:
            Scored properties in discovery order
        """
        self.prepare_folders()

        if skip_collection:
            logger.info("Skipping collection, scoring cached listings")
        else:
            await self.collect()

        listings = self.load_candidates()
        properties = await self.score(listings)

        output_path = self.write_output(properties)
        logger.info(f"{len(properties)} properties listed -> {output_path}")

        if self.config.generate_summary:
            self.write_summary(properties, len(listings))

        return properties


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Scrape daft.ie listings and score them by location and value."
    )
    parser.add_argument(
        "mode",
        nargs="?",
        choices=["skip"],
        help="'skip' scores cached listings without scraping",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config.json (default: repository config.json)",
    )
    return parser.parse_args(argv)


async def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the property ranker."""
    args = parse_args(argv)
    try:
        config = load_config(args.config)
        ranker = PropertyRanker(config)
        properties = await ranker.run(skip_collection=args.mode == "skip")
    except ScraperError as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1
    except Exception:
        logger.exception("Unexpected error")
        return 1

    logger.info(f"Run complete! {len(properties)} properties scored.")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
