"""Aggregation and deduplication of collected listing snapshots."""

import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Iterator, List, Union

logger = logging.getLogger(__name__)


def load_batches(directory: Union[str, Path]) -> Iterator[List[Dict[str, Any]]]:
    """
    Yield the listing batch stored in each snapshot file of a folder.

    Files are read in filename order. Malformed snapshots are skipped with
    a warning.
    """
    for path in sorted(Path(directory).glob("*.json")):
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except ValueError as e:
            logger.warning(f"Skipping malformed snapshot {path}: {e}")
            continue

        properties = data.get("properties") if isinstance(data, dict) else None
        if not isinstance(properties, list):
            logger.warning(f"Skipping snapshot {path}: no 'properties' list")
            continue

        logger.debug(f"Loaded {len(properties)} listings from {path.name}")
        yield properties


def _listing_id(listing: Dict[str, Any]) -> Any:
    return listing.get("id")


def aggregate(
    batches: Iterable[List[Dict[str, Any]]],
    key: Callable[[Dict[str, Any]], Any] = _listing_id,
) -> List[Dict[str, Any]]:
    """
    Flatten batches and keep the first occurrence of each listing id.

    Order of first appearance is preserved. Empty and non-object entries
    are dropped.

    Args:
        batches: Listing batches, e.g. from load_batches()
        key: Returns the identifier of a listing
    """
    seen_ids = set()
    listings = []
    for batch in batches:
        for listing in batch:
            if not listing or not isinstance(listing, dict):
                logger.debug(f"Skipping malformed listing entry: {listing!r}")
                continue
            listing_id = key(listing)
            if listing_id in seen_ids:
                logger.debug(f"Skipping duplicate: {listing_id}")
                continue
            seen_ids.add(listing_id)
            listings.append(listing)

    return listings
