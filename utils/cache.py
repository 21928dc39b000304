"""Durable write-once cache of facility matches keyed by property id."""

import json
import logging
from pathlib import Path
from typing import Optional, Union

from models.facility import FacilityMatch

logger = logging.getLogger(__name__)


class FacilityCache:
    """
    One JSON file per property identifier.

    Entries are written once and read many times; nothing is ever
    invalidated or overwritten. Unreadable entries count as misses.
    """

    def __init__(self, directory: Union[str, Path]):
        """
        Initialize the cache.

        Args:
            directory: Folder holding the per-property JSON files
        """
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path(self, property_id: Union[int, str]) -> Path:
        return self.directory / f"{property_id}.json"

    def __contains__(self, property_id: Union[int, str]) -> bool:
        return self._path(property_id).exists()

    def get(self, property_id: Union[int, str]) -> Optional[FacilityMatch]:
        """Return the cached match for a property, or None on a miss."""
        path = self._path(property_id)
        if not path.exists():
            return None

        try:
            with open(path, "r", encoding="utf-8") as f:
                return FacilityMatch.from_dict(json.load(f))
        except (ValueError, TypeError, AttributeError) as e:
            logger.warning(f"Ignoring unreadable cache entry {path}: {e}")
            return None

    def put(self, property_id: Union[int, str], match: FacilityMatch) -> bool:
        """
        Persist a match unless an entry already exists.

        Returns:
            True if the entry was written, False if one was already present
        """
        path = self._path(property_id)
        if self.get(property_id) is not None:
            logger.debug(f"Cache entry {path} already exists, not overwriting")
            return False

        with open(path, "w", encoding="utf-8") as f:
            json.dump(match.to_dict(), f, indent=2, ensure_ascii=False)
        return True
