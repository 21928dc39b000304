"""Efficient top-N property tracking using a min-heap."""

import heapq
import itertools
from typing import List, Tuple

from models.property import ScoredProperty


class TopNTracker:
    """
    Track top N properties by scoring total using a min-heap.

    The heap root is the weakest tracked property, so a new candidate only
    has to beat it. Ties keep the property seen first.
    """

    def __init__(self, n: int):
        """
        Initialize tracker for top N properties.

        Args:
            n: Number of top properties to track
        """
        self.n = n
        self.heap: List[Tuple[int, int, ScoredProperty]] = []
        # Earlier properties win ties: larger tiebreak ranks higher
        self._order = itertools.count(0, -1)

    def add(self, prop: ScoredProperty) -> bool:
        """
        Add property to top N tracker.

        Returns:
            True if property made it into top N, False otherwise
        """
        if self.n <= 0:
            return False

        entry = (prop.total, next(self._order), prop)
        if len(self.heap) < self.n:
            heapq.heappush(self.heap, entry)
            return True

        if entry[:2] > self.heap[0][:2]:
            heapq.heapreplace(self.heap, entry)
            return True
        return False

    def get_sorted_properties(self) -> List[ScoredProperty]:
        """Top N properties, highest total first."""
        ranked = sorted(self.heap, key=lambda e: (e[0], e[1]), reverse=True)
        return [prop for _, _, prop in ranked]

    def __len__(self) -> int:
        return len(self.heap)
