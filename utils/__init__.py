"""Utility modules for distances, caching, aggregation and reporting."""

from .aggregator import aggregate, load_batches
from .cache import FacilityCache
from .geo import distance, distance_from_reference
from .markdown_generator import MarkdownGenerator
from .top_n_tracker import TopNTracker

__all__ = [
    "aggregate",
    "load_batches",
    "FacilityCache",
    "distance",
    "distance_from_reference",
    "MarkdownGenerator",
    "TopNTracker",
]
