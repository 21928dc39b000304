"""Daft.ie portal support."""

from .adapter import DaftAdapter

__all__ = ["DaftAdapter"]
