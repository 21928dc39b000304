"""Portal adapter factory and exports."""

import logging

from models.config import ScraperConfig
from portals.base import PortalAdapter

logger = logging.getLogger(__name__)


def get_adapter(config: ScraperConfig) -> PortalAdapter:
    """
    Factory function to get appropriate portal adapter.

    Args:
        config: Validated run configuration

    Returns:
        Portal adapter instance

    Raises:
        ValueError: If portal is not supported

    Example:
        >>> adapter = get_adapter(config)
        >>> print(adapter.get_portal_name())
        "daft"
    """
    portal = (config.portal or "daft").lower()

    if portal == "daft":
        from portals.daft.adapter import DaftAdapter

        logger.info("Initializing Daft adapter")
        return DaftAdapter(config)

    else:
        raise ValueError(
            f"Unsupported portal: {portal}. Supported portals: 'daft'"
        )


__all__ = ["get_adapter", "PortalAdapter"]
