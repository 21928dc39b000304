"""Exceptions raised by the scraping and scoring pipeline."""


class ScraperError(Exception):
    """Base class for all pipeline errors."""


class ConfigError(ScraperError):
    """Configuration is missing or invalid."""


class ScrapeError(ScraperError):
    """A listing search page could not be fetched."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to fetch {url}: {reason}")


class ListingParseError(ScraperError):
    """A search page did not contain a usable listings payload."""


class RoutingError(ScraperError):
    """The routing service answered without a usable route summary."""
