"""Shared fixtures for the test suite."""

import copy
import json
import sys
from pathlib import Path
from types import SimpleNamespace

# Add parent directory to path to import project modules
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from models.config import ScraperConfig
from models.constants import CITY_CENTRE
from models.facility import FacilityMatch

BASE_LISTING = {
    "id": 1001,
    "title": "12 Main Street, Dublin 4",
    "price": "€400,000",
    "abbreviatedPrice": "€400k",
    "floorArea": {"value": "120", "unit": "METRES_SQUARED"},
    "ber": {"rating": "B2"},
    "numBedrooms": "3 Bed",
    "numBathrooms": "2 Bath",
    "propertyType": "Semi-D",
    "point": {"type": "Point", "coordinates": [CITY_CENTRE[1], CITY_CENTRE[0]]},
    "media": {"images": [{"size300x200": "https://media.daft.ie/1001.jpg"}]},
    "publishDate": 1700000000000,
    "seoFriendlyPath": "/for-sale/semi-detached-house-12-main-street-dublin-4/1001",
}


def make_listing(**overrides):
    """Raw daft.ie listing with sensible defaults."""
    listing = copy.deepcopy(BASE_LISTING)
    listing.update(overrides)
    return listing


def make_page_html(listings):
    """Search results page embedding listings the way daft.ie does."""
    payload = {
        "props": {
            "pageProps": {
                "listings": [{"listing": listing} for listing in listings],
                "paging": {"totalResults": len(listings)},
            }
        }
    }
    return (
        "<html><head></head><body><div id=\"__next\"></div>"
        f'<script id="__NEXT_DATA__" type="application/json">{json.dumps(payload)}</script>'
        "</body></html>"
    )


class FakeCrawler:
    """Stands in for crawl4ai's AsyncWebCrawler, serving canned pages in order."""

    def __init__(self, pages):
        self.pages = list(pages)
        self.urls = []

    async def arun(self, url, **kwargs):
        self.urls.append(url)
        if not self.pages:
            return SimpleNamespace(success=False, html="", error_message="no more pages")
        html = self.pages.pop(0)
        return SimpleNamespace(success=True, html=html, error_message=None)


class StubResolver:
    """Resolver returning a fixed match and recording the properties asked for."""

    def __init__(self, match):
        self.match = match
        self.calls = []

    async def resolve(self, property_id, lat, lng):
        self.calls.append(property_id)
        return self.match


@pytest.fixture
def config(tmp_path):
    """Strict-profile configuration rooted in a temporary folder."""
    return ScraperConfig(
        cache_folder=tmp_path / "cache",
        output_folder=tmp_path / "output",
        routing_api_key="test-key",
        minimum_price=300000,
        maximum_price=600000,
        minimum_bedrooms=3,
        minimum_bathrooms=2,
        regions=["dublin-city"],
        delay_page=0,
        routing_rpm_limit=600000,
    )


@pytest.fixture
def walking_match():
    """Tara Street reached in a 5 minute walk."""
    return FacilityMatch(
        name="Tara Street",
        type="dart",
        lat=53.3471,
        lng=-6.2544,
        distance=0.4,
        duration=5,
        mode="foot-walking",
    )


@pytest.fixture
def store_match():
    """Supermarket 4 minutes away by car."""
    return FacilityMatch(
        name="Lidl Dun Laoghaire",
        type="supermarket",
        lat=53.2893,
        lng=-6.1364,
        distance=2.1,
        duration=4,
        mode="driving-car",
    )
