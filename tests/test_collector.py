"""Unit tests for the daft.ie adapter and the paginated listing collector."""

import asyncio
import json
import sys
from pathlib import Path
from urllib.parse import parse_qs, urlparse

# Add parent directory to path to import project modules
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from conftest import FakeCrawler, make_listing, make_page_html
from models.errors import ListingParseError, ScrapeError
from portals import get_adapter
from portals.collector import ListingCollector
from portals.daft.adapter import DaftAdapter


def listings(count, start=0):
    return [make_listing(id=start + i) for i in range(count)]


def collect(collector, region="dublin-city"):
    return asyncio.run(collector.collect(region))


@pytest.fixture
def adapter(config):
    return DaftAdapter(config)


class TestDaftAdapter:
    """Test URL building and payload extraction."""

    def test_factory_returns_daft_adapter(self, config):
        adapter = get_adapter(config)
        assert isinstance(adapter, DaftAdapter)
        assert adapter.get_portal_name() == "daft"

    def test_unknown_portal(self, config):
        config.portal = "myhome"
        with pytest.raises(ValueError):
            get_adapter(config)

    def test_search_url_filters(self, adapter):
        url = adapter.build_search_url("dublin-city", page=1)
        parsed = urlparse(url)
        params = parse_qs(parsed.query)

        assert parsed.netloc == "www.daft.ie"
        assert parsed.path == "/property-for-sale/dublin-city/houses"
        assert params["salePrice_from"] == ["300000"]
        assert params["salePrice_to"] == ["600000"]
        assert params["numBeds_from"] == ["3"]
        assert params["numBaths_from"] == ["2"]
        assert params["sort"] == ["publishDateDesc"]
        assert params["pageSize"] == ["20"]
        assert params["from"] == ["0"]

    def test_search_url_pagination_offset(self, adapter):
        params = parse_qs(urlparse(adapter.build_search_url("kildare", page=3)).query)
        assert params["from"] == ["40"]

    def test_search_url_without_room_filters(self, config):
        config.minimum_bedrooms = None
        config.minimum_bathrooms = None
        params = parse_qs(urlparse(DaftAdapter(config).build_search_url("kildare")).query)
        assert "numBeds_from" not in params
        assert "numBaths_from" not in params

    def test_extract_listings(self, adapter):
        html = make_page_html(listings(3))
        extracted = adapter.extract_listings(html)

        assert [l["id"] for l in extracted] == [0, 1, 2]
        assert extracted[0]["ber"] == {"rating": "B2"}

    def test_missing_payload_block(self, adapter):
        with pytest.raises(ListingParseError):
            adapter.extract_listings("<html><body>Access denied</body></html>")

    def test_unparseable_payload(self, adapter):
        html = '<script id="__NEXT_DATA__" type="application/json">{"props": </script>'
        with pytest.raises(ListingParseError):
            adapter.extract_listings(html)

    def test_unexpected_payload_structure(self, adapter):
        html = '<script id="__NEXT_DATA__" type="application/json">{"props": {}}</script>'
        with pytest.raises(ListingParseError):
            adapter.extract_listings(html)

    def test_extract_listing_id(self, adapter):
        assert adapter.extract_listing_id(make_listing(id=555)) == 555


class TestListingCollector:
    """Test pagination termination and snapshot writing."""

    def _collector(self, adapter, config, pages, max_pages=50):
        crawler = FakeCrawler([make_page_html(page) for page in pages])
        collector = ListingCollector(
            adapter, crawler, config.listings_folder, max_pages=max_pages, delay_page=0
        )
        return collector, crawler

    def test_full_page_triggers_next_page(self, adapter, config):
        """20 listings on page 1 means page 2 is fetched."""
        collector, crawler = self._collector(
            adapter, config, [listings(20), listings(5, start=20)]
        )

        result = collect(collector)

        assert len(crawler.urls) == 2
        assert "from=20" in crawler.urls[1]
        assert len(result) == 25

    def test_short_page_stops(self, adapter, config):
        """19 listings on page 1 means no page 2."""
        collector, crawler = self._collector(adapter, config, [listings(19), listings(20)])

        result = collect(collector)

        assert len(crawler.urls) == 1
        assert len(result) == 19

    def test_empty_page_stops(self, adapter, config):
        collector, crawler = self._collector(adapter, config, [[]])
        assert collect(collector) == []
        assert len(crawler.urls) == 1

    def test_max_pages_bound(self, adapter, config, caplog):
        """An always-full upstream stops at max_pages."""
        pages = [listings(20, start=i * 20) for i in range(5)]
        collector, crawler = self._collector(adapter, config, pages, max_pages=3)

        result = collect(collector)

        assert len(crawler.urls) == 3
        assert len(result) == 60
        assert "Reached max page limit" in caplog.text

    def test_iter_pages_is_lazy(self, adapter, config):
        """Pages are fetched only as they are consumed."""
        collector, crawler = self._collector(adapter, config, [listings(20), listings(20)])

        async def first_page():
            pages = collector.iter_pages("dublin-city")
            page = await pages.__anext__()
            await pages.aclose()
            return page

        assert len(asyncio.run(first_page())) == 20
        assert len(crawler.urls) == 1

    def test_snapshot_written(self, adapter, config):
        collector, _ = self._collector(adapter, config, [listings(2)])

        collect(collector, region="fingal-dublin")

        snapshot = config.listings_folder / "fingal-dublin.json"
        data = json.loads(snapshot.read_text(encoding="utf-8"))
        assert [l["id"] for l in data["properties"]] == [0, 1]

    def test_collect_always_fetches(self, adapter, config):
        """An existing snapshot is not used as a fetch cache."""
        config.listings_folder.mkdir(parents=True)
        (config.listings_folder / "dublin-city.json").write_text(
            json.dumps({"properties": listings(1, start=900)}), encoding="utf-8"
        )
        collector, crawler = self._collector(adapter, config, [listings(3)])

        result = collect(collector)

        assert len(crawler.urls) == 1
        assert [l["id"] for l in result] == [0, 1, 2]

    def test_failed_fetch_raises(self, adapter, config):
        collector, _ = self._collector(adapter, config, [])
        with pytest.raises(ScrapeError):
            collect(collector)

    def test_malformed_page_raises(self, adapter, config):
        crawler = FakeCrawler(["<html>captcha</html>"])
        collector = ListingCollector(adapter, crawler, config.listings_folder, delay_page=0)
        with pytest.raises(ListingParseError):
            collect(collector)
