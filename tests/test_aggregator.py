"""Unit tests for snapshot aggregation and deduplication."""

import json
import sys
from pathlib import Path

# Add parent directory to path to import project modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from conftest import make_listing
from utils.aggregator import aggregate, load_batches


def write_snapshot(folder, name, properties):
    folder.mkdir(parents=True, exist_ok=True)
    (folder / name).write_text(json.dumps({"properties": properties}), encoding="utf-8")


class TestAggregate:
    """Test flattening and first-occurrence deduplication."""

    def test_duplicate_kept_once_first_seen(self):
        first = [make_listing(id=1, title="first"), make_listing(id=2)]
        second = [make_listing(id=1, title="second"), make_listing(id=3)]

        result = aggregate([first, second])

        assert [l["id"] for l in result] == [1, 2, 3]
        assert result[0]["title"] == "first"

    def test_preserves_discovery_order(self):
        result = aggregate([[make_listing(id=9), make_listing(id=4)], [make_listing(id=7)]])
        assert [l["id"] for l in result] == [9, 4, 7]

    def test_drops_empty_entries(self):
        assert aggregate([[None, {}, make_listing(id=5)]]) == [make_listing(id=5)]

    def test_drops_non_object_entries(self):
        batch = ["oops", 42, ["nested"], make_listing(id=6)]
        assert aggregate([batch]) == [make_listing(id=6)]

    def test_custom_key(self):
        batch = [{"ref": "a"}, {"ref": "a"}, {"ref": "b"}]
        assert len(aggregate([batch], key=lambda l: l["ref"])) == 2


class TestLoadBatches:
    """Test reading snapshot files."""

    def test_reads_every_snapshot_in_name_order(self, tmp_path):
        write_snapshot(tmp_path, "kildare.json", [make_listing(id=2)])
        write_snapshot(tmp_path, "dublin-city.json", [make_listing(id=1)])

        batches = list(load_batches(tmp_path))

        assert [[l["id"] for l in b] for b in batches] == [[1], [2]]

    def test_duplicates_across_snapshots(self, tmp_path):
        write_snapshot(tmp_path, "a.json", [make_listing(id=1, title="from a")])
        write_snapshot(tmp_path, "b.json", [make_listing(id=1, title="from b")])

        result = aggregate(load_batches(tmp_path))

        assert len(result) == 1
        assert result[0]["title"] == "from a"

    def test_malformed_snapshot_skipped(self, tmp_path, caplog):
        write_snapshot(tmp_path, "good.json", [make_listing(id=1)])
        (tmp_path / "bad.json").write_text("{oops", encoding="utf-8")

        batches = list(load_batches(tmp_path))

        assert len(batches) == 1
        assert "Skipping malformed snapshot" in caplog.text

    def test_truncated_utf8_snapshot_skipped(self, tmp_path, caplog):
        """A snapshot cut off inside the euro sign is skipped, not fatal."""
        write_snapshot(tmp_path, "good.json", [make_listing(id=1)])
        (tmp_path / "partial.json").write_bytes(b'{"properties": [{"abbreviatedPrice": "\xe2\x82')

        batches = list(load_batches(tmp_path))

        assert [[l["id"] for l in b] for b in batches] == [[1]]
        assert "Skipping malformed snapshot" in caplog.text

    def test_snapshot_with_junk_entries(self, tmp_path):
        write_snapshot(tmp_path, "a.json", ["oops", make_listing(id=1)])
        assert [l["id"] for l in aggregate(load_batches(tmp_path))] == [1]

    def test_snapshot_without_properties_skipped(self, tmp_path):
        (tmp_path / "odd.json").write_text("[1, 2, 3]", encoding="utf-8")
        assert list(load_batches(tmp_path)) == []

    def test_missing_folder_yields_nothing(self, tmp_path):
        assert list(load_batches(tmp_path / "nope")) == []
