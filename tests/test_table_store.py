"""
tests/test_table_store.py

Tests for whole-table persistence (infrastructure/table_store.py).

Tests:
- Open-or-create semantics
- Commit on success, discard on exception or read-only
- Atomic write and error mapping
- Rejection of corrupted tables
"""

import json
import os

import pytest

from ackermann_exceptions import CacheCorruptedError, CacheReadError, CacheWriteError
from common.constants import RESULTS_FORMAT_VERSION
from infrastructure.table_store import TableStore


@pytest.fixture
def store(tmp_path):
    """Fixture: TableStore in a not yet existing subdirectory"""
    return TableStore(tmp_path / "data" / "results.json")


class TestOpenOrCreate:
    def test_missing_file_reads_empty(self, store):
        with store.transaction(read_only=True) as table:
            assert table == {}
        assert not store.path.exists()

    def test_first_write_creates_file_and_directory(self, store):
        with store.transaction() as table:
            table["2,2"] = "0x7"

        document = json.loads(store.path.read_text(encoding="utf-8"))
        assert document == {"version": RESULTS_FORMAT_VERSION, "results": {"2,2": "0x7"}}

    def test_empty_file_reads_empty(self, store):
        store.path.parent.mkdir(parents=True)
        store.path.write_text("", encoding="utf-8")

        with store.transaction(read_only=True) as table:
            assert table == {}


class TestTransactions:
    def test_whole_table_round_trip(self, store):
        with store.transaction() as table:
            table["0,0"] = "0x1"
            table["1,1"] = "0x3"

        with store.transaction() as table:
            table["2,2"] = "0x7"

        with store.transaction(read_only=True) as table:
            assert table == {"0,0": "0x1", "1,1": "0x3", "2,2": "0x7"}

    def test_read_only_discards_changes(self, store):
        with store.transaction(read_only=True) as table:
            table["2,2"] = "0x7"

        assert not store.path.exists()

    def test_unchanged_table_is_not_written(self, store):
        with store.transaction() as table:
            table.get("2,2")

        assert not store.path.exists()

    def test_exception_discards_changes(self, store):
        with store.transaction() as table:
            table["0,0"] = "0x1"

        with pytest.raises(RuntimeError):
            with store.transaction() as table:
                table["1,1"] = "0x3"
                raise RuntimeError("abort")

        with store.transaction(read_only=True) as table:
            assert table == {"0,0": "0x1"}


class TestErrors:
    def test_invalid_json(self, store):
        store.path.parent.mkdir(parents=True)
        store.path.write_text("{not json", encoding="utf-8")

        with pytest.raises(CacheCorruptedError) as exc_info:
            with store.transaction(read_only=True):
                pass
        assert exc_info.value.context["path"] == str(store.path)

    def test_invalid_utf8(self, store):
        """Test: undecodable bytes are a corrupted table, not a crash"""
        store.path.parent.mkdir(parents=True)
        store.path.write_bytes(b"\xff\xfe\x00garbage")

        with pytest.raises(CacheCorruptedError) as exc_info:
            with store.transaction(read_only=True):
                pass
        assert isinstance(exc_info.value.original_exception, UnicodeDecodeError)
        assert store.path.read_bytes() == b"\xff\xfe\x00garbage"

    def test_unknown_version(self, store):
        store.path.parent.mkdir(parents=True)
        store.path.write_text(json.dumps({"version": 99, "results": {}}), encoding="utf-8")

        with pytest.raises(CacheCorruptedError, match="version"):
            with store.transaction(read_only=True):
                pass

    def test_non_string_values(self, store):
        store.path.parent.mkdir(parents=True)
        store.path.write_text(
            json.dumps({"version": RESULTS_FORMAT_VERSION, "results": {"2,2": 7}}),
            encoding="utf-8",
        )

        with pytest.raises(CacheCorruptedError):
            with store.transaction(read_only=True):
                pass

    def test_directory_is_unreadable(self, tmp_path):
        store = TableStore(tmp_path)

        with pytest.raises(CacheReadError):
            with store.transaction(read_only=True):
                pass

    def test_failed_replace_raises_write_error(self, store, monkeypatch):
        def failing_replace(src, dst):
            raise PermissionError("read-only filesystem")

        monkeypatch.setattr(os, "replace", failing_replace)

        with pytest.raises(CacheWriteError) as exc_info:
            with store.transaction() as table:
                table["2,2"] = "0x7"

        assert isinstance(exc_info.value.original_exception, PermissionError)
        assert not store.path.exists()
        # temporary file was cleaned up
        assert list(store.path.parent.iterdir()) == []
