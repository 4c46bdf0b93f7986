"""
infrastructure/table_store.py

Whole-table persistence for the result cache.

The table is a single JSON document on local storage. Every transaction
reads the complete table and a writable transaction writes the complete
table back when it ends without an exception and the table changed.
Writes go to a temporary file in the same directory first and are then
moved into place with os.replace, so a crash never leaves a half-written
table behind.

Format:
    {"version": 1, "results": {"3,4": "0x7d", ...}}

Concurrency:
    None. One process is expected to use a table at a time. Two processes
    writing concurrently lose one of the updates (last write wins).

Usage:
    store = TableStore(Path("data/ackermann_results.json"))

    with store.transaction() as table:
        table["3,4"] = "0x7d"

    with store.transaction(read_only=True) as table:
        value = table.get("3,4")
"""

import json
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, Union

from ackermann_exceptions import CacheCorruptedError, CacheReadError, CacheWriteError
from common.constants import RESULTS_FORMAT_VERSION
from component_1_logging_config import get_logger

logger = get_logger(__name__)


class TableStore:
    """
    File-backed table of string keys to string values.

    Open-or-create: a missing file reads as an empty table. The file and its
    parent directory are created by the first committed write.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def __repr__(self) -> str:
        return f"TableStore(path={str(self.path)!r})"

    @contextmanager
    def transaction(self, read_only: bool = False) -> Iterator[Dict[str, str]]:
        """
        Open a transaction on the whole table.

        Args:
            read_only: If True, changes to the yielded dict are discarded

        Yields:
            The complete table as a mutable dict

        Raises:
            CacheReadError: File exists but cannot be read
            CacheCorruptedError: File content is not a valid table
            CacheWriteError: Table could not be written back
        """
        table = self._read()
        snapshot = dict(table)
        yield table
        if not read_only and table != snapshot:
            self._write(table)

    def _read(self) -> Dict[str, str]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("Table not found, starting empty", extra={"path": str(self.path)})
            return {}
        except OSError as e:
            raise CacheReadError(
                "Result table could not be read",
                path=str(self.path),
                original_exception=e,
            ) from e
        except UnicodeDecodeError as e:
            raise CacheCorruptedError(
                "Result table is not valid UTF-8",
                path=str(self.path),
                original_exception=e,
            ) from e

        if not raw.strip():
            return {}

        try:
            document = json.loads(raw)
        except json.JSONDecodeError as e:
            raise CacheCorruptedError(
                "Result table is not valid JSON",
                path=str(self.path),
                original_exception=e,
            ) from e

        if not isinstance(document, dict):
            raise CacheCorruptedError(
                "Result table must be a JSON object", path=str(self.path)
            )

        version = document.get("version")
        if version != RESULTS_FORMAT_VERSION:
            raise CacheCorruptedError(
                f"Unsupported result table version: {version!r}",
                path=str(self.path),
            )

        results = document.get("results", {})
        if not isinstance(results, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in results.items()
        ):
            raise CacheCorruptedError(
                "Result table entries must map strings to strings",
                path=str(self.path),
            )

        return results

    def _write(self, table: Dict[str, str]) -> None:
        document = {"version": RESULTS_FORMAT_VERSION, "results": table}

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(document, handle, indent=2, sort_keys=True)
                    handle.flush()
                    os.fsync(handle.fileno())
                os.replace(tmp_name, self.path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.remove(tmp_name)
                raise
        except OSError as e:
            raise CacheWriteError(
                "Result table could not be written",
                path=str(self.path),
                original_exception=e,
            ) from e

        logger.debug(
            "Result table written",
            extra={"path": str(self.path), "entries": len(table)},
        )
