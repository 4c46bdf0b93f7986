"""
component_5_result_cache.py

Persistent result cache for Ackermann values.

Features:
- Results survive across process invocations (whole-table JSON store)
- Entries are immutable: storing an already stored pair is a no-op
- In-process LRU layer of decoded results in front of the table
- Hit/miss/store statistics per cache instance

Architecture:
- TableStore holds the serialized table ("m,n" -> hex string)
- cachetools.LRUCache holds decoded integers for this process
- NullResultCache stands in when caching is disabled or unavailable

Values are stored as hexadecimal strings. Conversion of very large integers
to and from decimal text is limited by the interpreter, conversion to hex
is not.

Usage:
    from component_5_result_cache import PersistentResultCache

    cache = PersistentResultCache("data/ackermann_results.json")
    cache.store(InputPair(3, 3), 61)
    cache.lookup(InputPair(3, 3))  # 61
    cache.lookup(InputPair(3, 4))  # None
"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Union

from cachetools import LRUCache

from ackermann_exceptions import CacheCorruptedError, InvalidInputError
from common.constants import CACHE_KEY_SEPARATOR, SESSION_CACHE_MAXSIZE
from component_1_logging_config import get_logger
from infrastructure.interfaces import BaseResultCache, InputPair
from infrastructure.table_store import TableStore

logger = get_logger(__name__)


# ============================================================================
# Serialization
# ============================================================================


def encode_key(pair: InputPair) -> str:
    """Serialized cache key, e.g. InputPair(3, 4) -> "3,4" """
    return f"{pair.m}{CACHE_KEY_SEPARATOR}{pair.n}"


def decode_key(key: str) -> InputPair:
    """
    Parse a serialized cache key back into an InputPair.

    Raises:
        CacheCorruptedError: key is not of the form "m,n"
    """
    parts = key.split(CACHE_KEY_SEPARATOR)
    if len(parts) != 2:
        raise CacheCorruptedError(f"Malformed cache key: {key!r}")
    try:
        return InputPair(int(parts[0]), int(parts[1]))
    except (ValueError, InvalidInputError) as e:
        raise CacheCorruptedError(
            f"Malformed cache key: {key!r}", original_exception=e
        ) from e


def encode_value(result: int) -> str:
    return hex(result)


def decode_value(value: str) -> int:
    try:
        return int(value, 16)
    except ValueError as e:
        raise CacheCorruptedError(
            f"Malformed cached value: {value[:32]!r}", original_exception=e
        ) from e


# ============================================================================
# Statistics
# ============================================================================


@dataclass
class CacheStatistics:
    """Statistics for a single result cache."""

    cache_name: str
    hits: int = 0
    misses: int = 0
    stores: int = 0
    skipped_stores: int = 0
    created_at: datetime = field(default_factory=datetime.now)

    @property
    def total_requests(self) -> int:
        """Total lookups (hits + misses)."""
        return self.hits + self.misses

    @property
    def hit_rate(self) -> float:
        """Lookup hit rate (0.0-1.0)."""
        if self.total_requests == 0:
            return 0.0
        return self.hits / self.total_requests

    def as_dict(self) -> Dict[str, Any]:
        return {
            "cache_name": self.cache_name,
            "hits": self.hits,
            "misses": self.misses,
            "stores": self.stores,
            "skipped_stores": self.skipped_stores,
            "total_requests": self.total_requests,
            "hit_rate": self.hit_rate,
            "created_at": self.created_at.isoformat(),
        }


# ============================================================================
# Caches
# ============================================================================


class PersistentResultCache(BaseResultCache):
    """
    Result cache backed by a TableStore file.

    Every miss in the session layer reads the whole table, every new entry
    writes the whole table. This is sized for interactive use with a low
    write volume.

    Attributes:
        table_store: Persistent whole-table store
        session: Decoded results already seen by this process
        statistics: Lookup and store counters
    """

    def __init__(
        self,
        path: Union[str, Path],
        session_maxsize: int = SESSION_CACHE_MAXSIZE,
    ):
        self.table_store = TableStore(path)
        self.session: LRUCache = LRUCache(maxsize=session_maxsize)
        self.statistics = CacheStatistics(cache_name=str(self.table_store.path))

        logger.debug(
            "PersistentResultCache opened",
            extra={"path": str(self.table_store.path), "session_maxsize": session_maxsize},
        )

    def lookup(self, pair: InputPair) -> Optional[int]:
        key = encode_key(pair)

        if pair in self.session:
            self.statistics.hits += 1
            logger.debug("Cache HIT (session): %s", key)
            return self.session[pair]

        with self.table_store.transaction(read_only=True) as table:
            value = table.get(key)

        if value is None:
            self.statistics.misses += 1
            logger.debug("Cache MISS: %s", key)
            return None

        result = decode_value(value)
        self.session[pair] = result
        self.statistics.hits += 1
        logger.debug("Cache HIT (table): %s", key)
        return result

    def store(self, pair: InputPair, result: int) -> bool:
        key = encode_key(pair)

        if pair in self.session:
            self.statistics.skipped_stores += 1
            logger.debug("Cache STORE skipped (already stored): %s", key)
            return False

        with self.table_store.transaction() as table:
            existing = table.get(key)
            if existing is None:
                table[key] = encode_value(result)

        if existing is not None:
            # Entries are immutable, keep what is already on disk
            self.session[pair] = decode_value(existing)
            self.statistics.skipped_stores += 1
            logger.debug("Cache STORE skipped (already stored): %s", key)
            return False

        self.session[pair] = result
        self.statistics.stores += 1
        logger.info(
            "Cache STORE: %s",
            key,
            extra={"result_bits": result.bit_length(), "total_stores": self.statistics.stores},
        )
        return True

    def entries(self) -> Dict[InputPair, int]:
        """All persisted results, decoded and ordered by (m, n)."""
        with self.table_store.transaction(read_only=True) as table:
            decoded = {decode_key(k): decode_value(v) for k, v in table.items()}
        return dict(sorted(decoded.items()))

    def get_stats(self) -> Dict[str, Any]:
        """
        Cache statistics.

        Returns:
            Statistics dictionary with hits, misses, stores, skipped_stores,
            total_requests, hit_rate, created_at, session_size, path
        """
        stats = self.statistics.as_dict()
        stats["session_size"] = len(self.session)
        stats["path"] = str(self.table_store.path)
        return stats


class NullResultCache(BaseResultCache):
    """Cache that never stores anything; every lookup misses."""

    def __init__(self):
        self.statistics = CacheStatistics(cache_name="null")

    def lookup(self, pair: InputPair) -> Optional[int]:
        self.statistics.misses += 1
        return None

    def store(self, pair: InputPair, result: int) -> bool:
        self.statistics.skipped_stores += 1
        return False

    def get_stats(self) -> Dict[str, Any]:
        return self.statistics.as_dict()
