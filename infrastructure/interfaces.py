"""
infrastructure/interfaces.py

Base interfaces shared by the engine and its result caches.

Interface Contract:
    Every result cache implements BaseResultCache. The engine only talks to
    this interface, so a persistent cache and the no-op cache used after a
    storage failure are interchangeable.

Usage:
    from infrastructure.interfaces import BaseResultCache, InputPair

    class MyCache(BaseResultCache):
        def lookup(self, pair: InputPair) -> Optional[int]:
            ...

        def store(self, pair: InputPair, result: int) -> bool:
            ...
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ackermann_exceptions import InvalidInputError


@dataclass(frozen=True, order=True)
class InputPair:
    """
    Arguments (m, n) of one Ackermann evaluation.

    Immutable and hashable; doubles as the cache key. Both components must be
    non-negative integers (bool is rejected).
    """

    m: int
    n: int

    def __post_init__(self):
        for name, value in (("m", self.m), ("n", self.n)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidInputError(
                    f"{name} must be an integer, got {type(value).__name__}",
                    m=self.m,
                    n=self.n,
                )
            if value < 0:
                raise InvalidInputError(
                    f"{name} must be non-negative, got {value}", m=self.m, n=self.n
                )

    def __str__(self) -> str:
        return f"A({self.m}, {self.n})"


class BaseResultCache(ABC):
    """
    Abstract base class for result caches.

    Entries are immutable: once a result is stored for an InputPair, later
    store calls for the same pair leave it untouched.
    """

    @abstractmethod
    def lookup(self, pair: InputPair) -> Optional[int]:
        """
        Previously stored result for exactly this pair.

        Returns:
            The stored result, or None on a miss

        Raises:
            CacheException: Underlying storage unavailable
        """

    @abstractmethod
    def store(self, pair: InputPair, result: int) -> bool:
        """
        Persist the result for this pair unless the pair is already stored.

        Returns:
            True if a new entry was written, False if the pair already existed

        Raises:
            CacheException: Underlying storage unavailable
        """

    def get_stats(self) -> Dict[str, Any]:
        """Implementation-specific statistics (empty by default)"""
        return {}

    def __contains__(self, pair: InputPair) -> bool:
        return self.lookup(pair) is not None
