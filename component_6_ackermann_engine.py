"""
Ackermann Engine
Main orchestration of cache, closed forms and full evaluation.

Flow of one request (never loops back):

    Start -> CacheCheck -> OptimizeCheck -> FullEvaluate -> StoreAndReturn -> Done

- CacheCheck and OptimizeCheck only run when optimization is enabled.
- A cache hit returns immediately and stores nothing.
- A closed form skips FullEvaluate.
- An unavailable cache is logged and the request continues without it.
- RecursionError and MemoryError from the evaluation propagate unchanged.
"""

import sys
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Tuple, Union

from ackermann_exceptions import CacheException, InvalidConfigError, InvalidInputError
from common.constants import (
    DEFAULT_RESULTS_FILE,
    RECURSIVE_STACK_WARNING_M,
    SESSION_CACHE_MAXSIZE,
)
from component_1_logging_config import PerformanceLogger, get_logger
from component_3_ackermann_evaluator import EvaluationStrategy, evaluate
from component_4_closed_form_optimizer import try_optimize
from component_5_result_cache import NullResultCache, PersistentResultCache
from infrastructure.interfaces import BaseResultCache, InputPair

logger = get_logger(__name__)

MIN_RECURSION_LIMIT = 100


class ResultSource(str, Enum):
    """Where a result came from"""

    CACHE = "cache"
    CLOSED_FORM = "closed_form"
    RECURSIVE = "recursive"
    ITERATIVE = "iterative"


@dataclass
class AckermannResult:
    """Result of one engine request"""

    value: int
    pair: InputPair
    source: ResultSource
    duration_ms: float = 0.0
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class AckermannConfig:
    """Configuration for AckermannEngine"""

    # Persistent result table
    results_file: Path = DEFAULT_RESULTS_FILE
    use_cache: bool = True  # False: never read or write the result table

    # Decoded results kept in memory per process
    session_cache_maxsize: int = SESSION_CACHE_MAXSIZE

    # Interpreter recursion limit during recursive evaluation (None: unchanged)
    recursion_limit: Optional[int] = None

    def __post_init__(self):
        """Validate configuration"""
        self.results_file = Path(self.results_file)
        if self.session_cache_maxsize < 1:
            raise InvalidConfigError(
                "session_cache_maxsize must be >= 1",
                config_key="session_cache_maxsize",
                config_value=self.session_cache_maxsize,
            )
        if self.recursion_limit is not None and self.recursion_limit < MIN_RECURSION_LIMIT:
            raise InvalidConfigError(
                f"recursion_limit must be >= {MIN_RECURSION_LIMIT}",
                config_key="recursion_limit",
                config_value=self.recursion_limit,
            )


@contextmanager
def recursion_limit(limit: Optional[int]) -> Iterator[None]:
    """Temporarily set the interpreter recursion limit (None: leave as is)."""
    if limit is None:
        yield
        return

    previous = sys.getrecursionlimit()
    sys.setrecursionlimit(limit)
    try:
        yield
    finally:
        sys.setrecursionlimit(previous)


class AckermannEngine:
    """
    Computes A(m, n) through cache, closed form or full evaluation.

    All per-request state lives in local variables; the engine itself only
    holds its configuration and its cache, so one instance can serve any
    number of sequential requests.
    """

    def __init__(
        self,
        config: Optional[AckermannConfig] = None,
        cache: Optional[BaseResultCache] = None,
    ):
        self.config = config or AckermannConfig()
        self.cache = cache if cache is not None else self._open_cache()

        logger.info(
            "AckermannEngine initialized",
            extra={
                "cache": type(self.cache).__name__,
                "results_file": str(self.config.results_file),
                "recursion_limit": self.config.recursion_limit,
            },
        )

    def _open_cache(self) -> BaseResultCache:
        if not self.config.use_cache:
            return NullResultCache()
        return PersistentResultCache(
            self.config.results_file,
            session_maxsize=self.config.session_cache_maxsize,
        )

    def compute(
        self,
        m: int,
        n: int,
        strategy: Union[EvaluationStrategy, str],
        optimize: bool = True,
    ) -> AckermannResult:
        """
        Compute A(m, n).

        Args:
            m: First argument (>= 0)
            n: Second argument (>= 0)
            strategy: Strategy for full evaluation
            optimize: Consult cache and closed forms before full evaluation

        Returns:
            AckermannResult with value and source

        Raises:
            InvalidInputError: negative or non-integer arguments, unknown strategy
            RecursionError: recursive strategy exhausted the call stack
        """
        pair = InputPair(m, n)
        strategy = self._coerce_strategy(strategy, pair)
        degraded = False

        with PerformanceLogger(
            logger.logger, "A(m, n)", m=m, n=n, strategy=strategy.value, optimize=optimize
        ) as perf:
            value: Optional[int] = None
            source: Optional[ResultSource] = None

            if optimize:
                cached, degraded = self._lookup(pair)
                if cached is not None:
                    value, source = cached, ResultSource.CACHE

            if value is None and optimize:
                value = try_optimize(pair.m, pair.n)
                if value is not None:
                    source = ResultSource.CLOSED_FORM

            if value is None:
                value = self._evaluate(pair, strategy)
                source = ResultSource(strategy.value)

            if source is not ResultSource.CACHE and not degraded:
                degraded = not self._store(pair, value)

        logger.info(
            "Computed %s",
            pair,
            extra={
                "source": source.value,
                "result_bits": value.bit_length(),
                "cache_degraded": degraded,
            },
        )

        return AckermannResult(
            value=value,
            pair=pair,
            source=source,
            duration_ms=perf.duration_ms,
            metadata={"strategy": strategy.value, "optimize": optimize, "cache_degraded": degraded},
        )

    def evaluate(
        self,
        m: int,
        n: int,
        strategy: Union[EvaluationStrategy, str],
        optimize: bool = True,
    ) -> int:
        """A(m, n) as a plain integer (see compute)"""
        return self.compute(m, n, strategy, optimize=optimize).value

    def get_cache_stats(self) -> Dict[str, Any]:
        return self.cache.get_stats()

    # ------------------------------------------------------------------
    # States
    # ------------------------------------------------------------------

    def _coerce_strategy(
        self, strategy: Union[EvaluationStrategy, str], pair: InputPair
    ) -> EvaluationStrategy:
        try:
            return EvaluationStrategy(strategy)
        except ValueError as e:
            raise InvalidInputError(
                f"Unknown evaluation strategy: {strategy!r}",
                m=pair.m,
                n=pair.n,
                original_exception=e,
            ) from e

    def _lookup(self, pair: InputPair) -> Tuple[Optional[int], bool]:
        """Cached value (or None) and whether the cache failed."""
        try:
            return self.cache.lookup(pair), False
        except CacheException as e:
            logger.warning(
                "Result cache unavailable, computing without cache: %s",
                e,
                extra={"pair": str(pair)},
            )
            return None, True

    def _evaluate(self, pair: InputPair, strategy: EvaluationStrategy) -> int:
        if (
            strategy is EvaluationStrategy.RECURSIVE
            and pair.m >= RECURSIVE_STACK_WARNING_M
            and pair.n > 0
        ):
            logger.warning(
                "Recursive evaluation of %s is expected to exhaust the call stack",
                pair,
                extra={"recursion_limit": self.config.recursion_limit or sys.getrecursionlimit()},
            )

        if strategy is EvaluationStrategy.RECURSIVE:
            with recursion_limit(self.config.recursion_limit):
                return evaluate(pair.m, pair.n, strategy)
        return evaluate(pair.m, pair.n, strategy)

    def _store(self, pair: InputPair, value: int) -> bool:
        """Store the result; False if the cache failed."""
        try:
            self.cache.store(pair, value)
        except CacheException as e:
            logger.warning(
                "Result cache unavailable, result not persisted: %s",
                e,
                extra={"pair": str(pair)},
            )
            return False
        return True
