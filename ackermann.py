"""
Ackermann function engine
FACADE MODULE - re-exports the public API of the component modules

- component_2_hyperoperators.py: tetration, pentation
- component_3_ackermann_evaluator.py: recursive and iterative evaluation
- component_4_closed_form_optimizer.py: closed forms for m <= 5
- component_5_result_cache.py: persistent result cache
- component_6_ackermann_engine.py: orchestration

Usage:
    from ackermann import AckermannEngine, EvaluationStrategy

    engine = AckermannEngine()
    engine.evaluate(3, 3, EvaluationStrategy.ITERATIVE)  # 61
"""

from ackermann_exceptions import (
    AckermannException,
    CacheCorruptedError,
    CacheException,
    CacheReadError,
    CacheWriteError,
    InvalidConfigError,
    InvalidInputError,
)
from component_2_hyperoperators import pentation, tetration
from component_3_ackermann_evaluator import (
    EvaluationStrategy,
    ackermann_iterative,
    ackermann_recursive,
    evaluate,
)
from component_4_closed_form_optimizer import has_closed_form, try_optimize
from component_5_result_cache import (
    CacheStatistics,
    NullResultCache,
    PersistentResultCache,
)
from component_6_ackermann_engine import (
    AckermannConfig,
    AckermannEngine,
    AckermannResult,
    ResultSource,
)
from infrastructure.interfaces import BaseResultCache, InputPair

__all__ = [
    # Core types
    "InputPair",
    "EvaluationStrategy",
    "ResultSource",
    "AckermannResult",
    "AckermannConfig",
    # Main engine
    "AckermannEngine",
    # Evaluation
    "ackermann_recursive",
    "ackermann_iterative",
    "evaluate",
    # Closed forms
    "tetration",
    "pentation",
    "try_optimize",
    "has_closed_form",
    # Caches
    "BaseResultCache",
    "PersistentResultCache",
    "NullResultCache",
    "CacheStatistics",
    # Exceptions
    "AckermannException",
    "InvalidInputError",
    "CacheException",
    "CacheReadError",
    "CacheWriteError",
    "CacheCorruptedError",
    "InvalidConfigError",
]
