"""
Centralized constants for the Ackermann engine.

Single source of truth for the numeric limits, file locations and format
details used across the engine. Components may override some of these via
AckermannConfig (see component_6_ackermann_engine.py).

Organization:
    - Closed Forms: range of m with a known formula
    - Result Store: location and on-disk format of the persistent cache
    - Session Cache: in-process layer in front of the result store
    - Recursion: thresholds for the recursive strategy

Usage:
    from common.constants import CLOSED_FORM_MAX_M, DEFAULT_RESULTS_FILE
"""

from pathlib import Path

# =============================================================================
# Closed Forms
# =============================================================================

CLOSED_FORM_MAX_M: int = 5
"""
Largest m for which component_4_closed_form_optimizer knows a formula.

- m in 0..3: elementary formulas (n+1, n+2, 2n+3, 2^(n+3)-3)
- m = 4: tetration(2, n+3) - 3
- m = 5: pentation(2, n+3) - 3
- m > 5: no closed form, full evaluation is required

Used by:
    - component_4_closed_form_optimizer.py
"""

# =============================================================================
# Result Store
# =============================================================================

DEFAULT_RESULTS_FILE: Path = Path("data") / "ackermann_results.json"
"""
Default location of the persistent result table, relative to the working
directory. Created on first write.
"""

RESULTS_FORMAT_VERSION: int = 1
"""
Version tag written into the result table.

A table carrying any other version is reported as CacheCorruptedError
instead of being silently reinterpreted.
"""

CACHE_KEY_SEPARATOR: str = ","
"""
Separator between m and n in the serialized cache key ("3,4").

Matches the "M,N" form in which the values are given on the command line.
"""

# =============================================================================
# Session Cache
# =============================================================================

SESSION_CACHE_MAXSIZE: int = 256
"""
Number of decoded results kept in memory per PersistentResultCache.

Only bounds the in-process layer. The persistent table itself is
unbounded and never evicts.
"""

# =============================================================================
# Recursion
# =============================================================================

RECURSIVE_STACK_WARNING_M: int = 4
"""
Smallest m for which the recursive strategy is expected to exhaust the
call stack (for any n > 0). The engine logs a warning but still runs the
evaluation.
"""
