"""
component_4_closed_form_optimizer.py

Closed forms of A(m, n) for small m.

    m = 0:  n + 1
    m = 1:  n + 2
    m = 2:  2n + 3
    m = 3:  2^(n+3) - 3
    m = 4:  tetration(2, n+3) - 3
    m = 5:  pentation(2, n+3) - 3

Each formula equals the recurrence exactly, so the fast path returns the
same integer as full evaluation. For m > 5 no formula is
known and try_optimize returns None.
"""

from typing import Callable, Dict, Optional

from component_1_logging_config import get_logger
from component_2_hyperoperators import pentation, tetration

logger = get_logger(__name__)


CLOSED_FORMS: Dict[int, Callable[[int], int]] = {
    0: lambda n: n + 1,
    1: lambda n: n + 2,
    2: lambda n: 2 * n + 3,
    3: lambda n: 2 ** (n + 3) - 3,
    4: lambda n: tetration(2, n + 3) - 3,
    5: lambda n: pentation(2, n + 3) - 3,
}


def has_closed_form(m: int) -> bool:
    """True if A(m, n) has a closed form for every n"""
    return m in CLOSED_FORMS


def try_optimize(m: int, n: int) -> Optional[int]:
    """
    A(m, n) from its closed form.

    Args:
        m: First argument (>= 0)
        n: Second argument (>= 0)

    Returns:
        A(m, n), or None if no closed form exists for m
    """
    formula = CLOSED_FORMS.get(m)
    if formula is None:
        logger.debug("No closed form available", extra={"m": m, "n": n})
        return None

    result = formula(n)
    logger.debug(
        "Closed form applied",
        extra={"m": m, "n": n, "result_bits": result.bit_length()},
    )
    return result
