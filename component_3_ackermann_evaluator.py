"""
component_3_ackermann_evaluator.py

Exact evaluation of the Ackermann function A(m, n).

    A(0, n) = n + 1
    A(m, 0) = A(m - 1, 1)              for m > 0
    A(m, n) = A(m - 1, A(m, n - 1))    for m > 0, n > 0

Two strategies compute the same values:

- RECURSIVE follows the recurrence with genuine Python calls. The call
  depth grows with the result, so for m >= 4 and n > 0 it raises
  RecursionError. That error is deliberately left to the caller.
- ITERATIVE keeps the pending m values on an explicit list used as a LIFO
  stack. It only grows heap memory and has no call-depth ceiling, though it
  still needs a number of steps proportional to the size of the result.
"""

from enum import Enum
from typing import List

from component_1_logging_config import get_logger

logger = get_logger(__name__)


class EvaluationStrategy(str, Enum):
    """Computation path used for full evaluation"""

    RECURSIVE = "recursive"
    ITERATIVE = "iterative"


def ackermann_recursive(m: int, n: int) -> int:
    """
    A(m, n) by direct structural recursion.

    Raises:
        RecursionError: if the call stack is exhausted
    """
    if m == 0:
        return n + 1
    if n == 0:
        return ackermann_recursive(m - 1, 1)
    return ackermann_recursive(m - 1, ackermann_recursive(m, n - 1))


def ackermann_iterative(m: int, n: int) -> int:
    """
    A(m, n) with an explicit work stack of pending m values.

    Each push stands for one recursive call. The accumulator n holds the
    argument of the innermost pending call and, once the stack is empty,
    the result.
    """
    stack: List[int] = [m]

    while stack:
        m = stack.pop()
        if m == 0:
            n += 1
        elif n == 0:
            stack.append(m - 1)
            n = 1
        else:
            stack.append(m - 1)
            stack.append(m)
            n -= 1

    return n


_STRATEGIES = {
    EvaluationStrategy.RECURSIVE: ackermann_recursive,
    EvaluationStrategy.ITERATIVE: ackermann_iterative,
}


def evaluate(m: int, n: int, strategy: EvaluationStrategy) -> int:
    """
    Evaluate A(m, n) with the given strategy.

    Args:
        m: First argument (>= 0)
        n: Second argument (>= 0)
        strategy: EvaluationStrategy or its string value

    Returns:
        A(m, n)

    Raises:
        ValueError: if strategy is not a known EvaluationStrategy
        RecursionError: RECURSIVE strategy ran out of call stack
    """
    function = _STRATEGIES[EvaluationStrategy(strategy)]
    logger.debug(
        "Evaluating A(m, n)", extra={"m": m, "n": n, "strategy": function.__name__}
    )
    return function(m, n)
