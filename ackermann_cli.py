#!/usr/bin/env python3
"""
Command line entry point for the Ackermann engine.

Usage:
    ackermann -n -v 3,2
    ackermann -r -v 3,4
    ackermann -d -r -v 3,4
    ackermann -n -v 4,1 --results-file /tmp/results.json
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from ackermann_exceptions import AckermannException
from common.constants import DEFAULT_RESULTS_FILE
from component_1_logging_config import get_logger, setup_logging
from component_3_ackermann_evaluator import EvaluationStrategy
from component_6_ackermann_engine import AckermannConfig, AckermannEngine

logger = get_logger(__name__)

DESCRIPTION = """\
Computes the Ackermann function, defined for nonnegative integers m and n as

    A(m, n) = n + 1                    if m == 0
              A(m - 1, 1)              if m > 0 and n == 0
              A(m - 1, A(m, n - 1))    if m > 0 and n > 0

Two methods are available. The recursive method (-r) follows the definition
with real function calls and runs out of stack for m >= 4 with n > 0. The
non-recursive method (-n) keeps its own stack and handles larger inputs,
although it can take a long time to return.

Unless -d is given, results are first looked up in the result store and
values of m <= 5 are computed from their closed form. Every computed value
is stored and recalled the next time the same m and n are requested.
"""

EPILOG = """\
examples:
  ackermann -n -v 3,2
  ackermann -r -v 3,4
  ackermann -d -r -v 3,4
"""


def parse_values(text: str) -> Tuple[int, int]:
    """Parse "M,N" into two non-negative integers"""
    parts = [part.strip() for part in text.split(",")]
    if len(parts) != 2:
        raise argparse.ArgumentTypeError(f"expected M,N, got {text!r}")
    try:
        m, n = int(parts[0]), int(parts[1])
    except ValueError:
        raise argparse.ArgumentTypeError(f"M and N must be integers, got {text!r}")
    if m < 0 or n < 0:
        raise argparse.ArgumentTypeError(f"M and N must be non-negative, got {text!r}")
    return m, n


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ackermann",
        description=DESCRIPTION,
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    method = parser.add_mutually_exclusive_group(required=True)
    method.add_argument(
        "-r",
        "--recurse",
        dest="strategy",
        action="store_const",
        const=EvaluationStrategy.RECURSIVE,
        help="Use the recursive method",
    )
    method.add_argument(
        "-n",
        "--nrecurse",
        dest="strategy",
        action="store_const",
        const=EvaluationStrategy.ITERATIVE,
        help="Use the non-recursive method",
    )

    parser.add_argument(
        "-v",
        "--values",
        type=parse_values,
        required=True,
        metavar="M,N",
        help="The values for m and n to be computed",
    )
    parser.add_argument(
        "-d",
        "--no-optimize",
        dest="optimize",
        action="store_false",
        help="Disable the result store lookup and the closed forms",
    )
    parser.add_argument(
        "--results-file",
        type=Path,
        default=DEFAULT_RESULTS_FILE,
        help=f"Result store location (default: {DEFAULT_RESULTS_FILE})",
    )
    parser.add_argument(
        "--no-cache",
        dest="use_cache",
        action="store_false",
        help="Neither read nor write the result store",
    )
    parser.add_argument(
        "--recursion-limit",
        type=int,
        default=None,
        help="Interpreter recursion limit for the recursive method",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Log debug output to stderr"
    )
    return parser


def format_result(value: int) -> str:
    """Decimal text of value, without the interpreter's digit limit"""
    if not hasattr(sys, "set_int_max_str_digits"):
        return str(value)

    previous = sys.get_int_max_str_digits()
    sys.set_int_max_str_digits(0)
    try:
        return str(value)
    finally:
        sys.set_int_max_str_digits(previous)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(console_level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        config = AckermannConfig(
            results_file=args.results_file,
            use_cache=args.use_cache,
            recursion_limit=args.recursion_limit,
        )
    except AckermannException as e:
        parser.error(str(e))

    m, n = args.values
    engine = AckermannEngine(config)

    try:
        result = engine.compute(m, n, args.strategy, optimize=args.optimize)
    except (RecursionError, MemoryError) as e:
        logger.error(
            "Computation exhausted process resources",
            extra={"m": m, "n": n, "strategy": args.strategy.value, "error": type(e).__name__},
        )
        print(
            f"ackermann: A({m}, {n}) exhausted resources ({type(e).__name__})",
            file=sys.stderr,
        )
        return 1

    print(format_result(result.value))
    return 0


if __name__ == "__main__":
    sys.exit(main())
