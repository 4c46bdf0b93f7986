"""
Common constants for the Ackermann engine.
"""

from common.constants import *

__all__ = [
    # Closed Forms
    "CLOSED_FORM_MAX_M",
    # Result Store
    "DEFAULT_RESULTS_FILE",
    "RESULTS_FORMAT_VERSION",
    "CACHE_KEY_SEPARATOR",
    # Session Cache
    "SESSION_CACHE_MAXSIZE",
    # Recursion
    "RECURSIVE_STACK_WARNING_M",
]
