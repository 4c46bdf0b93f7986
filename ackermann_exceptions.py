"""
ackermann_exceptions.py

Central exception hierarchy for the Ackermann engine.

Exception hierarchy:
    AckermannException (base)
    ├── InvalidInputError
    ├── CacheException
    │   ├── CacheReadError
    │   ├── CacheWriteError
    │   └── CacheCorruptedError
    └── ConfigurationException
        └── InvalidConfigError

Exhaustion of the call stack (RecursionError) or of memory (MemoryError) is
not wrapped: it propagates unchanged to the caller.

Usage:
    from ackermann_exceptions import CacheException

    try:
        cache.store(pair, value)
    except CacheException as e:
        logger.warning(f"Result not persisted: {e}")
        logger.warning(f"Context: {e.context}")
"""

from typing import Any, Dict, Optional


class AckermannException(Exception):
    """
    Base exception for all engine-specific errors.

    Every exception supports:
    - a detailed message
    - contextual information (dict)
    - chaining of the original exception
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.original_exception = original_exception

    def __str__(self) -> str:
        base_msg = self.message

        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base_msg += f" | Context: {context_str}"

        if self.original_exception:
            base_msg += f" | Caused by: {type(self.original_exception).__name__}: {str(self.original_exception)}"

        return base_msg

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, context={self.context!r})"


# ============================================================================
# INPUT EXCEPTIONS
# ============================================================================


class InvalidInputError(AckermannException):
    """
    Arguments of A(m, n) are not usable.

    Causes:
    - m or n negative
    - m or n missing or not an integer
    - unknown evaluation strategy
    """

    def __init__(
        self,
        message: str,
        m: Optional[Any] = None,
        n: Optional[Any] = None,
        **kwargs,
    ):
        context = kwargs.get("context", {})
        context["m"] = m
        context["n"] = n
        kwargs["context"] = context
        super().__init__(message, **kwargs)


# ============================================================================
# CACHE EXCEPTIONS
# ============================================================================


class CacheException(AckermannException):
    """
    Base exception for an unavailable result store.

    The engine treats every CacheException as recoverable and continues
    without caching.
    """

    def __init__(self, message: str, path: Optional[str] = None, **kwargs):
        context = kwargs.get("context", {})
        context["path"] = path
        kwargs["context"] = context
        super().__init__(message, **kwargs)


class CacheReadError(CacheException):
    """
    Result store could not be opened or read.

    Causes:
    - missing read permission
    - path points to a directory
    """


class CacheWriteError(CacheException):
    """
    Result store could not be written.

    Causes:
    - missing write permission
    - disk full
    - parent directory cannot be created
    """


class CacheCorruptedError(CacheException):
    """
    Result store content cannot be decoded.

    Causes:
    - file is not valid JSON
    - unknown format version
    - malformed key or value
    """


# ============================================================================
# CONFIGURATION EXCEPTIONS
# ============================================================================


class ConfigurationException(AckermannException):
    """Base exception for configuration errors."""


class InvalidConfigError(ConfigurationException):
    """
    Invalid configuration value.

    Causes:
    - non-positive session cache size
    - recursion limit below the interpreter minimum
    """

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        config_value: Optional[Any] = None,
        **kwargs,
    ):
        context = kwargs.get("context", {})
        context["config_key"] = config_key
        context["config_value"] = config_value
        kwargs["context"] = context
        super().__init__(message, **kwargs)
