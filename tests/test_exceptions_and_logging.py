"""
tests/test_exceptions_and_logging.py

Tests for the exception hierarchy and the logging helpers.
"""

import logging
from contextlib import contextmanager

import pytest

from ackermann_exceptions import (
    AckermannException,
    CacheCorruptedError,
    CacheException,
    CacheWriteError,
    ConfigurationException,
    InvalidConfigError,
    InvalidInputError,
)
from component_1_logging_config import (
    PERFORMANCE_LOGGER_NAME,
    AckermannLogFormatter,
    PerformanceLogger,
    StructuredLogger,
    get_logger,
    setup_logging,
)


class TestExceptionHierarchy:
    def test_cache_errors_are_cache_exceptions(self):
        assert issubclass(CacheWriteError, CacheException)
        assert issubclass(CacheCorruptedError, CacheException)
        assert issubclass(CacheException, AckermannException)

    def test_config_error(self):
        assert issubclass(InvalidConfigError, ConfigurationException)

    def test_str_with_context_and_cause(self):
        cause = OSError("disk full")
        error = CacheWriteError("write failed", path="/tmp/r.json", original_exception=cause)

        text = str(error)
        assert text.startswith("write failed")
        assert "path=/tmp/r.json" in text
        assert "Caused by: OSError: disk full" in text

    def test_input_error_context(self):
        error = InvalidInputError("m must be non-negative", m=-1, n=2)

        assert error.context == {"m": -1, "n": 2}
        assert repr(error).startswith("InvalidInputError(")

    def test_plain_message(self):
        assert str(AckermannException("boom")) == "boom"


class TestLogging:
    def test_get_logger_returns_structured_logger(self):
        logger = get_logger("ackermann.test")

        assert isinstance(logger, StructuredLogger)
        assert logger.logger.name == "ackermann.test"

    def test_extra_is_wrapped(self):
        logger = get_logger("ackermann.test")

        msg, kwargs = logger.process("hello", {"extra": {"m": 3}})

        assert msg == "hello"
        assert kwargs["extra"] == {"extra_info": {"m": 3}}

    def test_formatter_renders_extra(self):
        formatter = AckermannLogFormatter(use_colors=False)
        record = logging.LogRecord(
            "ackermann.test", logging.INFO, __file__, 1, "Computed", None, None
        )
        record.extra_info = {"m": 3, "n": 3}

        text = formatter.format(record)

        assert "[ackermann.test] Computed | m=3 | n=3" in text

    def test_performance_logger_measures(self):
        logger = logging.getLogger("ackermann.test")

        with PerformanceLogger(logger, "operation", m=1) as perf:
            pass

        assert perf.duration_ms >= 0.0

    def test_performance_logger_propagates(self):
        logger = logging.getLogger("ackermann.test")

        with pytest.raises(RecursionError):
            with PerformanceLogger(logger, "operation"):
                raise RecursionError("too deep")

    def test_formatter_colors_by_level(self):
        formatter = AckermannLogFormatter(use_colors=True)
        record = logging.LogRecord(
            "ackermann.test", logging.WARNING, __file__, 1, "careful", None, None
        )

        text = formatter.format(record)

        assert text.startswith(AckermannLogFormatter.LEVEL_COLORS[logging.WARNING])
        assert text.endswith("\033[0m")


@contextmanager
def restored_logging():
    """setup_logging replaces the global handlers; put the previous ones back"""
    root = logging.getLogger()
    perf = logging.getLogger(PERFORMANCE_LOGGER_NAME)
    root_handlers, root_level = list(root.handlers), root.level
    perf_handlers, perf_propagate = list(perf.handlers), perf.propagate
    try:
        yield
    finally:
        for handler in set(root.handlers + perf.handlers):
            if handler not in root_handlers and handler not in perf_handlers:
                handler.close()
        root.handlers[:] = root_handlers
        root.setLevel(root_level)
        perf.handlers[:] = perf_handlers
        perf.propagate = perf_propagate


class TestSetupLogging:
    def test_writes_to_log_file(self, tmp_path):
        with restored_logging():
            log_file = setup_logging(log_dir=tmp_path / "logs")
            get_logger("ackermann.test").info("hello file", extra={"m": 2})

        assert log_file == tmp_path / "logs" / "ackermann.log"
        assert "hello file | m=2" in log_file.read_text(encoding="utf-8")

    def test_console_level_applies_to_stderr_only(self, tmp_path, capsys):
        with restored_logging():
            log_file = setup_logging(console_level=logging.WARNING, log_dir=tmp_path)
            get_logger("ackermann.test").info("quiet")
            get_logger("ackermann.test").warning("loud")

        captured = capsys.readouterr()
        assert "loud" in captured.err
        assert "quiet" not in captured.err
        assert captured.out == ""
        assert "quiet" in log_file.read_text(encoding="utf-8")

    def test_timings_go_to_file_only(self, tmp_path):
        with restored_logging():
            log_file = setup_logging(log_dir=tmp_path)
            with PerformanceLogger(logging.getLogger("ackermann.test"), "A(m, n)", m=1, n=1):
                pass
            assert logging.getLogger(PERFORMANCE_LOGGER_NAME).propagate is False

        text = log_file.read_text(encoding="utf-8")
        assert "[ackermann.performance] A(m, n) | m=1 | n=1 | duration_ms=" in text
