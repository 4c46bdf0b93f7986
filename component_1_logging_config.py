"""
component_1_logging_config.py

Logging for the Ackermann engine.

- stderr console handler (stdout carries only results)
- one rotating log file with everything from DEBUG up
- "ackermann.performance" logger with timings from PerformanceLogger
- key=value rendering of the 'extra' dict passed to a StructuredLogger

Usage:
    from component_1_logging_config import get_logger

    logger = get_logger(__name__)
    logger.info("Cache STORE", extra={"key": "3,4", "result_bits": 7})

Results are logged by bit length, never by value: decimal text of very
large integers is refused by the interpreter.
"""

import logging
import sys
import time
from logging.handlers import RotatingFileHandler
from pathlib import Path
from types import TracebackType
from typing import Any, Dict, MutableMapping, Optional, Tuple, Type

LOG_DIR: Path = Path("logs")
LOG_FILE_NAME: str = "ackermann.log"
LOG_FILE_MAX_BYTES: int = 5 * 1024 * 1024
LOG_FILE_BACKUPS: int = 3

CONSOLE_LOG_LEVEL: int = logging.WARNING
FILE_LOG_LEVEL: int = logging.DEBUG

PERFORMANCE_LOGGER_NAME: str = "ackermann.performance"


class AckermannLogFormatter(logging.Formatter):
    """[time] [LEVEL] [logger] message | k=v | k=v, optionally colored by level"""

    LEVEL_COLORS: Dict[int, str] = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }

    def __init__(self, use_colors: bool = False) -> None:
        super().__init__(
            fmt="[%(asctime)s] [%(levelname)-8s] [%(name)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        pairs = getattr(record, "extra_info", None)
        if pairs:
            text = " | ".join([text] + [f"{k}={v}" for k, v in pairs.items()])
        if self.use_colors and record.levelno in self.LEVEL_COLORS:
            text = f"{self.LEVEL_COLORS[record.levelno]}{text}\033[0m"
        return text


class StructuredLogger(logging.LoggerAdapter):
    """Moves the 'extra' dict under 'extra_info' so the formatter can render it."""

    def process(
        self, msg: str, kwargs: MutableMapping[str, Any]
    ) -> Tuple[str, MutableMapping[str, Any]]:
        if kwargs.get("extra"):
            kwargs["extra"] = {"extra_info": kwargs["extra"]}
        return msg, kwargs


class PerformanceLogger:
    """
    Times the enclosed block and logs it; exceptions pass through.

    Usage:
        with PerformanceLogger(logger.logger, "A(m, n)", m=3, n=4) as perf:
            ...
        perf.duration_ms
    """

    def __init__(self, logger: logging.Logger, operation_name: str, **context: Any) -> None:
        self.logger = logger
        self.operation_name = operation_name
        self.context = context
        self.duration_ms: float = 0.0
        self._started: Optional[float] = None

    def __enter__(self) -> "PerformanceLogger":
        self._started = time.perf_counter()
        self.logger.debug(f"START: {self.operation_name}", extra={"extra_info": self.context})
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> bool:
        self.duration_ms = (time.perf_counter() - self._started) * 1000
        info = {**self.context, "duration_ms": round(self.duration_ms, 3)}

        if exc_type is not None:
            info["error"] = exc_type.__name__
            self.logger.error(f"FAILED: {self.operation_name}", extra={"extra_info": info})
            return False

        self.logger.debug(f"END: {self.operation_name}", extra={"extra_info": info})
        logging.getLogger(PERFORMANCE_LOGGER_NAME).info(
            self.operation_name, extra={"extra_info": info}
        )
        return False


def setup_logging(
    console_level: int = CONSOLE_LOG_LEVEL,
    file_level: int = FILE_LOG_LEVEL,
    log_dir: Optional[Path] = None,
) -> Path:
    """
    Replace the root handlers with a stderr handler and a rotating file.

    Args:
        console_level: Level for stderr
        file_level: Level for the log file
        log_dir: Directory of the log file (default: ./logs), created if missing

    Returns:
        Path of the log file
    """
    directory = Path(log_dir) if log_dir is not None else LOG_DIR
    directory.mkdir(parents=True, exist_ok=True)
    log_file = directory / LOG_FILE_NAME

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(AckermannLogFormatter(use_colors=sys.stderr.isatty()))

    file_handler = RotatingFileHandler(
        log_file, maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUPS, encoding="utf-8"
    )
    file_handler.setLevel(file_level)
    file_handler.setFormatter(AckermannLogFormatter())

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.handlers.clear()
    root_logger.addHandler(console_handler)
    root_logger.addHandler(file_handler)

    # timings go to the file only
    perf_logger = logging.getLogger(PERFORMANCE_LOGGER_NAME)
    perf_logger.propagate = False
    perf_logger.handlers = [file_handler]

    get_logger(__name__).debug(
        "Logging initialized",
        extra={"log_file": str(log_file), "console_level": logging.getLevelName(console_level)},
    )
    return log_file


def get_logger(name: str) -> StructuredLogger:
    """StructuredLogger for a component, usually get_logger(__name__)"""
    return StructuredLogger(logging.getLogger(name), {})


# Configure on first import unless the application already did
if not logging.getLogger().handlers:
    setup_logging()
