"""
Loguru setup for the service.

One loguru logger for everything: our modules log through it directly and
records from the standard logging module (uvicorn, fastapi) are forwarded
into it, so access logs and pipeline logs share one format and one file.

Environment Variables:
- LOG_LEVEL: DEBUG, INFO, WARNING, ERROR or CRITICAL (default: INFO)
- LOG_DIR: directory for stt_service.log (default: logs)
- LOG_TO_FILE: set to 0/false to log to stdout only (default: on)
"""

import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, cast

from loguru import logger


LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LOG_LEVELS: tuple[LogLevel, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FILE_NAME = "stt_service.log"
FORWARDED_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access", "fastapi")

_FALSY = {"0", "false", "no", "off"}


@dataclass
class LoggingSettings:
    """Where and how verbosely to log."""

    level: LogLevel = "INFO"
    log_dir: Path = Path("logs")
    to_file: bool = True
    rotation: str = "10 MB"
    retention: str = "5 days"

    @classmethod
    def from_env(cls) -> "LoggingSettings":
        raw_level = os.getenv("LOG_LEVEL", "INFO").upper()
        level = cast(LogLevel, raw_level) if raw_level in LOG_LEVELS else "INFO"
        return cls(
            level=level,
            log_dir=Path(os.getenv("LOG_DIR", "logs")),
            to_file=os.getenv("LOG_TO_FILE", "1").strip().lower() not in _FALSY,
        )


class InterceptHandler(logging.Handler):
    """Standard logging handler that re-emits records through loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Walk out of the logging module so loguru reports the real caller
        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def forward_std_logging(level: LogLevel) -> None:
    """Send records from the standard logging module to loguru."""
    logging.basicConfig(handlers=[InterceptHandler()], level=level, force=True)
    for name in FORWARDED_LOGGERS:
        std_logger = logging.getLogger(name)
        std_logger.handlers = [InterceptHandler()]
        std_logger.propagate = False


def setup_logging(settings: LoggingSettings | None = None) -> None:
    """
    (Re)configure loguru sinks.

    Console output is colorized with full tracebacks. The file sink rotates,
    keeps a few days of history and zips old files; variable values are left
    out of its tracebacks so uploaded data is not written to disk.
    """
    settings = settings or LoggingSettings.from_env()

    logger.remove()
    logger.add(
        sys.stdout,
        level=settings.level,
        format=(
            "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
        ),
        colorize=True,
        backtrace=True,
        diagnose=True,
    )

    if settings.to_file:
        settings.log_dir.mkdir(parents=True, exist_ok=True)
        logger.add(
            settings.log_dir / LOG_FILE_NAME,
            level=settings.level,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
            rotation=settings.rotation,
            retention=settings.retention,
            compression="zip",
            backtrace=True,
            diagnose=False,
        )

    forward_std_logging(settings.level)
    logger.debug(
        f"Logging at {settings.level}, file sink "
        f"{settings.log_dir.resolve() / LOG_FILE_NAME if settings.to_file else 'disabled'}"
    )


setup_logging()

__all__ = ["logger", "setup_logging", "LoggingSettings", "InterceptHandler"]
