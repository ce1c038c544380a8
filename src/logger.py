"""Structured logging configuration using structlog."""

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog
from structlog.processors import CallsiteParameter

from src.models import LoggingConfig, get_logging_config

if TYPE_CHECKING:
    from structlog.types import Processor


def _shared_processors() -> list["Processor"]:
    return [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.ExtraAdder(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                CallsiteParameter.MODULE,
                CallsiteParameter.FUNC_NAME,
                CallsiteParameter.LINENO,
            ]
        ),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]


def setup_logging(config: LoggingConfig | None = None) -> None:
    """Configure structured logging with structlog."""
    if config is None:
        config = get_logging_config()

    log_level = getattr(logging, config.level.upper())

    processors: list["Processor"]
    if config.format == "json":
        processors = [
            *_shared_processors(),
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *_shared_processors(),
            structlog.dev.ConsoleRenderer(
                colors=config.console_colorized,
                exception_formatter=structlog.dev.plain_traceback,
            ),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Diagnostics go to stderr so JSON exports on stdout stay clean
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=log_level,
    )

    if config.file_enabled:
        setup_file_logging(config, log_level)


def setup_file_logging(config: LoggingConfig, log_level: int) -> None:
    """Set up file logging with rotation."""
    from logging.handlers import TimedRotatingFileHandler

    config.file_path.parent.mkdir(parents=True, exist_ok=True)

    file_handler = TimedRotatingFileHandler(
        filename=str(config.file_path),
        when=config.file_rotation[0],  # 'd' for daily
        interval=1,
        backupCount=config.file_retention_days,
        encoding="utf-8",
    )
    file_handler.setLevel(log_level)

    formatter: logging.Formatter
    if config.format == "json":
        formatter = structlog.stdlib.ProcessorFormatter(
            processor=structlog.processors.JSONRenderer(),
            foreign_pre_chain=_shared_processors(),
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )

    file_handler.setFormatter(formatter)
    logging.getLogger().addHandler(file_handler)


def get_logger(name: str | None = None, **context: Any) -> structlog.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (defaults to module name)
        **context: Additional context to bind to the logger

    Returns:
        Bound logger instance
    """
    logger: structlog.BoundLogger = structlog.get_logger(name)
    if context:
        logger = logger.bind(**context)
    return logger


# Initialize logging when module is imported
setup_logging()
