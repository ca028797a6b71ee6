"""
Structured logging for querystruct.

The CLI configures structlog from QuerystructConfig. In library use the first
logger request configures console output only, unless the host application
has already configured structlog; it never touches the root logger.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

import structlog

from ..core.config import get_config


def setup_file_logging(
    log_file: Path, max_bytes: int = 10 * 1024 * 1024, backup_count: int = 5  # 10MB
) -> RotatingFileHandler:
    """
    Create a rotating file handler for logs; the caller sets its formatter.

    Args:
        log_file: Path to the log file
        max_bytes: Maximum log file size before rotation (default: 10MB)
        backup_count: Number of backup files to keep (default: 5)

    Returns:
        Configured RotatingFileHandler instance
    """
    return RotatingFileHandler(
        log_file, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
    )


_installed_handlers: list[logging.Handler] = []


def _replace_root_handlers(root_logger: logging.Logger, *handlers: logging.Handler) -> None:
    for handler in _installed_handlers:
        root_logger.removeHandler(handler)
        handler.close()
    _installed_handlers[:] = handlers
    for handler in handlers:
        root_logger.addHandler(handler)


def setup_logging(attach_handlers: bool = True) -> None:
    """
    Configure structured logging with appropriate processors.

    Console output goes through structlog's ConsoleRenderer; when a log file
    is configured, records are also written as JSON lines with rotation.
    Calling this again replaces the root handlers installed by the previous call.

    Args:
        attach_handlers: Whether a configured log file may add handlers to the
            root logger (disabled for lazy configuration inside a host app)
    """
    config = get_config()

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if attach_handlers and config.log_file is not None:
        file_handler = setup_file_logging(
            log_file=config.log_file,
            max_bytes=config.log_max_bytes,
            backup_count=config.log_backup_count,
        )
        file_handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                processors=[
                    structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                    structlog.processors.JSONRenderer(),
                ],
            )
        )

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                processors=[
                    structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                    structlog.dev.ConsoleRenderer(),
                ],
            )
        )

        root_logger = logging.getLogger()
        _replace_root_handlers(root_logger, file_handler, console_handler)
        root_logger.setLevel(getattr(logging, config.log_level.value, logging.INFO))

        # Handlers do the rendering
        logger_factory = structlog.stdlib.LoggerFactory()
        processors = shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ]
    else:
        logger_factory = structlog.PrintLoggerFactory()  # type: ignore[assignment]
        processors = shared_processors + [structlog.dev.ConsoleRenderer()]

    structlog.configure(
        processors=processors,  # type: ignore[arg-type]
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, config.log_level.value, logging.INFO)
        ),
        context_class=dict,
        logger_factory=logger_factory,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (typically module name)

    Returns:
        Configured structlog logger
    """
    if not structlog.is_configured():
        setup_logging(attach_handlers=False)
    return structlog.get_logger(name)
