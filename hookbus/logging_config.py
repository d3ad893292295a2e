"""Structured logging configuration for hookbus.

Uses structlog for structured, context-rich logging with
support for both console and JSON output formats.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

import structlog

if TYPE_CHECKING:
    from hookbus.config import HookBusConfig

# file opened by the last configure_logging call, closed on reconfigure
_log_stream: TextIO | None = None


def _close_log_stream() -> None:
    global _log_stream
    if _log_stream is not None:
        _log_stream.close()
        _log_stream = None


def configure_logging(
    level: str = "INFO",
    json_output: bool = False,
    log_file: Path | None = None,
    colors: bool = True,
) -> None:
    """Configure structured logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: Whether to output JSON format
        log_file: Optional file to log to
        colors: Whether to use colors in console output

    Calling it again replaces the handlers and closes any log file a
    previous call opened.
    """
    global _log_stream
    stream: TextIO = sys.stderr
    opened: TextIO | None = None
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        opened = stream = open(log_file, "a", encoding="utf-8")  # noqa: SIM115

    logging.basicConfig(
        format="%(message)s",
        stream=stream,
        level=getattr(logging, level.upper(), logging.INFO),
        force=True,
    )
    _close_log_stream()
    _log_stream = opened

    processors: list[structlog.types.Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if json_output:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=colors))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Structured logger instance
    """
    return structlog.get_logger(name)


def configure_from_config(config: HookBusConfig, log_dir: Path | None = None) -> None:
    """Configure logging from a resolved :class:`HookBusConfig`.

    Args:
        config: Resolved configuration
        log_dir: Directory for log files
    """
    log_file = None
    if log_dir is not None:
        log_file = log_dir / "hookbus.log"

    configure_logging(
        level=config.log_level,
        json_output=config.json_logs,
        log_file=log_file,
        colors=not config.json_logs,
    )


# Usage example:
# from hookbus.logging_config import get_logger
#
# logger = get_logger(__name__)
#
# logger.debug("hook_registered", hook="combat.start", id=12)
