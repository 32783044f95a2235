"""Structured logging configuration for SlackGuard."""

import logging
import sys
from typing import Any, Dict, Optional

import structlog
from structlog.types import Processor

from .config import get_settings


def setup_logging() -> None:
    """Configure structured logging for SlackGuard."""
    settings = get_settings()

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
    )

    # Configure structlog
    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def set_log_level(level: str) -> None:
    """Change the log level after logging has been configured."""
    settings = get_settings()
    settings.log_level = level.upper()
    logging.getLogger().setLevel(getattr(logging, settings.log_level, logging.INFO))


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


def log_scan_event(
    logger: structlog.stdlib.BoundLogger,
    team_id: str,
    phase: str,
    team_name: Optional[str] = None,
    **kwargs: Any,
) -> None:
    """Log a scan lifecycle event with workspace context."""
    log_data: Dict[str, Any] = {
        "team_id": team_id,
        "phase": phase,
    }

    if team_name is not None:
        log_data["team_name"] = team_name

    log_data.update(kwargs)

    logger.info(f"scan.{phase}", **log_data)


def log_api_call(
    logger: structlog.stdlib.BoundLogger,
    method: str,
    ok: bool,
    params: Optional[Dict[str, Any]] = None,
    **kwargs: Any,
) -> None:
    """Log a Slack Web API call."""
    log_data: Dict[str, Any] = {
        "api_method": method,
        "ok": ok,
    }

    # Parameter names only, values may carry cursors or identifiers
    if params:
        log_data["param_keys"] = sorted(params.keys())

    log_data.update(kwargs)

    if ok:
        logger.debug("slack.call", **log_data)
    else:
        logger.warning("slack.call", **log_data)


def log_check_result(
    logger: structlog.stdlib.BoundLogger,
    check: str,
    status: str,
    duration_ms: Optional[int] = None,
    **kwargs: Any,
) -> None:
    """Log the outcome of a single check."""
    log_data: Dict[str, Any] = {
        "check": check,
        "status": status,
    }

    if duration_ms is not None:
        log_data["duration_ms"] = duration_ms

    log_data.update(kwargs)

    if status == "ok":
        logger.info("check.completed", **log_data)
    else:
        logger.warning("check.degraded", **log_data)


# Initialize logging on module import
setup_logging()
