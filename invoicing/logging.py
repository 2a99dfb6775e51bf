"""Structured logging for the invoicing API.

Every record, whether it comes from structlog or from stdlib loggers such as
uvicorn and SQLAlchemy, goes through one ``ProcessorFormatter`` and ends up as
a single JSON line (or a coloured console line while developing).
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import structlog

from invoicing.core.config import Settings, get_settings

# Keys whose values never reach a log line
SECRET_KEYS = frozenset({"password", "jwt", "token", "authorization"})
REDACTED = "***"


def redact(value: Any) -> Any:
    """Return a copy of ``value`` with secret-looking keys masked, at any depth."""
    if isinstance(value, Mapping):
        return {
            k: (REDACTED if str(k).lower() in SECRET_KEYS else redact(v)) for k, v in value.items()
        }
    if isinstance(value, list):
        return [redact(v) for v in value]
    return value


def _redact_secrets(_logger: Any, _method: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    return redact(event_dict)


def _level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def _pre_chain() -> list[Any]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _redact_secrets,
        structlog.processors.format_exc_info,
    ]


def setup_logging(settings: Settings | None = None) -> None:
    """Route structlog and stdlib logging through one formatter.

    Request-scoped fields bound with ``structlog.contextvars`` (request id,
    path, method) are merged into every event. Secret-looking keys are masked
    before rendering. ``LOG_LEVEL``, ``LOG_FORMAT`` and ``LOG_FILE`` come from
    ``settings``; a log file is written in addition to stderr.
    """
    settings = settings or get_settings()
    pre_chain = _pre_chain()
    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    renderer = (
        structlog.dev.ConsoleRenderer()
        if settings.resolved_log_format == "console"
        else structlog.processors.JSONRenderer()
    )
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=pre_chain,
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
    )

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if settings.log_file:
        path = Path(settings.log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path, encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)

    logging.basicConfig(level=_level(settings.log_level), handlers=handlers, force=True)
