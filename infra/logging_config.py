"""Centralized logging configuration.

The tool supports both human-friendly text logs and structured JSON logs.
The CLI configures logging once per run; ``--verbose`` diagnostics and fatal
errors flow through the module loggers configured here, while the lookup
report itself is plain text written by :mod:`lookup.report`.
"""

from __future__ import annotations

import json
import logging
import sys
import time
from collections.abc import Mapping, Sequence
from contextvars import ContextVar
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, TextIO

from infra.aws_config import enable_sdk_debug_logging
from infra.config import get_settings

# Context that follows a lookup run through the system
lookup_ctx: ContextVar[dict[str, Any] | None] = ContextVar("lookup_ctx", default=None)

_STANDARD_RECORD_ATTRS = frozenset(
    {
        "name", "msg", "args", "levelname", "levelno", "pathname", "filename", "module",
        "exc_info", "exc_text", "stack_info", "lineno", "funcName", "created", "msecs",
        "relativeCreated", "thread", "threadName", "processName", "process", "taskName",
    }
)


def set_lookup_context(**kwargs: Any) -> None:
    """Set context values that will be included in all subsequent JSON log entries."""
    current = dict(lookup_ctx.get() or {})
    current.update(kwargs)
    lookup_ctx.set(current)


def clear_lookup_context() -> None:
    """Clear the lookup context."""
    lookup_ctx.set({})


def get_lookup_context() -> dict[str, Any]:
    """Get a copy of the current lookup context."""
    ctx = lookup_ctx.get()
    return dict(ctx) if ctx else {}


def _utc_iso8601() -> str:
    # Example: 2026-01-24T18:03:12.123Z
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class JsonFormatter(logging.Formatter):
    """
    JSON formatter:
      - message escaped via json.dumps
      - `extra={...}` keys and the lookup context merged in
      - exception info included when present
    """

    def __init__(self, *, extra_fields: Mapping[str, Any] | None = None) -> None:
        super().__init__()
        self._extra_fields = dict(extra_fields or {})

    def format(self, record: logging.LogRecord) -> str:
        base: dict[str, Any] = {
            "timestamp": _utc_iso8601(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for k, v in record.__dict__.items():
            if k not in _STANDARD_RECORD_ATTRS and k not in base:
                base[k] = v

        for k, v in self._extra_fields.items():
            base.setdefault(k, v)

        for k, v in get_lookup_context().items():
            base.setdefault(k, v)

        if record.exc_info:
            base["exception"] = self.formatException(record.exc_info)

        return json.dumps(base, ensure_ascii=False, default=str)


class TextFormatter(logging.Formatter):
    """
    Human-friendly logs, but UTC timestamps.
    """
    converter = time.gmtime  # UTC

    def __init__(self) -> None:
        super().__init__("%(asctime)sZ | %(levelname)s | %(name)s | %(message)s")


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "INFO"
    json_logs: bool = False
    override_root_handlers: bool = False
    sdk_debug: bool = False
    verbose_loggers: tuple[str, ...] = ()
    extra_fields: Mapping[str, Any] | None = None


def setup_logging(
    *,
    level: str | None = None,
    json_logs: bool | None = None,
    override_root_handlers: bool | None = None,
    sdk_debug: bool = False,
    verbose_loggers: Sequence[str] = (),
    stream: TextIO | None = None,
    extra_fields: Mapping[str, Any] | None = None,
) -> LoggingConfig:
    """
    Central logging setup for the tool.

    Env vars:
      - R53ELB_LOG_LEVEL: DEBUG|INFO|WARNING|ERROR (default INFO)
      - R53ELB_LOG_JSON:  1/0 (default 0)
      - R53ELB_LOG_OVERRIDE: 1/0 (default 0)
         If 1, replaces any pre-configured root handlers.
         If 0, only configures logging if root has no handlers.

    ``sdk_debug`` streams botocore wire/signing output (the ``--debug`` flag);
    otherwise the SDK loggers stay at WARNING.
    ``verbose_loggers`` emit INFO even when the configured level is higher
    (the ``--verbose`` flag).
    """
    config = get_settings(reload=True).logging

    cfg = LoggingConfig(
        level=(level or config.level).upper(),
        json_logs=json_logs if json_logs is not None else bool(config.json_logs),
        override_root_handlers=override_root_handlers
        if override_root_handlers is not None
        else bool(config.override_root_handlers),
        sdk_debug=sdk_debug,
        verbose_loggers=tuple(verbose_loggers),
        extra_fields=extra_fields,
    )

    root = logging.getLogger()
    root.setLevel(getattr(logging, cfg.level, logging.INFO))
    for name in cfg.verbose_loggers:
        logging.getLogger(name).setLevel(min(root.level, logging.INFO))

    handler = logging.StreamHandler(stream or sys.stdout)
    if cfg.json_logs:
        handler.setFormatter(JsonFormatter(extra_fields=cfg.extra_fields))
    else:
        handler.setFormatter(TextFormatter())

    if cfg.override_root_handlers:
        for h in list(root.handlers):
            root.removeHandler(h)
        root.addHandler(handler)
    elif not root.handlers:
        root.addHandler(handler)

    if cfg.sdk_debug:
        enable_sdk_debug_logging()
    else:
        logging.getLogger("boto3").setLevel(logging.WARNING)
        logging.getLogger("botocore").setLevel(logging.WARNING)
        logging.getLogger("urllib3").setLevel(logging.WARNING)

    return cfg
