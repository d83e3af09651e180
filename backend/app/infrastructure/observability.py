"""Structured Logging — JSON and text formatters keyed on editor, form and field.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Editor context (editor_id, form_id, field_id) plus error_code, event and path
      are surfaced when a log call passes them in extra
    - JSON format in production, human-readable text with a context suffix in development

Design Decisions:
    - setup_logging called once on startup via lifespan
    - context_extra() builds the extra dict from an ErrorContext so handlers and
      services tag records the same way
"""

import logging
import json
from datetime import datetime, timezone

from app.core.errors import ErrorContext

CONTEXT_KEYS = ("editor_id", "form_id", "field_id", "error_code", "event", "path")


def context_extra(context: ErrorContext, **more: str | None) -> dict:
    """Logging extra for an error context, dropping unset keys."""
    extra = {
        "editor_id": context.editor_id,
        "form_id": context.form_id,
        "field_id": context.field_id,
        **more,
    }
    return {k: v for k, v in extra.items() if v is not None}


def _record_context(record: logging.LogRecord) -> dict:
    return {
        key: record.__dict__[key]
        for key in CONTEXT_KEYS
        if record.__dict__.get(key) is not None
    }


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_record_context(record),
        }
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


class EditorTextFormatter(logging.Formatter):
    """Human-readable lines ending in [editor_id=... field_id=...] when tagged."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = _record_context(record)
        if not context:
            return line
        suffix = " ".join(f"{k}={v}" for k, v in context.items())
        head, sep, tail = line.partition("\n")
        return f"{head} [{suffix}]{sep}{tail}"


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Configure logging for the application."""
    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter() if fmt == "json" else EditorTextFormatter())
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
