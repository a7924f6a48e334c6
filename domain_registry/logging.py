"""
domain_registry.logging — stderr logging for the CLI and embedding hosts.

Library modules only create module loggers (`logging.getLogger(__name__)`);
nothing is configured until a process entry point calls `setup_logging()`.

Formats
-------
plain : "2026-01-01T00:00:00Z INFO domain_registry.registry registered ..."
json  : one JSON object per line with ts, level, logger, msg (+ exc on errors)

Level and format default to DOMAIN_REGISTRY_LOG_LEVEL / DOMAIN_REGISTRY_LOG_FORMAT.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional

from .config import load_config

_HANDLER_NAME = "domain_registry"


def _utc_iso(ts: float) -> str:
    return datetime.fromtimestamp(ts, tz=timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": _utc_iso(record.created),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


class _PlainFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        line = f"{_utc_iso(record.created)} {record.levelname} {record.name} {record.getMessage()}"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def setup_logging(level: Optional[str] = None, fmt: Optional[str] = None) -> logging.Logger:
    """
    Attach a single stderr handler to the `domain_registry` logger.

    Idempotent: calling again replaces the handler installed by a previous call.
    """
    cfg = load_config()
    level_name = (level or cfg.log_level).upper()
    fmt_name = (fmt or cfg.log_format).lower()

    logger = logging.getLogger("domain_registry")
    for h in list(logger.handlers):
        if h.get_name() == _HANDLER_NAME:
            logger.removeHandler(h)

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(_JsonFormatter() if fmt_name == "json" else _PlainFormatter())
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level_name, logging.INFO))
    return logger


__all__ = ["setup_logging"]
