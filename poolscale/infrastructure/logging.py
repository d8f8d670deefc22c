"""
Centralized Logging

Architectural Intent:
- Provides structured JSON logging for all poolscale components
- Centralizes log configuration so library modules only create loggers
- Level comes from --debug, then --verbose, then the log_level config key;
  format comes from the log_format config key ("text" or "json")
- Refresh and scaling records carry provider/generation/node_group context,
  which the JSON formatter emits as top-level keys
"""

import json
import logging
import sys
from datetime import datetime, UTC
from typing import Optional

LOG_FORMATS = ("text", "json")

# Attributes passed through `extra=` that belong in structured output
CONTEXT_FIELDS = ("provider", "generation", "node_group")

TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):
    """Structured JSON log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                log_entry[field] = value
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry)


def parse_level(name: str) -> int:
    """Map a level name like 'info' to its logging constant, WARNING if unknown."""
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.WARNING


def resolve_level(
    log_level: Optional[str] = None, verbose: bool = False, debug: bool = False
) -> int:
    if debug:
        return logging.DEBUG
    if verbose:
        return logging.INFO
    return parse_level(log_level or "WARNING")


def configure_logging(
    level: int = logging.INFO,
    json_format: bool = False,
) -> None:
    """Configure logging for the poolscale application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, etc.)
        json_format: If True, use JSON structured output. Otherwise human-readable.
    """
    root = logging.getLogger("poolscale")
    root.setLevel(level)

    # Remove existing handlers
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)

    if json_format:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    root.addHandler(handler)


def configure_from_settings(
    log_level: str,
    log_format: str,
    verbose: bool = False,
    debug: bool = False,
) -> int:
    """Apply the configured level and format, with CLI flags taking precedence.

    Returns the effective level. An unknown log_format falls back to text
    with a warning rather than failing startup.
    """
    level = resolve_level(log_level, verbose=verbose, debug=debug)
    fmt = log_format.lower()
    configure_logging(level=level, json_format=fmt == "json")
    if fmt not in LOG_FORMATS:
        logging.getLogger(__name__).warning(
            "Unknown log format %r, using text (expected one of %s)",
            log_format,
            ", ".join(LOG_FORMATS),
        )
    return level
