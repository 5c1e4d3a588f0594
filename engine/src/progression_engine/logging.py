"""Structured logging for the progression engine and its CLI.

PROGRESSION_LOG_FORMAT selects "json" (default) or "text". Engine modules
attach context through ``extra={"progression_<name>": ...}``; both formats
render those fields.
"""

import json
import logging
import sys
import traceback
from datetime import datetime, timezone

_EXTRA_PREFIX = "progression_"
_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _context(record: logging.LogRecord) -> dict:
    return {
        key[len(_EXTRA_PREFIX):]: value
        for key, value in record.__dict__.items()
        if key.startswith(_EXTRA_PREFIX)
    }


class JSONFormatter(logging.Formatter):
    """Emit log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
        }
        context = _context(record)
        if context:
            log_entry["context"] = context

        if record.exc_info and record.exc_info[1] is not None:
            log_entry["exception"] = "".join(traceback.format_exception(*record.exc_info))

        return json.dumps(log_entry, default=str)


class TextFormatter(logging.Formatter):
    """Plain one-line format with ``key=value`` context appended."""

    def __init__(self) -> None:
        super().__init__(_TEXT_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = _context(record)
        if not context:
            return line
        pairs = " ".join(f"{key}={value}" for key, value in sorted(context.items()))
        head, sep, tail = line.partition("\n")
        return f"{head} [{pairs}]{sep}{tail}"


_FORMATTERS: dict[str, type[logging.Formatter]] = {
    "json": JSONFormatter,
    "text": TextFormatter,
}


def setup_logging(log_format: str, level: int | str = logging.INFO) -> None:
    """Send every record to stderr through one formatter, replacing prior root handlers."""
    try:
        formatter = _FORMATTERS[log_format]()
    except KeyError:
        raise ValueError(f"unknown log format: {log_format}") from None

    root = logging.getLogger()
    for stale in root.handlers[:]:
        root.removeHandler(stale)

    stream = logging.StreamHandler(sys.stderr)
    stream.setFormatter(formatter)
    root.addHandler(stream)
    root.setLevel(level.upper() if isinstance(level, str) else level)
