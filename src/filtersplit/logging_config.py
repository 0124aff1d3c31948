"""
Logging configuration for Filter Split.

The splitter reports each drop decision as a DEBUG record carrying a
``split_event`` attribute plus event fields:

- ``group_dropped``: a nested set spanned 0 or 3+ keys (``key_count``)
- ``filter_excluded``: the classifier gave no key (``operator``)
- ``cross_table_keys_dropped``: a cross-table re-split produced keys that
  are not carried (``keys``)

``setup_logging`` sends those records to a dedicated split trace log and
everything at or above the console level to stderr.
"""

import json
import logging
import logging.handlers
import os
import sys
from pathlib import Path

LOG_DIR = Path(os.getenv("FILTERSPLIT_LOG_DIR", "logs"))
TRACE_FILE = "filtersplit-trace.log"

SPLIT_EVENT_FIELDS = ("split_event", "key_count", "operator", "keys")


class SplitEventFilter(logging.Filter):
    """Pass only records emitted for a split decision."""

    def filter(self, record: logging.LogRecord) -> bool:
        return getattr(record, "split_event", None) is not None


class SplitEventFormatter(logging.Formatter):
    """One JSON object per split decision."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in SPLIT_EVENT_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                payload[name] = value
        return json.dumps(payload, default=str)


def setup_logging(
    console_level: str = "WARNING",
    *,
    trace_file: bool = True,
    json_format: bool = True,
) -> logging.Logger:
    """
    Configure the ``filtersplit`` logger.

    Args:
        console_level: stderr level (DEBUG, INFO, WARNING, ERROR)
        trace_file: Write split decisions to LOG_DIR/filtersplit-trace.log
        json_format: One JSON object per trace line instead of plain text

    Returns:
        The configured package logger.
    """
    package_logger = logging.getLogger("filtersplit")
    package_logger.setLevel(logging.DEBUG)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(getattr(logging, console_level.upper(), logging.WARNING))
    console_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    package_logger.addHandler(console_handler)

    if trace_file:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        trace_handler = logging.handlers.RotatingFileHandler(
            LOG_DIR / TRACE_FILE,
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        trace_handler.setLevel(logging.DEBUG)
        trace_handler.addFilter(SplitEventFilter())
        if json_format:
            trace_handler.setFormatter(SplitEventFormatter())
        else:
            trace_handler.setFormatter(
                logging.Formatter(
                    "%(asctime)s | %(split_event)s | %(message)s",
                    datefmt="%Y-%m-%d %H:%M:%S",
                )
            )
        package_logger.addHandler(trace_handler)

    return package_logger
