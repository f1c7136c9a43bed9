"""
Thermalnet Logging Configuration.

Console output goes to stderr, so ``--json`` output on stdout stays
parseable. An optional log file receives every record as one JSON object
per line.

Records may carry context through ``extra=``:
- hour:        simulated hour being transformed or indexed
- building_id: building whose field was defaulted
- borefield_id: borefield being analysed
- source:      path or URL being loaded

Usage:
    import logging

    logger = logging.getLogger(__name__)
    logger.warning("Duplicate hour", extra={"hour": 12})
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Union


DEFAULT_LOG_LEVEL = os.environ.get("THERMALNET_LOG_LEVEL", "INFO").upper()

CONTEXT_KEYS = ("hour", "building_id", "borefield_id", "source")


def record_context(record: logging.LogRecord) -> Dict[str, Any]:
    """Context extras present on a record, in CONTEXT_KEYS order."""
    return {key: getattr(record, key) for key in CONTEXT_KEYS if hasattr(record, key)}


class ThermalnetFormatter(logging.Formatter):
    """Console formatter; appends context extras and colours by level on a tty."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(self, use_colors: bool = True):
        self.use_colors = use_colors and sys.stderr.isatty()
        super().__init__(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)

        context = record_context(record)
        if context:
            pairs = ", ".join(f"{key}={value}" for key, value in context.items())
            formatted = f"{formatted} [{pairs}]"

        if self.use_colors:
            return f"{self.COLORS.get(record.levelname, '')}{formatted}{self.RESET}"
        return formatted


class JsonLineFormatter(logging.Formatter):
    """One JSON object per record, for log files."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(record_context(record))

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def setup_logging(
    level: str = DEFAULT_LOG_LEVEL,
    log_file: Optional[Union[str, Path]] = None,
) -> None:
    """
    Configure the root logger.

    Args:
        level: Console log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Also write every record (DEBUG and up) to this file as JSON lines
    """
    console_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(ThermalnetFormatter(use_colors=True))
    console_handler.setLevel(console_level)
    root_logger.addHandler(console_handler)

    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(JsonLineFormatter())
        file_handler.setLevel(logging.DEBUG)
        root_logger.addHandler(file_handler)
        root_logger.setLevel(logging.DEBUG)
    else:
        root_logger.setLevel(console_level)

    logging.getLogger("urllib3").setLevel(logging.WARNING)


_initialized = False


def ensure_logging(level: Optional[str] = None, log_file: Optional[Union[str, Path]] = None) -> None:
    """Set up logging once per process (application entry points only)."""
    global _initialized
    if not _initialized:
        setup_logging(level or DEFAULT_LOG_LEVEL, log_file)
        _initialized = True
