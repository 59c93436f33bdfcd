"""
Structured Logging Configuration

One line per event: timestamp, level, logger, and the case a message
concerns when it was logged through a case logger. Console output is
coloured only on a terminal; the optional log file gets the same layout
without colour.
"""
import logging
import os
import sys
from typing import Any, Dict, Optional
from datetime import datetime, timezone


class StructuredFormatter(logging.Formatter):
    """Pipeline log lines, tagged with the case id when one is attached."""

    LEVEL_COLORS = {
        logging.DEBUG: '\033[36m',     # Cyan
        logging.INFO: '\033[32m',      # Green
        logging.WARNING: '\033[33m',   # Yellow
        logging.ERROR: '\033[31m',     # Red
        logging.CRITICAL: '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def __init__(self, use_color: bool = True):
        super().__init__()
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()

        parts = [f"[{timestamp}]", f"{record.levelname:8}", f"[{record.name}]"]
        case_id = getattr(record, "case_id", None)
        if case_id:
            parts.append(f"[case {case_id}]")
        parts.append(record.getMessage())
        line = " ".join(parts)

        if self.use_color and record.levelno in self.LEVEL_COLORS:
            line = f"{self.LEVEL_COLORS[record.levelno]}{line}{self.RESET}"

        if record.exc_info:
            line += f"\n{self.formatException(record.exc_info)}"

        return line


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """
    Configure the root logger for the pipeline.

    Replaces any existing handlers, so calling it again (for example from
    ``create_app``) applies new settings rather than duplicating output.

    Args:
        level: Logging level name; unknown names fall back to INFO
        log_file: Optional file path that receives uncoloured lines
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(StructuredFormatter(use_color=sys.stdout.isatty()))
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(StructuredFormatter(use_color=False))
        root_logger.addHandler(file_handler)


class CaseLogAdapter(logging.LoggerAdapter):
    """Attaches ``case_id`` to every record so the formatter can tag the line."""

    def process(self, msg: Any, kwargs: Dict[str, Any]):
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs


def get_case_logger(name: str, case_id: str) -> CaseLogAdapter:
    """Logger for work on a single case, e.g. one dispatcher run."""
    return CaseLogAdapter(logging.getLogger(name), {"case_id": case_id})


def get_logger(name: str) -> logging.Logger:
    """Module logger; use ``get_logger(__name__)``."""
    return logging.getLogger(name)


# Initialize logging on module import
setup_logging(os.getenv("LOG_LEVEL", "INFO"), os.getenv("LOG_FILE") or None)
