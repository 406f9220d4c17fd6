"""
Logging setup with up to three outputs:
  - stderr: human-readable, ANSI-colored console lines
  - file (optional): verbose debug log
  - file (optional): machine-readable single-line JSON (ndjson)

Every handler carries a RedactingFilter so signed URLs never leak the
Signature or AccessKeyId values into logs.
"""

from __future__ import annotations

import json
import logging
import os
import re
import sys
import time


# ANSI color codes
_RESET = "\033[0m"
_BOLD = "\033[1m"
_DIM = "\033[2m"
_RED = "\033[31m"
_YELLOW = "\033[33m"
_CYAN = "\033[36m"
_WHITE = "\033[37m"

_LEVEL_STYLES = {
    "DEBUG": (_DIM, "DBG"),
    "INFO": (_CYAN, "INF"),
    "WARNING": (_YELLOW, "WRN"),
    "ERROR": (_RED, "ERR"),
    "CRITICAL": (_RED + _BOLD, "CRT"),
}

_REDACTED_KEYS = ("Signature", "AccessKeyId")
_REDACT_RE = re.compile(r"(?<![A-Za-z])(%s)=([^&\s]+)" % "|".join(_REDACTED_KEYS))


def redact(text: str) -> str:
    """Mask credential-bearing query values, e.g. Signature=abc -> Signature=***."""
    return _REDACT_RE.sub(r"\1=***", text)


class RedactingFilter(logging.Filter):
    """Rewrites the rendered message with credential values masked."""

    def filter(self, record: logging.LogRecord) -> bool:
        msg = record.getMessage()
        redacted = redact(msg)
        if redacted != msg:
            record.msg = redacted
            record.args = ()
        return True


class ConsoleFormatter(logging.Formatter):
    """Human-readable log lines with timestamps and color-coded levels."""

    def __init__(self, use_color: bool = True):
        super().__init__()
        self._use_color = use_color and _supports_color()

    def format(self, record: logging.LogRecord) -> str:
        ts = time.strftime("%H:%M:%S", time.localtime(record.created))
        color, tag = _LEVEL_STYLES.get(record.levelname, (_WHITE, "???"))
        msg = record.getMessage()

        if self._use_color:
            line = f"{_DIM}{ts}{_RESET} {color}{tag}{_RESET} {msg}"
        else:
            line = f"{ts} {tag} {msg}"

        if record.exc_info and record.exc_info[1]:
            err = redact(str(record.exc_info[1]))
            line += f"\n{_RED}     {err}{_RESET}" if self._use_color else f"\n     {err}"

        return line


class JSONFormatter(logging.Formatter):
    """Single-line JSON for machine consumption."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "ts": time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created)),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = redact(str(record.exc_info[1]))
        return json.dumps(entry, ensure_ascii=False, separators=(",", ":"))


def setup_logging(
    level: str = "INFO",
    log_file: str | None = None,
    json_log_file: str | None = None,
) -> None:
    """
    Configure root logger.
      - Always: ConsoleFormatter on stderr at the configured level
      - Optionally: verbose DEBUG file log
      - Optionally: JSON file handler
    """
    root = logging.getLogger()
    # Root must be DEBUG so the file handlers capture everything
    root.setLevel(logging.DEBUG)

    for handler in root.handlers[:]:
        root.removeHandler(handler)

    redactor = RedactingFilter()

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(getattr(logging, level.upper(), logging.INFO))
    console.setFormatter(ConsoleFormatter())
    console.addFilter(redactor)
    root.addHandler(console)

    if log_file:
        verbose_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        verbose_handler.setLevel(logging.DEBUG)
        verbose_handler.setFormatter(logging.Formatter(
            fmt="%(asctime)s.%(msecs)03d %(levelname)-8s %(module)s:%(lineno)d - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))
        verbose_handler.addFilter(redactor)
        root.addHandler(verbose_handler)

    if json_log_file:
        fh = logging.FileHandler(json_log_file, mode="a", encoding="utf-8")
        fh.setFormatter(JSONFormatter())
        fh.addFilter(redactor)
        root.addHandler(fh)

    # httpx logs full request URLs at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def _supports_color() -> bool:
    """Check if stderr supports ANSI color."""
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("FORCE_COLOR"):
        return True
    return hasattr(sys.stderr, "isatty") and sys.stderr.isatty()
