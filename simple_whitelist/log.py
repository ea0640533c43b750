from __future__ import annotations
import logging
import os
import sys
from typing import TextIO

PREFIX = "SimpleWhitelist"
DEFAULT_LEVEL = os.getenv("WHITELIST_LOG_LEVEL", "INFO")
LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_LEVEL_LABELS = {
    logging.DEBUG: "Debug",
    logging.INFO: "Info",
    logging.WARNING: "Warning",
    logging.ERROR: "Error",
    logging.CRITICAL: "Error",
}


class PrefixFormatter(logging.Formatter):
    """Render records as ``SimpleWhitelist [Info] message``."""

    def __init__(self) -> None:
        super().__init__(fmt=f"{PREFIX} [%(label)s] %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        record.label = _LEVEL_LABELS.get(record.levelno, record.levelname.title())
        text = super().format(record)
        # Prefix every traceback line too, so error output is greppable.
        first, *rest = text.split("\n")
        return "\n".join([first] + [f"{PREFIX} [{record.label}] {line}" for line in rest])


def configure_logging(level: str = DEFAULT_LEVEL, stream: TextIO | None = None) -> None:
    if level.upper() not in LEVELS:
        raise ValueError(f"Unknown log level: {level}")
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(PrefixFormatter())
    root = logging.getLogger("simple_whitelist")
    root.handlers[:] = [handler]
    # Lines are already prefixed; the host root logger must not print them again.
    root.propagate = False
    root.setLevel(level.upper())
