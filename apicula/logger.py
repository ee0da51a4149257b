"""Logging setup that prints messages like ``[WARN] Lorem ipsum``."""

from __future__ import annotations

import logging
import sys

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

_GREEN = "\x1b[32m"
_RESET = "\x1b[0m"

_LEVEL_NAMES = {
    logging.WARNING: "WARN",
    logging.CRITICAL: "ERROR",
}


class BracketFormatter(logging.Formatter):
    """Formats records as ``[LEVEL] message``, optionally coloured green."""

    def __init__(self, use_color: bool = False) -> None:
        super().__init__()
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        level = _LEVEL_NAMES.get(record.levelno, record.levelname)
        text = f"[{level}] {record.getMessage()}"
        if self.use_color:
            text = f"{_GREEN}{text}{_RESET}"
        return text


def init_logger(verbosity: int = 0) -> logging.Handler:
    """Install the stderr handler on the root logger and set its level.

    Verbosity 0 logs from INFO, 1 from DEBUG, anything higher from TRACE.
    """
    if verbosity <= 0:
        level = logging.INFO
    elif verbosity == 1:
        level = logging.DEBUG
    else:
        level = TRACE

    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, "_apicula", False):
            root.removeHandler(handler)

    stream = sys.stderr
    use_color = bool(getattr(stream, "isatty", lambda: False)())
    handler = logging.StreamHandler(stream)
    handler.setFormatter(BracketFormatter(use_color=use_color))
    handler._apicula = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    root.setLevel(level)
    return handler