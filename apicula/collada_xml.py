"""A small string builder for indented XML."""

from __future__ import annotations

import math
from decimal import Decimal
from typing import Any

import numpy as np

INDENT_SIZE = 2


def _format_float(x: Any) -> str:
    value = float(x)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    source = str(x) if isinstance(x, np.floating) and not isinstance(x, float) else repr(value)
    text = format(Decimal(source), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _display(x: Any) -> str:
    if isinstance(x, (bool, np.bool_)):
        return "true" if x else "false"
    if isinstance(x, (float, np.floating)):
        return _format_float(x)
    return str(x)


class Xml:
    """Accumulates XML text, tracking the indent of the current element."""

    def __init__(self) -> None:
        self._parts: list[str] = []
        self._s = ""
        self.cur_indent = 0

    def string(self) -> str:
        """The text written so far."""
        return self._s

    def start_open_tag(self) -> None:
        self._s += "<"
        self.cur_indent += 1

    def start_close_tag(self) -> None:
        self._s += "</"
        self.cur_indent -= 1

    def deindent_and_start_close_tag(self) -> None:
        self._s = self._s[:-INDENT_SIZE] if INDENT_SIZE else self._s
        self._s += "</"
        self.cur_indent -= 1

    def nl(self) -> None:
        self._s += "\n" + " " * (INDENT_SIZE * max(self.cur_indent, 0))

    def end_tag(self) -> None:
        self._s += ">"

    def end_empty_tag(self) -> None:
        self._s += "/>"
        self.cur_indent -= 1

    def push_str(self, s: str) -> None:
        self._s += s

    def push_text(self, x: Any) -> None:
        self._s += _display(x)

    def matrix(self, m: Any) -> None:
        """Write a 4x4 matrix as 16 numbers in row-major order."""
        rows = np.asarray(m, dtype=float).reshape(4, 4)
        self._s += " ".join(_format_float(v) for v in rows.flat)