"""Helpers for finding and naming Nitro files packed inside larger files."""

from __future__ import annotations

import re
from collections.abc import Mapping

_STAMP_RE = re.compile(rb"B(?:MD|TX|CA|TP|TA)0")
_COMPRESSION_RE = re.compile(rb"[\x10\x11]")

_EXTENSIONS = {
    b"BMD0": "nsbmd",
    b"BTX0": "nsbtx",
    b"BCA0": "nsbca",
    b"BTP0": "nsbtp",
    b"BTA0": "nsbta",
}

_EMPTY_NAMES = {
    b"BMD0": "empty_model_file",
    b"BTX0": "empty_texture_file",
    b"BCA0": "empty_animation_file",
    b"BTP0": "empty_pattern_file",
    b"BTA0": "empty_material_anim_file",
}

_REPORT_KINDS = (
    (b"BMD0", "BMD"),
    (b"BTX0", "BTX"),
    (b"BCA0", "BCA"),
    (b"BTP0", "BTP"),
    (b"BTA0", "BTA"),
)


def find_next_stamp(data: bytes, start: int = 0) -> int | None:
    """Offset of the next BMD0/BTX0/BCA0/BTP0/BTA0 stamp at or after ``start``."""
    m = _STAMP_RE.search(data, start)
    return m.start() if m else None


def find_next_compression_start_byte(data: bytes, start: int = 0) -> int | None:
    """Offset of the next 0x10 or 0x11 byte at or after ``start``."""
    m = _COMPRESSION_RE.search(data, start)
    return m.start() if m else None


def file_extension(stamp: bytes) -> str:
    """File extension for a container with the given stamp."""
    return _EXTENSIONS.get(bytes(stamp), "nsbxx")


def empty_file_name(stamp: bytes) -> str:
    """Name used for a container that holds no items."""
    return _EMPTY_NAMES.get(bytes(stamp), "empty_unknown_file")


def report_line(counts: Mapping[bytes, int]) -> str:
    """Summary of how many files of each kind were extracted."""
    parts = []
    for stamp, label in _REPORT_KINDS:
        n = counts.get(stamp, 0)
        parts.append(f"{n} {label}{'' if n == 1 else 's'}")
    return f"Found {', '.join(parts)}."


class FileNameAllocator:
    """Hands out file names, adding a counter to avoid clashes."""

    def __init__(self) -> None:
        self.taken: set[str] = set()

    def allocate(self, name: str, extension: str) -> str:
        """Return a file name not handed out before."""
        candidate = f"{name}.{extension}"
        counter = 1
        while candidate in self.taken:
            candidate = f"{name}.{counter:03}.{extension}"
            counter += 1
        self.taken.add(candidate)
        return candidate