"""An in-memory glTF document with its binary buffers, and writers for it."""

from __future__ import annotations

import json
import math
import struct
from dataclasses import dataclass, field
from typing import Any, BinaryIO


@dataclass
class Buffer:
    """A chunk of binary data that is laid out at the given alignment."""

    data: bytearray = field(default_factory=bytearray)
    alignment: int = 4


def _align(n: int, alignment: int) -> int:
    rem = n % alignment
    return n if rem == 0 else n + alignment - rem


def normalized_u8(x: float) -> int:
    """Encode ``x`` in [0, 1] as a normalized unsigned byte."""
    if math.isnan(x):
        return 0
    value = math.floor(x * 255.0 + 0.5)
    return max(0, min(255, value))


class GlTF:
    """A glTF JSON document plus the buffers its buffer views point into."""

    def __init__(self) -> None:
        self.buffers: list[Buffer] = []
        self.json: dict[str, Any] = {
            "asset": {"version": "2.0"},
            "bufferViews": [],
            "accessors": [],
            "extensionsUsed": [],
            "extensionsRequired": [],
        }

    def add_buffer(self, buffer: Buffer) -> int:
        """Append a buffer and return its index."""
        self.buffers.append(buffer)
        return len(self.buffers) - 1

    def cleanup(self) -> None:
        """Remove empty top-level collections from the JSON."""
        for key in ("accessors", "bufferViews", "extensionsUsed", "extensionsRequired"):
            if not self.json.get(key):
                self.json.pop(key, None)

    def _buffer_offsets(self) -> tuple[list[int], int]:
        offsets = []
        length = 0
        for buffer in self.buffers:
            length = _align(length, buffer.alignment)
            offsets.append(length)
            length += len(buffer.data)
        return offsets, _align(length, 4)

    def update_buffer_views(self) -> int:
        """Point buffer views into one joined buffer; return its byte length."""
        offsets, total = self._buffer_offsets()
        self.json["buffers"] = [{"byteLength": total}]
        for view in self.json.get("bufferViews", []):
            old = view["buffer"]
            view["buffer"] = 0
            view["byteOffset"] = view.get("byteOffset", 0) + offsets[old]
        return total

    def write_buffer(self, w: BinaryIO) -> None:
        """Write all buffers, joined and padded, to ``w``."""
        length = 0
        for buffer in self.buffers:
            padded = _align(length, buffer.alignment)
            if padded != length:
                w.write(bytes(padded - length))
                length = padded
            w.write(bytes(buffer.data))
            length += len(buffer.data)
        padded = _align(length, 4)
        if padded != length:
            w.write(bytes(padded - length))

    def write_glb(self, w: BinaryIO) -> None:
        """Write the document as a binary .glb file."""
        bin_len = self.update_buffer_views()
        text = json.dumps(self.json, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
        text += b" " * (_align(len(text), 4) - len(text))
        filesize = 12 + 8 + len(text) + 8 + bin_len

        w.write(b"glTF" + struct.pack("<II", 2, filesize))
        w.write(struct.pack("<I", len(text)) + b"JSON")
        w.write(text)
        w.write(struct.pack("<I", bin_len) + b"BIN\0")
        self.write_buffer(w)

    def write_gltf_bin(self, gltf_w: BinaryIO, bin_w: BinaryIO, buffer_uri: str) -> None:
        """Write the JSON to ``gltf_w`` and the joined buffer to ``bin_w``."""
        self.update_buffer_views()
        self.json["buffers"][0]["uri"] = buffer_uri
        gltf_w.write(json.dumps(self.json, indent=2, ensure_ascii=False).encode("utf-8"))
        self.write_buffer(bin_w)