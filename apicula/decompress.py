"""Decompression of the LZ77 variants found in the NDS BIOS (types 0x10, 0x11)."""

from __future__ import annotations

from dataclasses import dataclass

from apicula.errors import NitroError

_MIN_SIZE = 40
_MAX_SIZE = (1 << 19) * 4


class DecompressError(NitroError):
    """Raised when data at the given position does not decompress."""

    def __init__(self, msg: str = "DecompressFailed") -> None:
        super().__init__(msg)


@dataclass(frozen=True)
class DecompressResult:
    """Decompressed bytes and the offset just past the compressed stream."""

    data: bytes
    end: int


class _Reader:
    def __init__(self, data: bytes, pos: int) -> None:
        self.data = data
        self.pos = pos

    def take(self, n: int) -> bytes:
        if self.pos < 0 or self.pos + n > len(self.data):
            raise DecompressError()
        chunk = self.data[self.pos:self.pos + n]
        self.pos += n
        return chunk

    def u8(self) -> int:
        return self.take(1)[0]

    def u32(self) -> int:
        return int.from_bytes(self.take(4), "little")


def decompress(data: bytes, offset: int = 0) -> DecompressResult:
    """Try to decompress the stream starting at ``data[offset]``."""
    data = bytes(data)
    if not 0 <= offset < len(data):
        raise DecompressError()
    kind = data[offset]
    if kind not in (0x10, 0x11):
        raise DecompressError()

    reader = _Reader(data, offset)
    header = reader.u32()
    if header & 0xFF != kind:
        raise DecompressError()
    size = header >> 8
    if size == 0:
        size = reader.u32()
    if size < _MIN_SIZE or size > _MAX_SIZE:
        raise DecompressError()

    backref = _backref_10 if kind == 0x10 else _backref_11
    out = bytearray()
    while len(out) < size:
        flags = reader.u8()
        for _ in range(8):
            compressed = flags & 0x80
            flags = (flags << 1) & 0xFF
            if not compressed:
                out.append(reader.u8())
            else:
                ofs, n = backref(reader)
                if len(out) + n > size or len(out) < ofs:
                    raise DecompressError()
                for _ in range(n):
                    out.append(out[-ofs])
            if len(out) >= size:
                break

    return DecompressResult(data=bytes(out), end=reader.pos)


def _backref_10(reader: _Reader) -> tuple[int, int]:
    hi, lo = reader.take(2)
    x = (hi << 8) | lo  # stored big-endian
    return (x & 0xFFF) + 1, (x >> 12) + 3


def _backref_11(reader: _Reader) -> tuple[int, int]:
    first = reader.u8()
    a, b = first >> 4, first & 0xF
    if a == 0:
        cd = reader.u8()
        c, d = cd >> 4, cd & 0xF
        ef = reader.u8()
        n = ((b << 4) | c) + 0x11
        ofs = ((d << 8) | ef) + 1
    elif a == 1:
        cd = reader.u8()
        ef = reader.u8()
        e, f = ef >> 4, ef & 0xF
        gh = reader.u8()
        n = ((b << 12) | (cd << 4) | e) + 0x111
        ofs = ((f << 8) | gh) + 1
    else:
        cd = reader.u8()
        n = a + 1
        ofs = ((b << 8) | cd) + 1
    return ofs, n