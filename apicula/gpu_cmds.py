"""Parsing of packed NDS GPU command streams.

Commands are packed as groups of four one-byte opcodes followed by the
32-bit little-endian parameters of each of those four commands in turn.
"""

from __future__ import annotations

import struct
from collections import deque
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Union

from apicula.errors import NitroError

Vec2 = tuple[float, float]
Vec3 = tuple[float, float, float]


class GpuCmdError(NitroError):
    """Raised when a GPU command stream is malformed or unsupported."""


@dataclass(frozen=True)
class Nop:
    """Do nothing."""


@dataclass(frozen=True)
class Restore:
    """Load the matrix from stack slot ``idx`` into the current matrix."""

    idx: int


@dataclass(frozen=True)
class Scale:
    """Precompose the current matrix with a scaling."""

    scale: Vec3


@dataclass(frozen=True)
class Begin:
    """Begin a primitive group of the given type (tris, quads, ...)."""

    prim_type: int


@dataclass(frozen=True)
class End:
    """End the current primitive group."""


@dataclass(frozen=True)
class Vertex:
    """Send a vertex at an untransformed position."""

    position: Vec3


@dataclass(frozen=True)
class TexCoord:
    """Set the texture coordinate (in texels) for subsequent vertices."""

    texcoord: Vec2


@dataclass(frozen=True)
class Color:
    """Set the colour for subsequent vertices."""

    color: Vec3


@dataclass(frozen=True)
class Normal:
    """Set the normal vector for subsequent vertices."""

    normal: Vec3


GpuCmd = Union[Nop, Restore, Scale, Begin, End, Vertex, TexCoord, Color, Normal]

_SIZES = (
    0, -1, -1, -1, -1, -1, -1, -1, -1, -1, -1,
    -1, -1, -1, -1, -1, 1, 0, 1, 1, 1, 0,
    16, 12, 16, 12, 9, 3, 3, -1, -1, -1, 1,
    1, 1, 2, 1, 1, 1, 1, 1, 1, 1, 1,
    -1, -1, -1, -1, 1, 1, 1, 1, 1, -1, -1,
    -1, -1, -1, -1, -1, -1, -1, -1, -1, 1, 0,
)


def num_params(opcode: int) -> int:
    """Number of 32-bit parameters ``opcode`` takes."""
    if not 0 <= opcode < len(_SIZES) or _SIZES[opcode] == -1:
        raise GpuCmdError(f"unknown GPU opcode: {opcode:#x}")
    return _SIZES[opcode]


def _bits(x: int, lo: int, hi: int) -> int:
    return (x >> lo) & ((1 << (hi - lo)) - 1)


def _fixed(x: int, sign_bits: int, int_bits: int, frac_bits: int) -> float:
    """Interpret ``x`` as a two's-complement fixed-point number."""
    total = sign_bits + int_bits + frac_bits
    x &= (1 << total) - 1
    if sign_bits and x >> (total - 1):
        x -= 1 << total
    return x / (1 << frac_bits)


def _pos16(x: int) -> float:
    return _fixed(x, 1, 3, 12)


def _parse(opcode: int, params: tuple[int, ...], vertex: Vec3) -> GpuCmd:
    if opcode == 0x00:
        return Nop()
    if opcode == 0x14:
        return Restore(idx=params[0] & 31)
    if opcode == 0x1B:
        return Scale(scale=tuple(_fixed(p, 1, 19, 12) for p in params[:3]))  # type: ignore[arg-type]
    if opcode == 0x40:
        return Begin(prim_type=params[0] & 3)
    if opcode == 0x41:
        return End()
    if opcode == 0x23:
        p0, p1 = params[0], params[1]
        return Vertex(position=(
            _pos16(_bits(p0, 0, 16)), _pos16(_bits(p0, 16, 32)), _pos16(_bits(p1, 0, 16))
        ))
    if opcode == 0x24:
        p = params[0]
        return Vertex(position=tuple(
            _fixed(_bits(p, lo, lo + 10), 1, 3, 6) for lo in (0, 10, 20)
        ))  # type: ignore[arg-type]
    if opcode in (0x25, 0x26, 0x27):
        p = params[0]
        a, b = _pos16(_bits(p, 0, 16)), _pos16(_bits(p, 16, 32))
        x, y, z = vertex
        if opcode == 0x25:
            return Vertex(position=(a, b, z))
        if opcode == 0x26:
            return Vertex(position=(a, y, b))
        return Vertex(position=(x, a, b))
    if opcode == 0x28:
        p = params[0]
        # 10-bit differences scaled by 1/2^3 into the same 1.3.12 units.
        deltas = [_fixed(_bits(p, lo, lo + 10), 1, 0, 9) / 8 for lo in (0, 10, 20)]
        return Vertex(position=tuple(v + d for v, d in zip(vertex, deltas)))  # type: ignore[arg-type]
    if opcode == 0x22:
        p = params[0]
        return TexCoord(texcoord=(
            _fixed(_bits(p, 0, 16), 1, 11, 4), _fixed(_bits(p, 16, 32), 1, 11, 4)
        ))
    if opcode == 0x20:
        p = params[0]
        return Color(color=tuple(_bits(p, lo, lo + 5) / 31.0 for lo in (0, 5, 10)))  # type: ignore[arg-type]
    if opcode == 0x21:
        p = params[0]
        return Normal(normal=tuple(
            _fixed(_bits(p, lo, lo + 10), 1, 0, 9) for lo in (0, 10, 20)
        ))  # type: ignore[arg-type]
    raise GpuCmdError(f"unimplemented GPU opcode: {opcode:#x}")


def parse_gpu_cmds(cmds: bytes) -> Iterator[GpuCmd]:
    """Yield the commands in a packed command buffer.

    Raises GpuCmdError at the first malformed command; nothing follows it.
    """
    data = bytes(cmds)
    pos = 0
    fifo: deque[int] = deque()
    vertex: Vec3 = (0.0, 0.0, 0.0)

    while True:
        if not fifo:
            remaining = len(data) - pos
            if remaining == 0:
                return
            if remaining < 4:
                raise GpuCmdError("GPU has too few opcodes")
            fifo.extend(data[pos:pos + 4])
            pos += 4

        opcode = fifo.popleft()
        count = num_params(opcode)
        if len(data) - pos < 4 * count:
            raise GpuCmdError("buffer too short for GPU opcode parameters")
        params = struct.unpack_from(f"<{count}I", data, pos)
        pos += 4 * count

        cmd = _parse(opcode, params, vertex)
        if isinstance(cmd, Vertex):
            vertex = cmd.position
        yield cmd