"""Decoding of NDS textures (with their palettes) into RGBA8888 pixels."""

from __future__ import annotations

import struct
from collections.abc import Callable, Iterator

from apicula.errors import NitroError
from apicula.texture_format import TextureParams

Pixel = tuple[int, int, int, int]
_TRANSPARENT: Pixel = (0, 0, 0, 0)


def _extend_5bit_to_8bit(x: int) -> int:
    return ((x << 3) | (x >> 2)) & 0xFF


def _a3_to_a5(x: int) -> int:
    return (x << 2) | (x >> 1)


def rgb555a5(rgb555: int, a5: int) -> Pixel:
    """Convert an RGB555 colour and a 5-bit alpha to an RGBA8888 tuple."""
    return (
        _extend_5bit_to_8bit(rgb555 & 0x1F),
        _extend_5bit_to_8bit((rgb555 >> 5) & 0x1F),
        _extend_5bit_to_8bit((rgb555 >> 10) & 0x1F),
        _extend_5bit_to_8bit(a5 & 0x1F),
    )


def _avg(c1: Pixel, c2: Pixel) -> Pixel:
    return tuple((a + b) // 2 for a, b in zip(c1, c2))  # type: ignore[return-value]


def _avg358(c1: Pixel, c2: Pixel) -> Pixel:
    return tuple((3 * a + 5 * b) // 8 for a, b in zip(c1, c2))  # type: ignore[return-value]


def _words(data: bytes, fmt: str) -> tuple[int, ...]:
    size = struct.calcsize(fmt)
    count = len(data) // size
    return struct.unpack_from(f"<{count}{fmt}", data)


def _require(data: bytes, n: int, what: str) -> None:
    if len(data) < n:
        raise NitroError(f"{what} too short: need {n} bytes, got {len(data)}")


def _palette_lookup(palette: bytes) -> Callable[[int], int]:
    colors = _words(palette, "H")

    def lookup(i: int) -> int:
        return colors[i] if i < len(colors) else 0

    return lookup


def decode_texture(
    params: TextureParams,
    data1: bytes,
    data2: bytes = b"",
    palette: bytes | None = None,
) -> bytes:
    """Decode a texture to RGBA8888 bytes, row by row.

    ``palette`` holds the palette's RGB555 little-endian colours starting at
    the palette's offset, or is None for textures that need no palette.
    """
    fmt = params.format()
    if fmt.desc().requires_palette and palette is None:
        raise NitroError("texture required a palette")
    if fmt.code == 0:
        raise NitroError("texture had format 0")

    pal = _palette_lookup(bytes(palette or b""))
    data1 = bytes(data1)
    data2 = bytes(data2)

    if fmt.code == 1:
        pixels = _decode_a3i5(params, data1, pal)
    elif fmt.code in (2, 3, 4):
        pixels = _decode_indexed(params, data1, pal)
    elif fmt.code == 5:
        pixels = _decode_block_compressed(params, data1, data2, pal)
    elif fmt.code == 6:
        pixels = _decode_a5i3(params, data1, pal)
    else:
        pixels = _decode_direct(params, data1)

    out = bytearray()
    for pixel in pixels:
        out.extend(pixel)
    return bytes(out)


def _decode_a3i5(params: TextureParams, data: bytes, pal: Callable[[int], int]) -> Iterator[Pixel]:
    w, h = params.dim()
    _require(data, w * h, "texture data")
    for x in data[: w * h]:
        yield rgb555a5(pal(x & 0x1F), _a3_to_a5(x >> 5))


def _decode_indexed(params: TextureParams, data: bytes, pal: Callable[[int], int]) -> Iterator[Pixel]:
    w, h = params.dim()
    fmt = params.format()
    bpp = fmt.desc().bpp
    num_bytes = fmt.byte_len(w, h)
    _require(data, num_bytes, "texture data")
    color0_transparent = params.is_color0_transparent()
    mask = (1 << bpp) - 1
    for byte in data[:num_bytes]:
        for shift in range(0, 8, bpp):
            u = (byte >> shift) & mask
            alpha = 0 if u == 0 and color0_transparent else 31
            yield rgb555a5(pal(u), alpha)


def _decode_block_compressed(
    params: TextureParams, data1: bytes, data2: bytes, pal: Callable[[int], int]
) -> Iterator[Pixel]:
    w, h = params.dim()
    blocks_x = w // 4
    num_blocks = w * h // 16
    _require(data1, 4 * num_blocks, "texture data")
    _require(data2, 2 * num_blocks, "texture index data")
    blocks = _words(data1[: 4 * num_blocks], "I")
    extras = _words(data2[: 2 * num_blocks], "H")

    for y in range(h):
        for x in range(w):
            block_idx = blocks_x * (y // 4) + (x // 4)
            block = blocks[block_idx]
            extra = extras[block_idx]

            texel_off = 2 * (4 * (y % 4) + (x % 4))
            texel = (block >> texel_off) & 3
            mode = (extra >> 14) & 3
            pal_addr = (extra & 0x3FFF) << 1

            def color(n: int) -> Pixel:
                return rgb555a5(pal(pal_addr + n), 31)

            if texel in (0, 1):
                yield color(texel)
            elif mode == 0:
                yield color(2) if texel == 2 else _TRANSPARENT
            elif mode == 1:
                yield _avg(color(0), color(1)) if texel == 2 else _TRANSPARENT
            elif mode == 2:
                yield color(texel)
            elif texel == 2:
                yield _avg358(color(1), color(0))
            else:
                yield _avg358(color(0), color(1))


def _decode_a5i3(params: TextureParams, data: bytes, pal: Callable[[int], int]) -> Iterator[Pixel]:
    w, h = params.dim()
    _require(data, w * h, "texture data")
    for x in data[: w * h]:
        yield rgb555a5(pal(x & 0x7), x >> 3)


def _decode_direct(params: TextureParams, data: bytes) -> Iterator[Pixel]:
    w, h = params.dim()
    num_texels = w * h
    _require(data, 2 * num_texels, "texture data")
    for texel in _words(data[: 2 * num_texels], "H"):
        yield rgb555a5(texel, 31 if texel & 0x8000 else 0)