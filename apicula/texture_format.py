"""NDS texture formats and the packed texture parameter word."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


def _bits(x: int, lo: int, hi: int) -> int:
    return (x >> lo) & ((1 << (hi - lo)) - 1)


class AlphaDesc(Enum):
    """How a format's alpha behaves, as stored in its description."""

    OPAQUE = "opaque"
    TRANSPARENT = "transparent"
    TRANSPARENT_DEPENDING_ON_PARAMS = "transparent_depending_on_params"
    TRANSLUCENT = "translucent"


class Alpha(Enum):
    """Alpha behaviour of a texture once its parameters are known."""

    OPAQUE = "opaque"  # alpha = 1
    TRANSPARENT = "transparent"  # alpha = 0 or 1
    TRANSLUCENT = "translucent"  # 0 <= alpha <= 1


@dataclass(frozen=True)
class FormatDesc:
    """Properties of an NDS texture format."""

    name: str
    requires_palette: bool
    bpp: int
    alpha_desc: AlphaDesc


DESCS: tuple[FormatDesc, ...] = (
    FormatDesc("None", False, 0, AlphaDesc.OPAQUE),
    FormatDesc("A3I5 Translucent Texture", True, 8, AlphaDesc.TRANSLUCENT),
    FormatDesc("4-Color Palette Texture", True, 2, AlphaDesc.TRANSPARENT_DEPENDING_ON_PARAMS),
    FormatDesc("16-Color Palette Texture", True, 4, AlphaDesc.TRANSPARENT_DEPENDING_ON_PARAMS),
    FormatDesc("256-Color Palette Texture", True, 8, AlphaDesc.TRANSPARENT_DEPENDING_ON_PARAMS),
    FormatDesc("Block-Compressed Texture", True, 2, AlphaDesc.TRANSPARENT),
    FormatDesc("A5I3 Translucent Texture", True, 8, AlphaDesc.TRANSLUCENT),
    FormatDesc("Direct RGBA Texture", False, 16, AlphaDesc.TRANSPARENT),
)


@dataclass(frozen=True)
class TextureFormat:
    """One of the eight NDS texture format codes."""

    code: int

    def __post_init__(self) -> None:
        if not 0 <= self.code < len(DESCS):
            raise ValueError(f"invalid texture format: {self.code}")

    def desc(self) -> FormatDesc:
        return DESCS[self.code]

    def byte_len(self, width: int, height: int) -> int:
        """Bytes a texture of the given size takes up in this format."""
        return width * height * self.desc().bpp // 8

    def alpha_type(self, params: TextureParams) -> Alpha:
        """Whether texels can be transparent or translucent with these params."""
        alpha_desc = self.desc().alpha_desc
        if alpha_desc is AlphaDesc.OPAQUE:
            return Alpha.OPAQUE
        if alpha_desc is AlphaDesc.TRANSPARENT:
            return Alpha.TRANSPARENT
        if alpha_desc is AlphaDesc.TRANSLUCENT:
            return Alpha.TRANSLUCENT
        return Alpha.TRANSPARENT if params.is_color0_transparent() else Alpha.OPAQUE


@dataclass(frozen=True)
class TextureParams:
    """The 32-bit TEXIMAGE_PARAM word."""

    value: int

    def offset(self) -> int:
        return _bits(self.value, 0, 16) << 3

    def repeat_s(self) -> bool:
        return _bits(self.value, 16, 17) != 0

    def repeat_t(self) -> bool:
        return _bits(self.value, 17, 18) != 0

    def mirror_s(self) -> bool:
        return _bits(self.value, 18, 19) != 0

    def mirror_t(self) -> bool:
        return _bits(self.value, 19, 20) != 0

    def width(self) -> int:
        return 8 << _bits(self.value, 20, 23)

    def height(self) -> int:
        return 8 << _bits(self.value, 23, 26)

    def dim(self) -> tuple[int, int]:
        return self.width(), self.height()

    def format(self) -> TextureFormat:
        return TextureFormat(_bits(self.value, 26, 29))

    def is_color0_transparent(self) -> bool:
        return _bits(self.value, 29, 30) != 0

    def texcoord_transform_mode(self) -> int:
        return _bits(self.value, 30, 32)

    def __repr__(self) -> str:
        return (
            "TextureParams("
            f"dim={self.dim()}, format={self.format().code}, offset={self.offset()}, "
            f"repeat={(self.repeat_s(), self.repeat_t())}, "
            f"mirror={(self.mirror_s(), self.mirror_t())}, "
            f"color0_transparent={self.is_color0_transparent()}, "
            f"texcoord_transform_mode={self.texcoord_transform_mode()})"
        )