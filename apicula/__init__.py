"""Building blocks for Nintendo DS Nitro files: decompression, textures, GPU commands and glTF/COLLADA helpers."""

__version__ = "0.1.0"