"""The set of Nitro resources gathered from the user's input files."""

from __future__ import annotations

import logging
import os
from collections.abc import Hashable, Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

log = logging.getLogger(__name__)

FileId = int
ModelId = int
TextureId = int
PaletteId = int
AnimationId = int
PatternId = int
MatAnimId = int

_KINDS = ("models", "textures", "palettes", "animations", "patterns", "mat_anims")


@dataclass
class Database:
    """All resources found, the file each came from, and lookups by name."""

    file_paths: list[Path] = field(default_factory=list)

    models: list[Any] = field(default_factory=list)
    textures: list[Any] = field(default_factory=list)
    palettes: list[Any] = field(default_factory=list)
    animations: list[Any] = field(default_factory=list)
    patterns: list[Any] = field(default_factory=list)
    mat_anims: list[Any] = field(default_factory=list)

    models_found_in: list[FileId] = field(default_factory=list)
    textures_found_in: list[FileId] = field(default_factory=list)
    palettes_found_in: list[FileId] = field(default_factory=list)
    animations_found_in: list[FileId] = field(default_factory=list)
    patterns_found_in: list[FileId] = field(default_factory=list)
    mat_anims_found_in: list[FileId] = field(default_factory=list)

    textures_by_name: dict[Hashable, list[TextureId]] = field(default_factory=dict)
    palettes_by_name: dict[Hashable, list[PaletteId]] = field(default_factory=dict)

    def add_container(self, file_id: FileId, cont: Any) -> None:
        """Move every resource of a parsed container into the database."""
        for kind in _KINDS:
            items = list(getattr(cont, kind))
            getattr(self, kind).extend(items)
            getattr(self, f"{kind}_found_in").extend([file_id] * len(items))

    def build_by_name_maps(self) -> None:
        """Fill out ``textures_by_name`` and ``palettes_by_name``."""
        for tex_id, texture in enumerate(self.textures):
            self.textures_by_name.setdefault(texture.name, []).append(tex_id)
        for pal_id, palette in enumerate(self.palettes):
            self.palettes_by_name.setdefault(palette.name, []).append(pal_id)

    def status_line(self) -> str:
        """Summary of how many of each resource the database holds."""
        counts = [
            (len(self.models), "model"),
            (len(self.textures), "texture"),
            (len(self.palettes), "palette"),
            (len(self.animations), "animation"),
            (len(self.patterns), "pattern animation"),
            (len(self.mat_anims), "material animation"),
        ]
        if self.mat_anims:
            log.info("Material animation support is experimental!")
        parts = ", ".join(
            f"{n} {label}{'' if n == 1 else 's'}" for n, label in counts
        )
        return f"Got {parts}."


def expand_directories(paths: Iterable[str | os.PathLike]) -> list[Path]:
    """Collect the given paths, replacing each directory by its sorted entries.

    Directories are expanded one level only, not recursively.
    """
    file_paths: list[Path] = []
    for raw in paths:
        path = Path(raw)
        if not path.is_dir():
            file_paths.append(path)
            continue
        try:
            entries = sorted(path.iterdir())
        except OSError as e:
            log.warning("error reading directory: %s", e)
            continue
        file_paths.extend(entries)
    return file_paths