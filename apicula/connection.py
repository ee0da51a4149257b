"""Heuristics connecting models to their textures, palettes and animations.

Nitro files do not record which animation applies to which model, or which
texture a material's texture name refers to, so these are guessed here.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from apicula.db import (
    AnimationId,
    Database,
    MatAnimId,
    ModelId,
    PaletteId,
    PatternId,
    TextureId,
)
from apicula.errors import NitroError

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Match:
    """A resolved ID; ``best`` is True when it was the only candidate left."""

    id: int
    best: bool


class MaterialStatus(Enum):
    """Outcome of resolving a material's texture and palette."""

    NO_TEXTURE = "no_texture"
    TEXTURE_MISSING = "texture_missing"
    TEXTURE_OK_NO_PALETTE = "texture_ok_no_palette"
    TEXTURE_OK_PALETTE_MISSING = "texture_ok_palette_missing"
    TEXTURE_OK_PALETTE_OK = "texture_ok_palette_ok"


@dataclass(frozen=True)
class MaterialConnection:
    """Which texture/palette a material resolved to."""

    status: MaterialStatus
    texture_match: Match | None = None
    palette_match: Match | None = None

    def texture(self) -> Match | None:
        return self.texture_match

    def texture_id(self) -> TextureId | None:
        return self.texture_match.id if self.texture_match else None

    def palette_id(self) -> PaletteId | None:
        return self.palette_match.id if self.palette_match else None

    def image_id(self) -> tuple[TextureId, PaletteId | None] | None:
        """The (texture, palette) image, None if untextured.

        Raises NitroError if the texture or palette could not be resolved.
        """
        if self.status is MaterialStatus.NO_TEXTURE:
            return None
        if self.status is MaterialStatus.TEXTURE_MISSING:
            raise NitroError("texture missing")
        if self.status is MaterialStatus.TEXTURE_OK_PALETTE_MISSING:
            raise NitroError("palette missing")
        return self.texture_id(), self.palette_id()


@dataclass(frozen=True)
class ConnectionOptions:
    """Options for building a Connection."""

    all_animations: bool = False

    @staticmethod
    def from_flags(flags: Iterable[str]) -> ConnectionOptions:
        """Options from the command-line flags."""
        return ConnectionOptions(all_animations="all-animations" in set(flags))


@dataclass(frozen=True)
class PatternConnection:
    """A pattern applicable to a model, with its names resolved to IDs."""

    pattern_id: PatternId
    texture_ids: list[TextureId | None]
    palette_ids: list[PaletteId | None]


@dataclass(frozen=True)
class MatAnimConnection:
    """A material animation applicable to a model."""

    mat_anim_id: MatAnimId


@dataclass
class ModelConnection:
    """Material resolutions and applicable animations for one model."""

    materials: list[MaterialConnection] = field(default_factory=list)
    animations: list[AnimationId] = field(default_factory=list)
    patterns: list[PatternConnection] = field(default_factory=list)
    mat_anims: list[MatAnimConnection] = field(default_factory=list)


@dataclass
class Connection:
    """How every other resource relates to each model."""

    models: list[ModelConnection] = field(default_factory=list)


def _requires_palette(texture) -> bool:
    return texture.params.format().desc().requires_palette


def _narrow(candidates: list[int], keep) -> list[int]:
    preferred = [c for c in candidates if keep(c)]
    return preferred or candidates


def resolve_material(db: Database, model_id: ModelId, material_idx: int) -> MaterialConnection:
    """Resolve a material's texture and palette names to IDs.

    Candidates share the name; textures must agree with the material on
    whether a palette is used; ones from the model's file are preferred,
    and palettes from the texture's file. Ties go to the first candidate.
    """
    material = db.models[model_id].materials[material_idx]
    if material.texture_name is None:
        return MaterialConnection(MaterialStatus.NO_TEXTURE)
    has_palette = material.palette_name is not None

    candidates = [
        tex_id
        for tex_id in db.textures_by_name.get(material.texture_name, [])
        if _requires_palette(db.textures[tex_id]) == has_palette
    ]
    model_file = db.models_found_in[model_id]
    candidates = _narrow(candidates, lambda t: db.textures_found_in[t] == model_file)
    if not candidates:
        return MaterialConnection(MaterialStatus.TEXTURE_MISSING)
    texture_match = Match(candidates[0], len(candidates) == 1)

    if not has_palette:
        return MaterialConnection(MaterialStatus.TEXTURE_OK_NO_PALETTE, texture_match)

    texture_file = db.textures_found_in[texture_match.id]
    candidates = _narrow(
        list(db.palettes_by_name.get(material.palette_name, [])),
        lambda p: db.palettes_found_in[p] == texture_file,
    )
    if not candidates:
        return MaterialConnection(MaterialStatus.TEXTURE_OK_PALETTE_MISSING, texture_match)
    palette_match = Match(candidates[0], len(candidates) == 1)
    return MaterialConnection(MaterialStatus.TEXTURE_OK_PALETTE_OK, texture_match, palette_match)


def find_applicable_animations(
    db: Database, model_id: ModelId, options: ConnectionOptions
) -> list[AnimationId]:
    """Animations animating as many objects as the model has (or all of them)."""
    if options.all_animations:
        return list(range(len(db.animations)))
    num_objects = len(db.models[model_id].objects)
    return [
        anim_id
        for anim_id, anim in enumerate(db.animations)
        if len(anim.objects_curves) == num_objects
    ]


def _targets_valid_materials(model, tracks) -> bool:
    names = [mat.name for mat in model.materials]
    return all(track.name in names for track in tracks)


def _first_id(by_name: dict, name) -> int | None:
    ids = by_name.get(name)
    return ids[0] if ids else None


def find_applicable_patterns(db: Database, model_id: ModelId) -> list[PatternConnection]:
    """Patterns whose every track targets a material of the model."""
    model = db.models[model_id]
    return [
        PatternConnection(
            pattern_id=pattern_id,
            texture_ids=[_first_id(db.textures_by_name, n) for n in pattern.texture_names],
            palette_ids=[_first_id(db.palettes_by_name, n) for n in pattern.palette_names],
        )
        for pattern_id, pattern in enumerate(db.patterns)
        if _targets_valid_materials(model, pattern.material_tracks)
    ]


def find_applicable_mat_anims(db: Database, model_id: ModelId) -> list[MatAnimConnection]:
    """Material animations whose every track targets a material of the model."""
    model = db.models[model_id]
    return [
        MatAnimConnection(mat_anim_id)
        for mat_anim_id, mat_anim in enumerate(db.mat_anims)
        if _targets_valid_materials(model, mat_anim.tracks)
    ]


def build_connection(db: Database, options: ConnectionOptions | None = None) -> Connection:
    """Work out the connections for every model in the database."""
    if options is None:
        options = ConnectionOptions()
    missing_textures = False
    models = []
    for model_id, model in enumerate(db.models):
        materials = []
        for material_idx in range(len(model.materials)):
            mat_conn = resolve_material(db, model_id, material_idx)
            try:
                mat_conn.image_id()
            except NitroError:
                missing_textures = True
            materials.append(mat_conn)
        models.append(ModelConnection(
            materials=materials,
            animations=find_applicable_animations(db, model_id, options),
            patterns=find_applicable_patterns(db, model_id),
            mat_anims=find_applicable_mat_anims(db, model_id),
        ))

    if missing_textures:
        log.warning("A matching texture/palette couldn't be found for some materials!")
        log.info("Hint: textures are sometimes stored in a separate .nsbtx file.")

    return Connection(models)