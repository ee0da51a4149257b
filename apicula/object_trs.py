"""Translation/rotation/scale decomposition of model objects at rest."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np

Vec3 = tuple[float, float, float]
Quat = tuple[float, float, float, float]  # (x, y, z, w)

# The smallest number on the DS was 2^-12; keep scales clear of zero.
SMALL = 0.000_002


def adjust_scale_factor(s: float) -> float:
    """Bump a scale factor that is too close to zero."""
    if 0.0 <= s < SMALL:
        return SMALL
    if -SMALL < s <= 0.0:
        return -SMALL
    return s


def quaternion_from_matrix(m: Any) -> Quat:
    """Normalized quaternion (x, y, z, w) for a 3x3 rotation matrix (rows)."""
    r = np.asarray(m, dtype=float).reshape(3, 3)
    trace = r[0, 0] + r[1, 1] + r[2, 2]
    if trace >= 0.0:
        s = math.sqrt(1.0 + trace)
        w = 0.5 * s
        s = 0.5 / s
        x = (r[2, 1] - r[1, 2]) * s
        y = (r[0, 2] - r[2, 0]) * s
        z = (r[1, 0] - r[0, 1]) * s
    elif r[0, 0] > r[1, 1] and r[0, 0] > r[2, 2]:
        s = math.sqrt(r[0, 0] - r[1, 1] - r[2, 2] + 1.0)
        x = 0.5 * s
        s = 0.5 / s
        y = (r[0, 1] + r[1, 0]) * s
        z = (r[2, 0] + r[0, 2]) * s
        w = (r[2, 1] - r[1, 2]) * s
    elif r[1, 1] > r[2, 2]:
        s = math.sqrt(r[1, 1] - r[0, 0] - r[2, 2] + 1.0)
        y = 0.5 * s
        s = 0.5 / s
        z = (r[1, 2] + r[2, 1]) * s
        x = (r[1, 0] + r[0, 1]) * s
        w = (r[0, 2] - r[2, 0]) * s
    else:
        s = math.sqrt(r[2, 2] - r[0, 0] - r[1, 1] + 1.0)
        z = 0.5 * s
        s = 0.5 / s
        x = (r[2, 0] + r[0, 2]) * s
        y = (r[2, 1] + r[1, 2]) * s
        w = (r[1, 0] - r[0, 1]) * s
    norm = math.sqrt(x * x + y * y + z * z + w * w)
    return (float(x / norm), float(y / norm), float(z / norm), float(w / norm))


def _quat_matrix(q: Quat) -> np.ndarray:
    x, y, z, w = q
    m = np.identity(4)
    m[:3, :3] = [
        [1 - 2 * (y * y + z * z), 2 * (x * y - w * z), 2 * (x * z + w * y)],
        [2 * (x * y + w * z), 1 - 2 * (x * x + z * z), 2 * (y * z - w * x)],
        [2 * (x * z - w * y), 2 * (y * z + w * x), 1 - 2 * (x * x + y * y)],
    ]
    return m


@dataclass(frozen=True)
class TRS:
    """Optional translation, rotation quaternion and scale of an object."""

    translation: Vec3 | None = None
    rotation_quaternion: Quat | None = None
    scale: Vec3 | None = None

    def to_matrix(self) -> np.ndarray:
        """The 4x4 matrix translation * rotation * scale."""
        if self.scale is not None:
            m = np.diag([*self.scale, 1.0])
        else:
            m = np.identity(4)
        if self.rotation_quaternion is not None:
            m = _quat_matrix(self.rotation_quaternion) @ m
        if self.translation is not None:
            t = np.identity(4)
            t[:3, 3] = self.translation
            m = t @ m
        return m


def trs_for_object(
    trans: Sequence[float] | None,
    rot: Any | None,
    scale: Sequence[float] | None,
) -> TRS:
    """Build the rest TRS of one object from its optional components."""
    translation = tuple(float(v) for v in trans) if trans is not None else None
    rotation = quaternion_from_matrix(rot) if rot is not None else None
    adjusted = tuple(adjust_scale_factor(float(v)) for v in scale) if scale is not None else None
    return TRS(translation, rotation, adjusted)  # type: ignore[arg-type]


def rest_trses(objects: Iterable[Any]) -> list[TRS]:
    """Rest TRSes for objects having ``trans``, ``rot`` and ``scale`` attributes."""
    return [trs_for_object(obj.trans, obj.rot, obj.scale) for obj in objects]