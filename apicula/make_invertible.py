"""Perturbing singular matrices so they can be inverted."""

from __future__ import annotations

import logging
from typing import Any

import numpy as np

log = logging.getLogger(__name__)

_EPSILONS = (0.000001, 0.00001, 0.0001, 0.001)


def _is_invertible(m: np.ndarray) -> bool:
    try:
        return bool(np.linalg.matrix_rank(m) == m.shape[0])
    except np.linalg.LinAlgError:
        return False


def _scale_matrix(s: float) -> np.ndarray:
    return np.diag([s, s, s, 1.0])


def make_invertible(m: Any) -> np.ndarray:
    """Return ``m`` if invertible, else ``m`` slightly bumped along the diagonal.

    Falls back to the identity when no small bump helps.
    """
    m = np.array(m, dtype=float).reshape(4, 4)
    if _is_invertible(m):
        return m

    for epsilon in _EPSILONS:
        m2 = m + _scale_matrix(epsilon)
        if _is_invertible(m2):
            return m2

    log.warning(
        "found singular object matrix (COLLADA requires an invertible "
        "matrix here); proceeding with the identity. Your model may look wrong."
    )
    log.debug("namely, the matrix %r", m)
    return np.identity(4)