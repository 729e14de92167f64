"""Affine Bounded Context - Domain Services.

Pure functions over matrices that do not belong to a single instance.
None of them mutate their arguments.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from matrix2d.affine.value_objects import (
    AffineMatrix,
    DecomposedTransform,
    as_coefficients,
)


# ---------------------------------------------------------------------------
# Composition
# ---------------------------------------------------------------------------
def multiply(m1: Any, m2: Any) -> AffineMatrix:
    """Return the product ``m1 * m2`` as a new matrix.

    Points mapped through the product go through ``m2`` first, then ``m1``.

    Args:
        m1: Left operand (matrix object, mapping or 6-element sequence)
        m2: Right operand (same forms)
    """
    return AffineMatrix(*as_coefficients(m1)).append(*as_coefficients(m2))


def recompose(transform: DecomposedTransform) -> AffineMatrix:
    """Rebuild a matrix from decompose() output (translate, scale, rotate)."""
    return transform.to_matrix()


# ---------------------------------------------------------------------------
# Vectorized point mapping
# ---------------------------------------------------------------------------
def transform_point_array(matrix: Any, points: ArrayLike) -> NDArray[np.float64]:
    """Map an ``(N, 2)`` array of points through ``matrix``.

    Args:
        matrix: Matrix object, mapping or 6-element sequence
        points: Anything numpy can turn into an ``(N, 2)`` float array

    Returns:
        New ``(N, 2)`` float64 array, rows in input order.

    Raises:
        ValueError: If ``points`` is not two-dimensional with two columns.
    """
    if not isinstance(matrix, AffineMatrix):
        matrix = AffineMatrix(*as_coefficients(matrix))
    return matrix.transform_array(np.asarray(points, dtype=np.float64))
