"""Adapters between AffineMatrix and third-party matrix representations.

Two layouts are bridged:

1) ``affine.Affine`` (rasterio/GDAL georeferencing). It stores the same six
   coefficients in row-major order, so ``Affine(a, b, c, d, e, f)`` maps
   ``x' = a*x + b*y + c`` and ``y' = d*x + e*y + f``. Our ``(a, b, c, d, tx, ty)``
   therefore corresponds to ``Affine(a, c, tx, b, d, ty)``.
2) numpy homogeneous arrays, ``[[a, c, tx], [b, d, ty], [0, 0, 1]]``, for
   callers doing their own linear algebra.
"""

from __future__ import annotations

import logging
from typing import Any

import numpy as np
from affine import Affine
from numpy.typing import ArrayLike, NDArray

from matrix2d.affine.errors import InvalidMatrixError
from matrix2d.affine.value_objects import AffineMatrix

# Module-level logger (reused across all calls)
logger = logging.getLogger(__name__)

# Bottom row every affine (non-projective) homogeneous matrix must carry
_AFFINE_ROW = np.array([0.0, 0.0, 1.0])


def to_affine(matrix: AffineMatrix) -> Affine:
    """Convert to the row-major ``affine.Affine`` layout."""
    return Affine(matrix.a, matrix.c, matrix.tx, matrix.b, matrix.d, matrix.ty)


def from_affine(transform: Any) -> AffineMatrix:
    """Build an AffineMatrix from an ``affine.Affine`` (or anything with a..f).

    Args:
        transform: Object exposing the ``affine`` package's a, b, c, d, e, f.

    Returns:
        New mutable AffineMatrix describing the same mapping.
    """
    matrix = AffineMatrix(
        transform.a, transform.d, transform.b, transform.e, transform.c, transform.f
    )
    logger.debug("Converted %r to %s", transform, matrix.to_debug_string())
    return matrix


def to_array(matrix: AffineMatrix) -> NDArray[np.float64]:
    """Return the 3x3 float64 homogeneous matrix (a fresh array)."""
    return np.array(
        [
            [matrix.a, matrix.c, matrix.tx],
            [matrix.b, matrix.d, matrix.ty],
            [0.0, 0.0, 1.0],
        ],
        dtype=np.float64,
    )


def from_array(array: ArrayLike) -> AffineMatrix:
    """Build an AffineMatrix from a 3x3 or 2x3 homogeneous array.

    Raises:
        InvalidMatrixError: If the shape is neither 3x3 nor 2x3, or a 3x3
            array has a bottom row other than (0, 0, 1). Projective
            transforms cannot be represented by six coefficients.
    """
    arr = np.asarray(array, dtype=np.float64)
    if arr.shape not in ((3, 3), (2, 3)):
        raise InvalidMatrixError(array, f"expected a 3x3 or 2x3 array, got {arr.shape}")
    if arr.shape == (3, 3) and not np.array_equal(arr[2], _AFFINE_ROW):
        logger.debug("Rejected projective bottom row %s", arr[2].tolist())
        raise InvalidMatrixError(
            array, f"bottom row must be [0, 0, 1], got {arr[2].tolist()}"
        )
    (a, c, tx), (b, d, ty) = arr[0].tolist(), arr[1].tolist()
    return AffineMatrix(a, b, c, d, tx, ty)
