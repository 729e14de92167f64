"""Structural types accepted by the affine operations.

Anything exposing the right attributes can be composed with, compared to or
mapped through an AffineMatrix; no inheritance from library classes is needed.
"""

from __future__ import annotations

from typing import Protocol, Union, runtime_checkable


@runtime_checkable
class MatrixLike(Protocol):
    """Any object carrying the six coefficients of a 2D affine matrix."""

    a: float
    b: float
    c: float
    d: float
    tx: float
    ty: float


@runtime_checkable
class PointLike(Protocol):
    """Any object carrying ``x`` and ``y`` coordinates."""

    x: float
    y: float


# Origin pivots may be given as a plain (cx, cy) pair or a point object
Origin = Union[tuple[float, float], PointLike]
