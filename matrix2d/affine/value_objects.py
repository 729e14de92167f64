"""Affine Bounded Context - Value Objects.

Data structures for 2D affine transformations. The central type is
AffineMatrix, the 3x3 homogeneous matrix

    [ a  c  tx ]
    [ b  d  ty ]
    [ 0  0  1  ]

Note the locations of b and c: (a, b) is the image of the x unit vector and
(c, d) the image of the y unit vector.

AffineMatrix is a mutable handle. Every operation that changes it does so in
place and returns the instance, so calls chain:

    AffineMatrix().translate(40, 60).rotate(90).scale(2)

FrozenAffineMatrix (and the shared IDENTITY constant) reject all mutation.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

import numpy as np
from numpy.typing import NDArray
from pydantic import BaseModel, ConfigDict

from matrix2d.affine.errors import InvalidMatrixError
from matrix2d.affine.parsing import format_matrix, format_number, parse_matrix
from matrix2d.affine.protocols import MatrixLike, Origin, PointLike

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Numeric Constants
# ---------------------------------------------------------------------------
DEG_TO_RAD = math.pi / 180
EPSILON = 1e-6  # Relative/absolute tolerance for equals(exact=False)
DEFAULT_SMOOTH_PRECISION = 1e10  # Rounds to the 10th digit after the point

_FIELDS = ("a", "b", "c", "d", "tx", "ty")

Coefficients = tuple[float, float, float, float, float, float]


# ---------------------------------------------------------------------------
# Coercion helpers
# ---------------------------------------------------------------------------
def as_coefficients(value: Any) -> Coefficients:
    """Read six coefficients from a matrix object, mapping or sequence."""
    if isinstance(value, MatrixLike):
        raw: Sequence[Any] = (value.a, value.b, value.c, value.d, value.tx, value.ty)
    elif isinstance(value, Mapping):
        missing = [key for key in _FIELDS if key not in value]
        if missing:
            raise InvalidMatrixError(value, f"missing keys {missing}")
        raw = [value[key] for key in _FIELDS]
    elif (isinstance(value, Sequence) and not isinstance(value, (str, bytes))) or (
        isinstance(value, np.ndarray) and value.ndim == 1
    ):
        raw = list(value)
        if len(raw) != 6:
            raise InvalidMatrixError(value, f"expected 6 coefficients, got {len(raw)}")
    else:
        raise InvalidMatrixError(
            value, "expected a matrix object, a mapping or a 6-element sequence"
        )
    try:
        a, b, c, d, tx, ty = (float(v) for v in raw)
    except (TypeError, ValueError) as exc:
        raise InvalidMatrixError(value, "coefficients must be numbers") from exc
    return a, b, c, d, tx, ty


def _point_coords(point: Any) -> tuple[float, float]:
    if isinstance(point, PointLike):
        return point.x, point.y
    if isinstance(point, Mapping):
        return point["x"], point["y"]
    x, y = point
    return x, y


def _pivot(origin: Origin | None) -> tuple[float, float] | None:
    return None if origin is None else _point_coords(origin)


def _cos_sin(angle: float) -> tuple[float, float]:
    """Cosine and sine of an angle in degrees; whole turns are exact."""
    if angle % 360 == 0:
        return 1.0, 0.0
    radians = angle * DEG_TO_RAD
    return math.cos(radians), math.sin(radians)


def _round_half_up(value: float, precision: float) -> float:
    scaled = value * precision
    if not math.isfinite(scaled):
        return value
    return math.floor(scaled + 0.5) / precision


# ---------------------------------------------------------------------------
# Point
# ---------------------------------------------------------------------------
class Point(BaseModel):
    """2D point (Value Object).

    Mutable so it can serve as the ``out`` buffer of
    AffineMatrix.transform_point.
    """

    x: float
    y: float

    def as_tuple(self) -> tuple[float, float]:
        return self.x, self.y


# ---------------------------------------------------------------------------
# DecomposedTransform
# ---------------------------------------------------------------------------
class DecomposedTransform(BaseModel):
    """Translation, rotation and scale recovered from a matrix (Value Object).

    Rebuilding with translate -> scale -> rotate reproduces the point mapping
    of the decomposed matrix. The values are not unique: rotating a further
    180 degrees while negating both scales describes the same mapping.
    """

    x: float
    y: float
    rotation: float  # Degrees
    scale_x: float
    scale_y: float

    model_config = ConfigDict(frozen=True)

    def to_matrix(self) -> AffineMatrix:
        """Recompose into a new AffineMatrix."""
        return (
            AffineMatrix()
            .translate(self.x, self.y)
            .scale(self.scale_x, self.scale_y)
            .rotate(self.rotation)
        )


# ---------------------------------------------------------------------------
# AffineMatrix
# ---------------------------------------------------------------------------
class AffineMatrix(BaseModel):
    """2D affine transformation matrix (Value Object, mutable handle).

    Constructed from six coefficients, positionally or by keyword; omitted
    coefficients default to the identity. Pydantic validates them at
    construction time. Non-finite values are accepted.

    Composition order:
        ``m.append(n)`` computes ``m * n`` (n is applied to points first).
        ``m.prepend(n)`` computes ``n * m`` (m is applied to points first).

    Every elementary operation comes in both flavours (``rotate`` appends,
    ``prepend_rotate`` prepends) and accepts an optional ``origin`` pivot.

    Equality (``==``) is exact on all six coefficients. Mutable instances are
    unhashable; use freeze() for a hashable snapshot.
    """

    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    tx: float = 0.0
    ty: float = 0.0

    model_config = ConfigDict(extra="forbid", allow_inf_nan=True)

    def __init__(
        self,
        a: float = 1.0,
        b: float = 0.0,
        c: float = 0.0,
        d: float = 1.0,
        tx: float = 0.0,
        ty: float = 0.0,
    ) -> None:
        super().__init__(a=a, b=b, c=c, d=d, tx=tx, ty=ty)

    # -- Factories ---------------------------------------------------------
    @classmethod
    def from_sequence(cls, values: Sequence[float]) -> AffineMatrix:
        """Build from ``[a, b, c, d, tx, ty]``.

        Raises:
            InvalidMatrixError: If the sequence does not hold exactly six items.
        """
        if isinstance(values, (str, bytes)) or len(values) != 6:
            raise InvalidMatrixError(values, "expected a 6-element sequence")
        return cls(*values)

    @classmethod
    def from_mapping(cls, values: Mapping[str, float]) -> AffineMatrix:
        """Build from a ``{a, b, c, d, tx, ty}`` record.

        Raises:
            InvalidMatrixError: If any of the six keys is missing.
        """
        missing = [key for key in _FIELDS if key not in values]
        if missing:
            raise InvalidMatrixError(values, f"missing keys {missing}")
        return cls(*(values[key] for key in _FIELDS))

    @classmethod
    def from_matrix(cls, matrix: MatrixLike) -> AffineMatrix:
        return cls(matrix.a, matrix.b, matrix.c, matrix.d, matrix.tx, matrix.ty)

    @classmethod
    def from_string(cls, text: str) -> AffineMatrix:
        """Parse ``matrix(a,b,c,d,tx,ty)``.

        Raises:
            MatrixParseError: If the text does not hold exactly six numbers
                in that shape.
        """
        return cls(*parse_matrix(text))

    @staticmethod
    def translation(x: float, y: float = 0.0) -> AffineMatrix:
        return AffineMatrix().translate(x, y)

    @staticmethod
    def rotation(angle: float, origin: Origin | None = None) -> AffineMatrix:
        return AffineMatrix().rotate(angle, origin=origin)

    @staticmethod
    def scaling(
        x: float, y: float | None = None, origin: Origin | None = None
    ) -> AffineMatrix:
        return AffineMatrix().scale(x, y, origin=origin)

    @staticmethod
    def skewing(
        skew_x: float, skew_y: float, origin: Origin | None = None
    ) -> AffineMatrix:
        return AffineMatrix().skew(skew_x, skew_y, origin=origin)

    @staticmethod
    def shearing(
        shear_x: float, shear_y: float, origin: Origin | None = None
    ) -> AffineMatrix:
        return AffineMatrix().shear(shear_x, shear_y, origin=origin)

    # -- State -------------------------------------------------------------
    def set_values(
        self,
        a: float = 1.0,
        b: float = 0.0,
        c: float = 0.0,
        d: float = 1.0,
        tx: float = 0.0,
        ty: float = 0.0,
    ) -> AffineMatrix:
        """Overwrite all six coefficients."""
        self.a = float(a)
        self.b = float(b)
        self.c = float(c)
        self.d = float(d)
        self.tx = float(tx)
        self.ty = float(ty)
        return self

    def reset(self) -> AffineMatrix:
        """Set this matrix to the identity."""
        return self.set_values()

    def copy(self, matrix: Any) -> AffineMatrix:  # type: ignore[override]
        """Copy the coefficients of ``matrix`` (any matrix form) into this one."""
        return self.set_values(*as_coefficients(matrix))

    def clone(self) -> AffineMatrix:
        """Independent mutable copy, also when called on a frozen matrix."""
        return AffineMatrix(*self.to_tuple())

    def freeze(self) -> FrozenAffineMatrix:
        return FrozenAffineMatrix(*self.to_tuple())

    # -- Composition -------------------------------------------------------
    def append(
        self, a: float, b: float, c: float, d: float, tx: float, ty: float
    ) -> AffineMatrix:
        """Right-multiply: ``self = self * M``.

        M is applied to points before the current transformation.
        """
        a1, b1, c1, d1 = self.a, self.b, self.c, self.d
        # Translation-only argument leaves the linear part untouched
        if a != 1 or b != 0 or c != 0 or d != 1:
            self.a = a1 * a + c1 * b
            self.b = b1 * a + d1 * b
            self.c = a1 * c + c1 * d
            self.d = b1 * c + d1 * d
        self.tx = a1 * tx + c1 * ty + self.tx
        self.ty = b1 * tx + d1 * ty + self.ty
        return self

    def prepend(
        self, a: float, b: float, c: float, d: float, tx: float, ty: float
    ) -> AffineMatrix:
        """Left-multiply: ``self = M * self``.

        M is applied to points after the current transformation, e.g. when
        walking up a parent chain and prepending each parent's matrix.
        """
        a1, b1, c1, d1, tx1, ty1 = self.to_tuple()
        self.a = a * a1 + c * b1
        self.b = b * a1 + d * b1
        self.c = a * c1 + c * d1
        self.d = b * c1 + d * d1
        self.tx = a * tx1 + c * ty1 + tx
        self.ty = b * tx1 + d * ty1 + ty
        return self

    def append_matrix(self, matrix: Any) -> AffineMatrix:
        return self.append(*as_coefficients(matrix))

    def prepend_matrix(self, matrix: Any) -> AffineMatrix:
        return self.prepend(*as_coefficients(matrix))

    def append_transform(
        self,
        x: float,
        y: float,
        scale_x: float,
        scale_y: float,
        rotation: float,
        skew_x: float = 0.0,
        skew_y: float = 0.0,
        reg_x: float = 0.0,
        reg_y: float = 0.0,
    ) -> AffineMatrix:
        """Append a display-object transform.

        Builds the matrix of an object positioned at (x, y), scaled, rotated
        and skewed (angles in degrees) about its registration point
        (reg_x, reg_y), and appends it. Typical use is building a matrix from
        an object's properties::

            AffineMatrix().append_transform(o.x, o.y, o.scale_x, o.scale_y, o.rotation)
        """
        cos, sin = _cos_sin(rotation)
        if skew_x or skew_y:
            kx = skew_x * DEG_TO_RAD
            ky = skew_y * DEG_TO_RAD
            self.append(math.cos(ky), math.sin(ky), -math.sin(kx), math.cos(kx), x, y)
            self.append(
                cos * scale_x, sin * scale_x, -sin * scale_y, cos * scale_y, 0.0, 0.0
            )
        else:
            self.append(cos * scale_x, sin * scale_x, -sin * scale_y, cos * scale_y, x, y)

        if reg_x or reg_y:
            self.tx -= reg_x * self.a + reg_y * self.c
            self.ty -= reg_x * self.b + reg_y * self.d
        return self

    def prepend_transform(
        self,
        x: float,
        y: float,
        scale_x: float,
        scale_y: float,
        rotation: float,
        skew_x: float = 0.0,
        skew_y: float = 0.0,
        reg_x: float = 0.0,
        reg_y: float = 0.0,
    ) -> AffineMatrix:
        """Prepend a display-object transform (see append_transform).

        Prepending each ancestor in turn yields an object's concatenated
        matrix::

            m = AffineMatrix()
            while o is not None:
                m.prepend_transform(o.x, o.y, o.scale_x, o.scale_y, o.rotation)
                o = o.parent
        """
        cos, sin = _cos_sin(rotation)
        if reg_x or reg_y:
            self.tx -= reg_x
            self.ty -= reg_y
        if skew_x or skew_y:
            kx = skew_x * DEG_TO_RAD
            ky = skew_y * DEG_TO_RAD
            self.prepend(
                cos * scale_x, sin * scale_x, -sin * scale_y, cos * scale_y, 0.0, 0.0
            )
            self.prepend(math.cos(ky), math.sin(ky), -math.sin(kx), math.cos(kx), x, y)
        else:
            self.prepend(cos * scale_x, sin * scale_x, -sin * scale_y, cos * scale_y, x, y)
        return self

    def _append_about(
        self, a: float, b: float, c: float, d: float, origin: Origin | None
    ) -> AffineMatrix:
        pivot = _pivot(origin)
        if pivot is None:
            return self.append(a, b, c, d, 0.0, 0.0)
        cx, cy = pivot
        return self.translate(cx, cy).append(a, b, c, d, 0.0, 0.0).translate(-cx, -cy)

    def _prepend_about(
        self, a: float, b: float, c: float, d: float, origin: Origin | None
    ) -> AffineMatrix:
        pivot = _pivot(origin)
        if pivot is None:
            return self.prepend(a, b, c, d, 0.0, 0.0)
        cx, cy = pivot
        return (
            self.prepend_translate(-cx, -cy)
            .prepend(a, b, c, d, 0.0, 0.0)
            .prepend_translate(cx, cy)
        )

    # -- Post-multiply operations ------------------------------------------
    def rotate(self, angle: float, origin: Origin | None = None) -> AffineMatrix:
        """Rotate by ``angle`` degrees (clockwise on a y-down screen).

        Args:
            angle: Rotation in degrees. Multiples of 360 are an exact no-op.
            origin: Optional (cx, cy) pivot.
        """
        pivot = _pivot(origin)
        cos, sin = _cos_sin(angle)
        if pivot is not None:
            self.translate(*pivot)

        a1, b1 = self.a, self.b
        self.a = a1 * cos + self.c * sin
        self.b = b1 * cos + self.d * sin
        self.c = -a1 * sin + self.c * cos
        self.d = -b1 * sin + self.d * cos

        if pivot is not None:
            self.translate(-pivot[0], -pivot[1])
        return self

    def skew(
        self, skew_x: float, skew_y: float, origin: Origin | None = None
    ) -> AffineMatrix:
        """Skew by angles in degrees along the x and y axes."""
        return self._append_about(
            1.0,
            math.tan(skew_y * DEG_TO_RAD),
            math.tan(skew_x * DEG_TO_RAD),
            1.0,
            origin,
        )

    def skew_x(self, skew_x: float, origin: Origin | None = None) -> AffineMatrix:
        return self.skew(skew_x, 0.0, origin=origin)

    def skew_y(self, skew_y: float, origin: Origin | None = None) -> AffineMatrix:
        return self.skew(0.0, skew_y, origin=origin)

    def shear(
        self, shear_x: float, shear_y: float, origin: Origin | None = None
    ) -> AffineMatrix:
        """Shear by raw slopes (not degrees, unlike skew)."""
        return self._append_about(1.0, shear_y, shear_x, 1.0, origin)

    def shear_x(self, shear_x: float, origin: Origin | None = None) -> AffineMatrix:
        return self.shear(shear_x, 0.0, origin=origin)

    def shear_y(self, shear_y: float, origin: Origin | None = None) -> AffineMatrix:
        return self.shear(0.0, shear_y, origin=origin)

    def scale(
        self, x: float, y: float | None = None, origin: Origin | None = None
    ) -> AffineMatrix:
        """Scale by ``x`` horizontally and ``y`` vertically (``y`` defaults to ``x``)."""
        if y is None:
            y = x
        pivot = _pivot(origin)
        if pivot is not None:
            self.translate(*pivot)

        self.a *= x
        self.b *= x
        self.c *= y
        self.d *= y

        if pivot is not None:
            self.translate(-pivot[0], -pivot[1])
        return self

    def scale_x(self, x: float, origin: Origin | None = None) -> AffineMatrix:
        return self.scale(x, 1.0, origin=origin)

    def scale_y(self, y: float, origin: Origin | None = None) -> AffineMatrix:
        return self.scale(1.0, y, origin=origin)

    def translate(self, x: float, y: float = 0.0) -> AffineMatrix:
        """Translate in the local coordinate space of this matrix."""
        self.tx += self.a * x + self.c * y
        self.ty += self.b * x + self.d * y
        return self

    def translate_x(self, x: float) -> AffineMatrix:
        return self.translate(x, 0.0)

    def translate_y(self, y: float) -> AffineMatrix:
        return self.translate(0.0, y)

    def flip(
        self, flip_x: bool, flip_y: bool, origin: Origin | None = None
    ) -> AffineMatrix:
        """Mirror across the x axis (``flip_x``) and/or the y axis (``flip_y``).

        ``flip_x`` negates y coordinates, ``flip_y`` negates x coordinates.
        """
        if not flip_x and not flip_y:
            return self
        return self._append_about(
            -1.0 if flip_y else 1.0, 0.0, 0.0, -1.0 if flip_x else 1.0, origin
        )

    def flip_x(self, origin: Origin | None = None) -> AffineMatrix:
        return self.flip(True, False, origin=origin)

    def flip_y(self, origin: Origin | None = None) -> AffineMatrix:
        return self.flip(False, True, origin=origin)

    def flip_origin(self) -> AffineMatrix:
        """Point reflection through the origin (a 180 degree rotation)."""
        return self.append(-1.0, 0.0, 0.0, -1.0, 0.0, 0.0)

    # -- Pre-multiply operations -------------------------------------------
    def prepend_rotate(
        self, angle: float, origin: Origin | None = None
    ) -> AffineMatrix:
        cos, sin = _cos_sin(angle)
        return self._prepend_about(cos, sin, -sin, cos, origin)

    def prepend_skew(
        self, skew_x: float, skew_y: float, origin: Origin | None = None
    ) -> AffineMatrix:
        return self._prepend_about(
            1.0,
            math.tan(skew_y * DEG_TO_RAD),
            math.tan(skew_x * DEG_TO_RAD),
            1.0,
            origin,
        )

    def prepend_skew_x(
        self, skew_x: float, origin: Origin | None = None
    ) -> AffineMatrix:
        return self.prepend_skew(skew_x, 0.0, origin=origin)

    def prepend_skew_y(
        self, skew_y: float, origin: Origin | None = None
    ) -> AffineMatrix:
        return self.prepend_skew(0.0, skew_y, origin=origin)

    def prepend_shear(
        self, shear_x: float, shear_y: float, origin: Origin | None = None
    ) -> AffineMatrix:
        return self._prepend_about(1.0, shear_y, shear_x, 1.0, origin)

    def prepend_shear_x(
        self, shear_x: float, origin: Origin | None = None
    ) -> AffineMatrix:
        return self.prepend_shear(shear_x, 0.0, origin=origin)

    def prepend_shear_y(
        self, shear_y: float, origin: Origin | None = None
    ) -> AffineMatrix:
        return self.prepend_shear(0.0, shear_y, origin=origin)

    def prepend_scale(
        self, x: float, y: float | None = None, origin: Origin | None = None
    ) -> AffineMatrix:
        """Scale in the parent coordinate space (``y`` defaults to ``x``)."""
        if y is None:
            y = x
        pivot = _pivot(origin)
        if pivot is not None:
            self.prepend_translate(-pivot[0], -pivot[1])

        self.a *= x
        self.c *= x
        self.tx *= x
        self.b *= y
        self.d *= y
        self.ty *= y

        if pivot is not None:
            self.prepend_translate(*pivot)
        return self

    def prepend_scale_x(self, x: float, origin: Origin | None = None) -> AffineMatrix:
        return self.prepend_scale(x, 1.0, origin=origin)

    def prepend_scale_y(self, y: float, origin: Origin | None = None) -> AffineMatrix:
        return self.prepend_scale(1.0, y, origin=origin)

    def prepend_translate(self, x: float, y: float = 0.0) -> AffineMatrix:
        """Translate in the parent coordinate space."""
        self.tx += x
        self.ty += y
        return self

    def prepend_translate_x(self, x: float) -> AffineMatrix:
        return self.prepend_translate(x, 0.0)

    def prepend_translate_y(self, y: float) -> AffineMatrix:
        return self.prepend_translate(0.0, y)

    def prepend_flip(
        self, flip_x: bool, flip_y: bool, origin: Origin | None = None
    ) -> AffineMatrix:
        if not flip_x and not flip_y:
            return self
        return self._prepend_about(
            -1.0 if flip_y else 1.0, 0.0, 0.0, -1.0 if flip_x else 1.0, origin
        )

    def prepend_flip_x(self, origin: Origin | None = None) -> AffineMatrix:
        return self.prepend_flip(True, False, origin=origin)

    def prepend_flip_y(self, origin: Origin | None = None) -> AffineMatrix:
        return self.prepend_flip(False, True, origin=origin)

    def prepend_flip_origin(self) -> AffineMatrix:
        return self.prepend(-1.0, 0.0, 0.0, -1.0, 0.0, 0.0)

    # -- Inversion ---------------------------------------------------------
    def determinant(self) -> float:
        return self.a * self.d - self.b * self.c

    def is_invertible(self) -> bool:
        return self.determinant() != 0

    def invert(self) -> AffineMatrix:
        """Invert in place, producing the opposite transformation.

        A singular matrix (determinant 0) does not raise: the coefficients
        become +/-inf or nan following IEEE-754 division. Check
        is_invertible() first when that matters.
        """
        a1, b1, c1, d1, tx1, ty1 = self.to_tuple()
        det = np.float64(a1 * d1 - b1 * c1)
        if det == 0:
            logger.debug("Inverting singular matrix %s", self.to_debug_string())

        numerators = np.array(
            [d1, -b1, -c1, a1, c1 * ty1 - d1 * tx1, -(a1 * ty1 - b1 * tx1)],
            dtype=np.float64,
        )
        with np.errstate(divide="ignore", invalid="ignore"):
            inverted = numerators / det
        return self.set_values(*inverted.tolist())

    # -- Comparison --------------------------------------------------------
    def is_identity(self) -> bool:
        return (
            self.a == 1
            and self.b == 0
            and self.c == 0
            and self.d == 1
            and self.tx == 0
            and self.ty == 0
        )

    def equals(self, matrix: Any, exact: bool = True) -> bool:
        """Compare coefficients with another matrix (any matrix form).

        Args:
            matrix: Matrix object, mapping or 6-element sequence.
            exact: When False, each coefficient pair (u, v) may differ by
                ``EPSILON * max(1, |u|, |v|)``, a tolerance that is absolute
                near zero and relative for large magnitudes.
        """
        pairs = zip(self.to_tuple(), as_coefficients(matrix))
        if exact:
            return all(u == v for u, v in pairs)
        return all(abs(u - v) <= EPSILON * max(1.0, abs(u), abs(v)) for u, v in pairs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AffineMatrix):
            return NotImplemented
        return self.equals(other)

    # -- Point mapping -----------------------------------------------------
    def transform_point(
        self,
        x: float | PointLike | tuple[float, float],
        y: float | None = None,
        *,
        out: Point | None = None,
    ) -> Point:
        """Map a point through this matrix.

        Args:
            x: x coordinate, or a whole point (object with x/y, mapping or
                pair) when ``y`` is omitted.
            y: y coordinate.
            out: Optional Point to write the result into instead of
                allocating a new one.

        Returns:
            The mapped point (``out`` when given).
        """
        if y is None:
            x, y = _point_coords(x)
        px = x * self.a + y * self.c + self.tx
        py = x * self.b + y * self.d + self.ty
        if out is None:
            return Point(x=px, y=py)
        out.x = px
        out.y = py
        return out

    def transform_points(
        self, points: Iterable[Any] | NDArray[np.float64]
    ) -> list[Point] | NDArray[np.float64]:
        """Map a sequence of points, preserving order.

        A numpy ``(N, 2)`` array yields a new ``(N, 2)`` float64 array; any
        other iterable yields a list of Points. The input is not modified.
        """
        if isinstance(points, np.ndarray):
            return self.transform_array(points)
        return [self.transform_point(point) for point in points]

    def transform_array(self, points: NDArray[Any]) -> NDArray[np.float64]:
        pts = np.asarray(points, dtype=np.float64)
        if pts.ndim != 2 or pts.shape[1] != 2:
            raise ValueError(f"Expected an (N, 2) array of points, got shape {pts.shape}")
        linear = np.array([[self.a, self.b], [self.c, self.d]], dtype=np.float64)
        return pts @ linear + np.array([self.tx, self.ty], dtype=np.float64)

    # -- Decomposition -----------------------------------------------------
    def decompose(self, flip_x: bool = False, flip_y: bool = False) -> DecomposedTransform:
        """Split into translation, rotation (degrees) and scale.

        A flip would otherwise be read as a rotation (flipping both axes is a
        180 degree turn), so callers that know the matrix contains one say so
        and get it back as a negative scale instead.

        Args:
            flip_x: The matrix mirrors across the x axis (vertical flip).
            flip_y: The matrix mirrors across the y axis (horizontal flip).
        """
        mtx = self.clone()
        if flip_x and flip_y:
            mtx.scale(-1.0, -1.0)
        elif flip_x:
            mtx.scale(1.0, -1.0)
        elif flip_y:
            mtx.scale(-1.0, 1.0)

        a, b, c, d = mtx.a, mtx.b, mtx.c, mtx.d
        if a != 0 or c != 0:
            scale_x = math.hypot(a, c)
            scale_y = (a * d - b * c) / scale_x
            turn = math.acos(a / scale_x)
            rotation = -turn if c > 0 else turn
        elif b != 0 or d != 0:
            scale_y = math.hypot(b, d)
            scale_x = (a * d - b * c) / scale_y
            turn = math.acos(b / scale_y)
            rotation = math.pi / 2 + (-turn if d > 0 else turn)
        else:
            scale_x = scale_y = rotation = 0.0

        # Put the flips back as negative scales
        if flip_y:
            scale_x = -scale_x
        if flip_x:
            scale_y = -scale_y

        return DecomposedTransform(
            x=mtx.tx,
            y=mtx.ty,
            rotation=rotation / DEG_TO_RAD,
            scale_x=scale_x,
            scale_y=scale_y,
        )

    # -- Utility -----------------------------------------------------------
    def smooth(self, precision: float = DEFAULT_SMOOTH_PRECISION) -> AffineMatrix:
        """Round every coefficient to a multiple of ``1 / precision``, halves up.

        The default keeps 10 digits after the point, which clears noise such
        as ``cos(90deg) == 6.123e-17``. Non-finite coefficients are kept.
        """
        return self.set_values(*(_round_half_up(v, precision) for v in self.to_tuple()))

    def to_tuple(self) -> Coefficients:
        return self.a, self.b, self.c, self.d, self.tx, self.ty

    def to_list(self) -> list[float]:
        return list(self.to_tuple())

    def to_dict(self) -> dict[str, float]:
        return dict(zip(_FIELDS, self.to_tuple()))

    def to_string(self) -> str:
        """Canonical ``matrix(a,b,c,d,tx,ty)`` text, parseable by from_string."""
        return format_matrix(self.to_tuple())

    def to_debug_string(self) -> str:
        fields = " ".join(f"{k}={format_number(v)}" for k, v in self.to_dict().items())
        return f"[AffineMatrix ({fields})]"

    def __str__(self) -> str:
        return self.to_string()


class FrozenAffineMatrix(AffineMatrix):
    """Immutable AffineMatrix (Value Object).

    Every mutating operation raises pydantic.ValidationError before any
    coefficient changes. clone() returns a mutable copy.
    """

    model_config = ConfigDict(frozen=True)

    def __hash__(self) -> int:
        return hash(self.to_tuple())


# Shared identity transform; frozen so it can be reused without copying
IDENTITY = FrozenAffineMatrix()
