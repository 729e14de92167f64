"""Root pytest configuration for all tests.

Shared fixtures for the affine matrix suite. Matrices built from small
integers keep every product exact in float64, so tests using them can
compare with ``==`` instead of a tolerance.
"""

from __future__ import annotations

import pytest

from matrix2d.affine.value_objects import AffineMatrix


@pytest.fixture
def integer_matrix() -> AffineMatrix:
    """General (non-singular, skewed) matrix with integer coefficients."""
    return AffineMatrix(1, 2, 3, 4, 5, 6)


@pytest.fixture
def other_integer_matrix() -> AffineMatrix:
    """Second integer matrix; ``integer_matrix * other`` is (31, 46, 12, 22, 10, 14)."""
    return AffineMatrix(7, 8, 9, 1, 2, 1)


@pytest.fixture
def tsr_matrix() -> AffineMatrix:
    """Translate(40, 80) -> scale(2, 4) -> rotate(30)."""
    return AffineMatrix().translate(40, 80).scale(2, 4).rotate(30)
