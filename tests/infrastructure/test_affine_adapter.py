"""Tests for the affine.Affine and numpy array adapters."""

from __future__ import annotations

import logging

import numpy as np
import pytest
from affine import Affine

from matrix2d.affine.errors import InvalidMatrixError
from matrix2d.affine.value_objects import IDENTITY, AffineMatrix
from matrix2d.infrastructure import from_affine, from_array, to_affine, to_array


# ===========================================================================
# affine.Affine
# ===========================================================================
def test_to_affine_reorders_coefficients(integer_matrix):
    transform = to_affine(integer_matrix)

    assert isinstance(transform, Affine)
    assert (transform.a, transform.b, transform.c) == (1, 3, 5)
    assert (transform.d, transform.e, transform.f) == (2, 4, 6)


def test_from_affine_inverts_to_affine(tsr_matrix):
    assert from_affine(to_affine(tsr_matrix)) == tsr_matrix


def test_from_affine_builds_mutable_matrix():
    mtx = from_affine(Affine.identity())

    assert mtx.is_identity()
    mtx.translate(1, 2)
    assert mtx.to_tuple() == (1, 0, 0, 1, 1, 2)


def test_from_affine_logs_conversion(caplog):
    with caplog.at_level(logging.DEBUG, logger="matrix2d.infrastructure.affine_adapter"):
        from_affine(Affine.translation(5, 6))

    assert "[AffineMatrix (a=1 b=0 c=0 d=1 tx=5 ty=6)]" in caplog.text


def test_affine_composition_matches_append():
    composed = Affine.translation(5, 6) * Affine.scale(2)

    assert from_affine(composed) == AffineMatrix().translate(5, 6).scale(2)


def test_affine_point_mapping_matches_transform_point(tsr_matrix):
    x, y = to_affine(tsr_matrix) * (42, 24)
    point = tsr_matrix.transform_point(42, 24)

    assert x == pytest.approx(point.x)
    assert y == pytest.approx(point.y)


def test_affine_rotation_matches_rotate():
    assert from_affine(Affine.rotation(30)).equals(AffineMatrix().rotate(30), exact=False)


def test_affine_inverse_matches_invert(integer_matrix):
    expected = integer_matrix.clone().invert()

    assert from_affine(~to_affine(integer_matrix)).equals(expected, exact=False)


# ===========================================================================
# numpy arrays
# ===========================================================================
def test_to_array_homogeneous_layout(integer_matrix):
    np.testing.assert_array_equal(
        to_array(integer_matrix), [[1, 3, 5], [2, 4, 6], [0, 0, 1]]
    )


def test_to_array_returns_fresh_array(integer_matrix):
    array = to_array(integer_matrix)
    array[0, 0] = 99

    assert integer_matrix.a == 1


def test_array_product_matches_append(integer_matrix, other_integer_matrix):
    product = to_array(integer_matrix) @ to_array(other_integer_matrix)

    assert from_array(product) == integer_matrix.clone().append_matrix(other_integer_matrix)


def test_array_inverse_matches_invert(tsr_matrix):
    inverse = from_array(np.linalg.inv(to_array(tsr_matrix)))

    assert inverse.equals(tsr_matrix.clone().invert(), exact=False)


def test_from_array_accepts_two_rows():
    mtx = from_array([[1, 3, 5], [2, 4, 6]])

    assert mtx == AffineMatrix(1, 2, 3, 4, 5, 6)


def test_from_array_round_trip(tsr_matrix):
    assert from_array(to_array(tsr_matrix)) == tsr_matrix
    assert from_array(to_array(IDENTITY)).is_identity()


@pytest.mark.parametrize("shape", [(2, 2), (3,), (4, 4), (3, 2)])
def test_from_array_rejects_bad_shape(shape):
    with pytest.raises(InvalidMatrixError, match="3x3 or 2x3"):
        from_array(np.zeros(shape))


def test_from_array_rejects_projective_row():
    array = np.array([[1, 0, 0], [0, 1, 0], [0.5, 0, 1]])

    with pytest.raises(InvalidMatrixError, match="bottom row") as excinfo:
        from_array(array)

    assert excinfo.value.value is array
