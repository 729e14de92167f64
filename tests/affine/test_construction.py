"""Tests for AffineMatrix construction, factories and value semantics."""

from __future__ import annotations

from types import SimpleNamespace

import pytest
from pydantic import ValidationError

from matrix2d.affine.errors import InvalidMatrixError
from matrix2d.affine.value_objects import (
    IDENTITY,
    AffineMatrix,
    FrozenAffineMatrix,
)


# ===========================================================================
# Constructor
# ===========================================================================
def test_default_constructor_is_identity():
    mtx = AffineMatrix()

    assert mtx.to_tuple() == (1.0, 0.0, 0.0, 1.0, 0.0, 0.0)
    assert mtx.is_identity()


def test_positional_and_keyword_construction_agree():
    positional = AffineMatrix(1, 2, 3, 4, 5, 6)
    keyword = AffineMatrix(a=1, b=2, c=3, d=4, tx=5, ty=6)

    assert positional == keyword
    assert positional.to_dict() == {"a": 1, "b": 2, "c": 3, "d": 4, "tx": 5, "ty": 6}


def test_partial_keywords_default_to_identity():
    mtx = AffineMatrix(tx=40)

    assert mtx.to_tuple() == (1.0, 0.0, 0.0, 1.0, 40.0, 0.0)


def test_set_values_stores_floats():
    mtx = AffineMatrix().set_values(1, 2, 3, 4, 5, 6)

    assert all(isinstance(v, float) for v in mtx.to_tuple())


def test_non_numeric_coefficient_rejected_at_construction():
    with pytest.raises(ValidationError):
        AffineMatrix("abc", 0, 0, 1, 0, 0)


def test_non_finite_coefficients_allowed():
    mtx = AffineMatrix(float("inf"), 0, 0, float("nan"), 0, 0)

    assert mtx.a == float("inf")


# ===========================================================================
# Factories
# ===========================================================================
def test_from_sequence():
    assert AffineMatrix.from_sequence([1, 2, 3, 4, 5, 6]).to_list() == [1, 2, 3, 4, 5, 6]
    assert AffineMatrix.from_sequence((1, 2, 3, 4, 5, 6)) == AffineMatrix(1, 2, 3, 4, 5, 6)


@pytest.mark.parametrize("values", [[], [1, 2, 3, 4, 5], [1, 2, 3, 4, 5, 6, 7]])
def test_from_sequence_wrong_length_raises(values):
    with pytest.raises(InvalidMatrixError, match="6-element"):
        AffineMatrix.from_sequence(values)


def test_from_mapping():
    record = {"a": 1, "b": 2, "c": 3, "d": 4, "tx": 5, "ty": 6}

    assert AffineMatrix.from_mapping(record).to_dict() == record


def test_from_mapping_missing_key_raises():
    with pytest.raises(InvalidMatrixError, match="ty"):
        AffineMatrix.from_mapping({"a": 1, "b": 0, "c": 0, "d": 1, "tx": 0})


def test_from_matrix_reads_attributes():
    source = SimpleNamespace(a=1, b=2, c=3, d=4, tx=5, ty=6)

    assert AffineMatrix.from_matrix(source) == AffineMatrix(1, 2, 3, 4, 5, 6)


def test_static_factories_match_operations():
    assert AffineMatrix.translation(40, 60) == AffineMatrix().translate(40, 60)
    assert AffineMatrix.rotation(30, origin=(5, 5)) == AffineMatrix().rotate(
        30, origin=(5, 5)
    )
    assert AffineMatrix.scaling(2) == AffineMatrix(2, 0, 0, 2, 0, 0)
    assert AffineMatrix.skewing(10, 20) == AffineMatrix().skew(10, 20)
    assert AffineMatrix.shearing(0.5, 0.25) == AffineMatrix(1, 0.25, 0.5, 1, 0, 0)


# ===========================================================================
# Value semantics
# ===========================================================================
def test_clone_is_independent(integer_matrix):
    clone = integer_matrix.clone()
    clone.translate(10, 10)

    assert clone is not integer_matrix
    assert integer_matrix == AffineMatrix(1, 2, 3, 4, 5, 6)


def test_copy_overwrites_from_any_matrix_form(integer_matrix):
    target = AffineMatrix()

    assert target.copy(integer_matrix) is target
    assert target == integer_matrix
    assert AffineMatrix().copy([6, 5, 4, 3, 2, 1]) == AffineMatrix(6, 5, 4, 3, 2, 1)
    assert AffineMatrix().copy({"a": 2, "b": 0, "c": 0, "d": 2, "tx": 1, "ty": 1}) == (
        AffineMatrix(2, 0, 0, 2, 1, 1)
    )


def test_copy_rejects_non_matrix_values():
    with pytest.raises(InvalidMatrixError):
        AffineMatrix().copy("matrix(1,2,3,4,5,6)")
    with pytest.raises(InvalidMatrixError, match="numbers"):
        AffineMatrix().copy(["x", 0, 0, 1, 0, 0])


def test_set_values_and_reset_chain(integer_matrix):
    assert integer_matrix.set_values(2, 0, 0, 2, 0, 0) is integer_matrix
    assert integer_matrix.reset() is integer_matrix
    assert integer_matrix.is_identity()


def test_mutable_matrix_is_unhashable():
    with pytest.raises(TypeError):
        hash(AffineMatrix())


# ===========================================================================
# Identity constant / frozen matrices
# ===========================================================================
def test_identity_constant():
    assert isinstance(IDENTITY, FrozenAffineMatrix)
    assert IDENTITY.is_identity()
    assert IDENTITY == AffineMatrix()


def test_identity_constant_rejects_mutation():
    with pytest.raises(ValidationError):
        IDENTITY.rotate(45)
    with pytest.raises(ValidationError):
        IDENTITY.translate(1, 2)

    assert IDENTITY.is_identity()


def test_clone_of_frozen_matrix_is_mutable():
    mtx = IDENTITY.clone()
    mtx.translate(1, 2)

    assert type(mtx) is AffineMatrix
    assert mtx.to_tuple() == (1, 0, 0, 1, 1, 2)


def test_freeze_gives_hashable_snapshot(integer_matrix):
    frozen = integer_matrix.freeze()
    integer_matrix.translate(1, 1)

    assert frozen == AffineMatrix(1, 2, 3, 4, 5, 6)
    assert hash(frozen) == hash(AffineMatrix(1, 2, 3, 4, 5, 6).freeze())
    assert len({frozen, AffineMatrix(1, 2, 3, 4, 5, 6).freeze()}) == 1
