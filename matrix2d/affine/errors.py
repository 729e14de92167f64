"""Affine Bounded Context - Error Hierarchy.

Custom exceptions for matrix construction and parsing.

Inverting a singular matrix is deliberately absent from this module: it
yields non-finite coefficients instead of raising.
"""

from __future__ import annotations

from typing import Any


class AffineMatrixError(Exception):
    """Base error for affine matrix operations."""


class MatrixParseError(AffineMatrixError):
    """Text is not of the form ``matrix(a,b,c,d,tx,ty)``.

    Attributes:
        text: The rejected input
    """

    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__(f"'{text}' is not a matrix")


class InvalidMatrixError(AffineMatrixError):
    """Value cannot be interpreted as six affine coefficients.

    Attributes:
        value: The offending value
    """

    def __init__(self, value: Any, reason: str) -> None:
        self.value = value
        super().__init__(f"Cannot interpret {type(value).__name__} as a matrix: {reason}")
