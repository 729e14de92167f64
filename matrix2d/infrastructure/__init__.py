"""Infrastructure adapters for the affine bounded context.

Conversions between AffineMatrix and the representations used by other
libraries (the ``affine`` package, numpy homogeneous arrays).
"""

from .affine_adapter import from_affine, from_array, to_affine, to_array

__all__ = ["from_affine", "from_array", "to_affine", "to_array"]
