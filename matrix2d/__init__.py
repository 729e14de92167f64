"""matrix2d - 2D affine transformation library.

This package is organized by bounded context:
- affine: the 3x3 homogeneous matrix, its algebra and its text form
- infrastructure: adapters to third-party matrix representations
"""

# Imports alphabetized per project style (isort)
from matrix2d import affine, infrastructure

__all__ = ["affine", "infrastructure"]
