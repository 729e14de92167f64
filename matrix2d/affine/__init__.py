"""Affine Bounded Context.

Responsible for 2D affine matrix algebra:
- Value Objects: AffineMatrix, FrozenAffineMatrix, Point, DecomposedTransform
- Services: multiply, recompose, transform_point_array
- Parsing: the matrix(a,b,c,d,tx,ty) text form
"""
