"""Dense matrix and vector primitives."""

from . import matrix, vector

__all__ = ["matrix", "vector"]
