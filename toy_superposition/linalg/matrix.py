"""
Dense matrix primitives.
"""

import numpy as np
from typing import Optional

from ..types import Matrix, Vector, ShapeError


def _check_matrix(A: np.ndarray, name: str = "A") -> None:
    if A.ndim != 2:
        raise ShapeError(f"{name} must be 2-D, got shape {A.shape}")


def _check_same_shape(A: np.ndarray, B: np.ndarray) -> None:
    if A.shape != B.shape:
        raise ShapeError(f"Shape mismatch: {A.shape} vs {B.shape}")


def _rng(rng: Optional[np.random.Generator]) -> np.random.Generator:
    return rng if rng is not None else np.random.default_rng()


def zeros(rows: int, cols: int) -> Matrix:
    """Matrix of zeros [rows, cols]."""
    return np.zeros((rows, cols), dtype=np.float64)


def random_uniform(
    rows: int,
    cols: int,
    scale: float = 1.0,
    rng: Optional[np.random.Generator] = None
) -> Matrix:
    """
    Uniform random matrix with entries in [-scale, scale).

    Args:
        rows: Number of rows
        cols: Number of columns
        scale: Half-width of the sampling interval
        rng: Random generator (fresh one if None)

    Returns:
        Random matrix [rows, cols]
    """
    return (_rng(rng).random((rows, cols)) - 0.5) * 2.0 * scale


def random_normal(
    rows: int,
    cols: int,
    mean: float = 0.0,
    std: float = 1.0,
    rng: Optional[np.random.Generator] = None
) -> Matrix:
    """
    Gaussian random matrix via the Box-Muller transform.

    Two independent uniform draws on (0, 1] are combined as
    mean + std * sqrt(-2 ln u) * cos(2 pi v).

    Args:
        rows: Number of rows
        cols: Number of columns
        mean: Distribution mean
        std: Distribution standard deviation
        rng: Random generator (fresh one if None)

    Returns:
        Random matrix [rows, cols]
    """
    rng = _rng(rng)
    # 1 - U[0, 1) lies in (0, 1], keeping log(u) finite
    u = 1.0 - rng.random((rows, cols))
    v = 1.0 - rng.random((rows, cols))
    return mean + std * np.sqrt(-2.0 * np.log(u)) * np.cos(2.0 * np.pi * v)


def multiply(A: Matrix, B: Matrix) -> Matrix:
    """Dense matrix product A @ B."""
    _check_matrix(A, "A")
    _check_matrix(B, "B")
    if A.shape[1] != B.shape[0]:
        raise ShapeError(f"Cannot multiply {A.shape} by {B.shape}")
    return A @ B


def multiply_vector(A: Matrix, x: Vector) -> Vector:
    """Matrix-vector product A @ x."""
    _check_matrix(A, "A")
    if x.ndim != 1 or A.shape[1] != x.shape[0]:
        raise ShapeError(f"Cannot multiply {A.shape} by vector {x.shape}")
    return A @ x


def transpose(A: Matrix) -> Matrix:
    """Transposed copy of A."""
    _check_matrix(A, "A")
    return A.T.copy()


def add(A: Matrix, B: Matrix) -> Matrix:
    """Elementwise A + B."""
    _check_same_shape(A, B)
    return A + B


def subtract(A: Matrix, B: Matrix) -> Matrix:
    """Elementwise A - B."""
    _check_same_shape(A, B)
    return A - B


def scale(A: Matrix, scalar: float) -> Matrix:
    """Elementwise A * scalar."""
    return A * scalar


def normalize(A: Matrix) -> Matrix:
    """
    Normalize each column of A to unit Euclidean norm.

    Columns whose norm is exactly zero are left unchanged.

    Args:
        A: Matrix [rows, cols]

    Returns:
        Column-normalized copy of A
    """
    _check_matrix(A, "A")
    norms = np.linalg.norm(A, axis=0, keepdims=True)
    safe = np.where(norms > 0, norms, 1.0)
    return A / safe
