"""
Vector primitives.
"""

import math
import numpy as np
from typing import Optional

from ..types import Vector, ShapeError

# Norms at or below this are treated as zero by normalize()
NORM_EPS = 1e-12


def _check_vector(x: np.ndarray, name: str = "x") -> None:
    if x.ndim != 1:
        raise ShapeError(f"{name} must be 1-D, got shape {x.shape}")


def _check_same_shape(a: np.ndarray, b: np.ndarray) -> None:
    _check_vector(a, "a")
    _check_vector(b, "b")
    if a.shape != b.shape:
        raise ShapeError(f"Length mismatch: {a.shape[0]} vs {b.shape[0]}")


def zeros(size: int) -> Vector:
    return np.zeros(size, dtype=np.float64)


def random_uniform(
    size: int,
    scale: float = 1.0,
    rng: Optional[np.random.Generator] = None
) -> Vector:
    """Uniform random vector with entries in [-scale, scale)."""
    rng = rng if rng is not None else np.random.default_rng()
    return (rng.random(size) - 0.5) * 2.0 * scale


def sparse(
    size: int,
    sparsity: float,
    rng: Optional[np.random.Generator] = None
) -> Vector:
    """
    Sample a sparse vector with uniformly random active positions.

    max(1, floor(size * (1 - sparsity))) positions are chosen by a
    Fisher-Yates shuffle of the index list; each active entry is drawn
    uniformly from (0, 1).

    Args:
        size: Vector length
        sparsity: Fraction of entries that are zero, in [0, 1]
        rng: Random generator (fresh one if None)

    Returns:
        Sparse vector [size]
    """
    rng = rng if rng is not None else np.random.default_rng()
    x = zeros(size)
    num_active = max(1, int(math.floor(size * (1.0 - sparsity))))

    indices = list(range(size))
    for i in range(size - 1, 0, -1):
        j = int(rng.integers(0, i + 1))
        indices[i], indices[j] = indices[j], indices[i]

    for idx in indices[:num_active]:
        # 1 - U[0, 1) excludes exact zeros
        x[idx] = 1.0 - rng.random()
    return x


def add(a: Vector, b: Vector) -> Vector:
    _check_same_shape(a, b)
    return a + b


def subtract(a: Vector, b: Vector) -> Vector:
    _check_same_shape(a, b)
    return a - b


def scale(x: Vector, scalar: float) -> Vector:
    return x * scalar


def dot(a: Vector, b: Vector) -> float:
    _check_same_shape(a, b)
    return float(np.dot(a, b))


def norm(x: Vector) -> float:
    """Euclidean norm."""
    _check_vector(x)
    return float(np.sqrt(np.dot(x, x)))


def mse(a: Vector, b: Vector) -> float:
    """Mean squared error between equal-length vectors."""
    diff = subtract(a, b)
    return float(np.dot(diff, diff)) / a.shape[0]


def relu(x: Vector) -> Vector:
    return np.maximum(x, 0.0)


def l1_norm(x: Vector) -> float:
    """Sum of absolute values."""
    _check_vector(x)
    return float(np.abs(x).sum())


def normalize(x: Vector) -> Vector:
    """
    Scale x to unit Euclidean norm.

    Vectors whose norm is ~0 are returned unchanged.
    """
    n = norm(x)
    if n <= NORM_EPS:
        return x.copy()
    return x / n
