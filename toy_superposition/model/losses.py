"""
Loss functionals for the autoencoder.

Each loss reports its value split into reconstruction and sparsity parts
and exposes the gradients with respect to the decoder output and the
hidden activations.
"""

import numpy as np
from typing import NamedTuple, Optional

from ..linalg import vector
from ..types import Vector, ShapeError


class LossBreakdown(NamedTuple):
    total: float
    reconstruction: float
    sparsity: float


class ImportanceWeightedLoss:
    """mean_i(importance[i] * (x[i] - x_hat[i])**2), no sparsity penalty."""

    name = "importance"

    def _weights(self, x: Vector, importance: Optional[Vector]) -> Vector:
        if importance is None:
            return np.ones_like(x)
        if importance.shape != x.shape:
            raise ShapeError(f"importance {importance.shape} does not match input {x.shape}")
        return importance

    def __call__(
        self,
        x: Vector,
        x_hat: Vector,
        h: Vector,
        importance: Optional[Vector] = None
    ) -> LossBreakdown:
        diff = vector.subtract(x, x_hat)
        total = float(np.dot(self._weights(x, importance), diff * diff)) / x.shape[0]
        return LossBreakdown(total=total, reconstruction=total, sparsity=0.0)

    def grad_output(self, x: Vector, x_hat: Vector, importance: Optional[Vector] = None) -> Vector:
        return 2.0 * self._weights(x, importance) * vector.subtract(x_hat, x) / x.shape[0]

    def grad_hidden(self, h: Vector) -> Vector:
        return np.zeros_like(h)


class SparsityPenaltyLoss:
    """mse(x, x_hat) + sparsity_weight * l1(h) / len(h)."""

    name = "sparsity"

    def __init__(self, sparsity_weight: float = 0.0):
        self.sparsity_weight = sparsity_weight

    def __call__(
        self,
        x: Vector,
        x_hat: Vector,
        h: Vector,
        importance: Optional[Vector] = None
    ) -> LossBreakdown:
        reconstruction = vector.mse(x, x_hat)
        sparsity = self.sparsity_weight * vector.l1_norm(h) / h.shape[0]
        return LossBreakdown(
            total=reconstruction + sparsity,
            reconstruction=reconstruction,
            sparsity=sparsity,
        )

    def grad_output(self, x: Vector, x_hat: Vector, importance: Optional[Vector] = None) -> Vector:
        return 2.0 * vector.subtract(x_hat, x) / x.shape[0]

    def grad_hidden(self, h: Vector) -> Vector:
        return self.sparsity_weight * np.sign(h) / h.shape[0]


def make_loss(name: str, sparsity_weight: float = 0.0):
    """
    Create a loss functional by name.

    Args:
        name: "importance" or "sparsity"
        sparsity_weight: L1 coefficient (sparsity loss only)

    Returns:
        Loss functional
    """
    if name == "importance":
        return ImportanceWeightedLoss()
    elif name == "sparsity":
        return SparsityPenaltyLoss(sparsity_weight)
    else:
        raise ValueError(f"Unknown loss: {name}. Use 'importance' or 'sparsity'.")
