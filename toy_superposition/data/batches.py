"""
Synthetic sparse batch generation.
"""

import numpy as np
from typing import Optional

from ..linalg import vector
from ..types import Batch, Vector


def compute_importance_vector(input_dim: int, decay: float) -> Vector:
    """
    Per-feature importance weights.

    Args:
        input_dim: Number of features
        decay: Geometric decay per feature index

    Returns:
        Importance vector [input_dim] with importance[i] = decay**i
    """
    return np.power(float(decay), np.arange(input_dim, dtype=np.float64))


def generate_sample(
    input_dim: int,
    sparsity: float,
    importance: Optional[float] = None,
    index_scaling: bool = False,
    rng: Optional[np.random.Generator] = None
) -> Vector:
    """
    Draw one unit-normalized sparse input vector.

    When index_scaling is set and importance < 1, entry j is multiplied by
    (j / input_dim)**(1 - importance) before normalizing.
    """
    x = vector.sparse(input_dim, sparsity, rng)
    if index_scaling and importance is not None and importance < 1.0:
        x = x * np.power(np.arange(input_dim) / input_dim, 1.0 - importance)
    return vector.normalize(x)


def generate_batch(
    input_dim: int,
    batch_size: int,
    sparsity: float,
    importance: Optional[float] = None,
    index_scaling: bool = False,
    rng: Optional[np.random.Generator] = None
) -> Batch:
    """
    Generate a batch of independent sparse samples.

    Importance is not applied to the samples themselves (it weights the
    loss) unless index_scaling is requested.

    Args:
        input_dim: Number of features
        batch_size: Number of samples
        sparsity: Fraction of zero features per sample
        importance: Importance decay, only used with index_scaling
        index_scaling: Bias magnitudes by feature index
        rng: Random generator (fresh one if None)

    Returns:
        Batch [batch_size, input_dim]
    """
    rng = rng if rng is not None else np.random.default_rng()
    batch = np.empty((batch_size, input_dim), dtype=np.float64)
    for i in range(batch_size):
        batch[i] = generate_sample(input_dim, sparsity, importance, index_scaling, rng)
    return batch

