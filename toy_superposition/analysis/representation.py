"""
Representation analysis: Gram structure and per-feature reconstruction quality.
"""

import numpy as np
from typing import Callable, NamedTuple, Optional
from tqdm.auto import tqdm

from ..data.batches import compute_importance_vector, generate_sample
from ..linalg import matrix
from ..types import GramMatrix, Vector, WeightMatrix


class RepresentationAnalysis(NamedTuple):
    gram_matrix: GramMatrix   # [input_dim, input_dim]
    orthogonality: float


class FeatureQuality(NamedTuple):
    qualities: np.ndarray     # [input_dim], in [0, 1]
    importance: np.ndarray    # [input_dim]
    counts: np.ndarray        # [input_dim], samples where the feature was active


def gram_matrix(W: WeightMatrix) -> GramMatrix:
    """W^T W: squared feature norms on the diagonal, interference off it."""
    return matrix.multiply(matrix.transpose(W), W)


def orthogonality_score(G: GramMatrix) -> float:
    """
    Share of Gram-matrix energy on the diagonal.

    sqrt(sum diag^2) / (sqrt(sum diag^2 + sum offdiag^2) + 1e-8); equals 1
    only when every off-diagonal entry is zero.

    Args:
        G: Gram matrix [n, n]

    Returns:
        Orthogonality score in [0, 1]
    """
    diag = np.diag(G)
    diagonal_norm = float(np.sum(diag ** 2))
    off_diagonal_norm = float(np.sum(G ** 2)) - diagonal_norm
    return float(np.sqrt(diagonal_norm) / (np.sqrt(diagonal_norm + off_diagonal_norm) + 1e-8))


def analyze_representation(W: WeightMatrix) -> RepresentationAnalysis:
    G = gram_matrix(W)
    return RepresentationAnalysis(gram_matrix=G, orthogonality=orthogonality_score(G))


def feature_reconstruction_quality(
    reconstruct: Callable[[Vector], Vector],
    input_dim: int,
    n_samples: int = 500,
    sparsity: float = 0.1,
    importance_decay: float = 0.9,
    rng: Optional[np.random.Generator] = None,
    progress: bool = False
) -> FeatureQuality:
    """
    Estimate how well each feature is reconstructed when it is active.

    For every fresh sample, features with a positive value accumulate
    |x_i - x_hat_i|. Quality is max(0, 1 - mean error) for features seen
    at least once, else 0.

    Args:
        reconstruct: Maps an input vector to its reconstruction
        input_dim: Number of features
        n_samples: Number of samples to draw
        sparsity: Fraction of zero features per sample
        importance_decay: Decay used for the returned importance vector
        rng: Random generator (fresh one if None)
        progress: Show a tqdm progress bar

    Returns:
        FeatureQuality with qualities, importance vector and activation counts
    """
    rng = rng if rng is not None else np.random.default_rng()
    importance = compute_importance_vector(input_dim, importance_decay)
    errors = np.zeros(input_dim, dtype=np.float64)
    counts = np.zeros(input_dim, dtype=np.int64)

    for _ in tqdm(range(n_samples), desc="Feature quality", disable=not progress):
        x = generate_sample(input_dim, sparsity, rng=rng)
        x_hat = reconstruct(x)

        active = x > 0
        errors[active] += np.abs(x[active] - x_hat[active])
        counts[active] += 1

    qualities = np.zeros(input_dim, dtype=np.float64)
    seen = counts > 0
    qualities[seen] = np.maximum(0.0, 1.0 - errors[seen] / counts[seen])

    return FeatureQuality(qualities=qualities, importance=importance, counts=counts)
