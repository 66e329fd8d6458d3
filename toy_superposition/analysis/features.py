"""
Per-feature superposition diagnostics.
"""

import numpy as np
import pandas as pd
from typing import Optional

from ..types import WeightMatrix
from .representation import FeatureQuality


def feature_norms(W: WeightMatrix) -> np.ndarray:
    """
    Euclidean norm of each feature's direction in hidden space.

    Args:
        W: Weight matrix [hidden_dim, input_dim]

    Returns:
        Column norms [input_dim]
    """
    return np.linalg.norm(W, axis=0)


def _overlaps(W: WeightMatrix) -> np.ndarray:
    # (W_i_hat . W_j) for every pair; rows of dead features stay zero
    norms = feature_norms(W)
    W_unit = W / np.where(norms > 0, norms, 1.0)
    return W_unit.T @ W


def interference(W: WeightMatrix) -> np.ndarray:
    """
    How much other features project onto each feature's direction.

    Args:
        W: Weight matrix [hidden_dim, input_dim]

    Returns:
        sum_{j != i} (W_i_hat . W_j)^2 for each feature i [input_dim]
    """
    overlaps = _overlaps(W) ** 2
    np.fill_diagonal(overlaps, 0.0)
    return overlaps.sum(axis=1)


def feature_dimensionality(W: WeightMatrix) -> np.ndarray:
    """
    Fraction of a hidden dimension each feature occupies.

    D_i = ||W_i||^2 / sum_j (W_i_hat . W_j)^2. A feature with a dedicated
    orthogonal direction has D_i = 1, k features sharing one direction
    have 1/k each, and features that are not learned have 0.

    Args:
        W: Weight matrix [hidden_dim, input_dim]

    Returns:
        Dimensionality per feature [input_dim]
    """
    numerator = feature_norms(W) ** 2
    denominator = (_overlaps(W) ** 2).sum(axis=1)
    dims = np.zeros_like(numerator)
    alive = denominator > 0
    dims[alive] = numerator[alive] / denominator[alive]
    return dims


def feature_table(W: WeightMatrix, quality: Optional[FeatureQuality] = None) -> pd.DataFrame:
    """
    Summarise every feature in one row.

    Args:
        W: Weight matrix [hidden_dim, input_dim]
        quality: Optional reconstruction-quality result to include

    Returns:
        DataFrame indexed by feature with norm, interference and
        dimensionality columns (plus importance, quality and count)
    """
    df = pd.DataFrame({
        "norm": feature_norms(W),
        "interference": interference(W),
        "dimensionality": feature_dimensionality(W),
    })
    df.index.name = "feature"

    if quality is not None:
        df["importance"] = quality.importance
        df["quality"] = quality.qualities
        df["count"] = quality.counts

    return df
