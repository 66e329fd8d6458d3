"""
Parameter records for the tied-weight autoencoder.
"""

import math
import numpy as np
from typing import NamedTuple, Optional

from ..config import ModelConfig
from ..linalg import matrix
from ..types import Vector, WeightMatrix


class AdamWState(NamedTuple):
    """First/second moment estimates and step counter."""
    m_W: np.ndarray
    v_W: np.ndarray
    m_b: Optional[np.ndarray]
    v_b: Optional[np.ndarray]
    t: int = 0


class ModelParams(NamedTuple):
    """Trainable parameters plus optimizer state."""
    W: WeightMatrix                   # [hidden_dim, input_dim]
    bias: Optional[Vector] = None     # [input_dim]
    opt_state: Optional[AdamWState] = None


class Gradients(NamedTuple):
    dW: np.ndarray
    db: Optional[np.ndarray] = None


def init_weights(cfg: ModelConfig, rng: np.random.Generator) -> WeightMatrix:
    """
    Random initial weight matrix [hidden_dim, input_dim].

    Args:
        cfg: Model configuration ("xavier" or "unit" init)
        rng: Random generator

    Returns:
        Initial weights
    """
    if cfg.init == "xavier":
        std = math.sqrt(2.0 / (cfg.input_dim + cfg.hidden_dim))
        return matrix.random_normal(cfg.hidden_dim, cfg.input_dim, 0.0, std, rng)
    elif cfg.init == "unit":
        W = matrix.random_uniform(cfg.hidden_dim, cfg.input_dim, 1.0, rng)
        return matrix.normalize(W)
    else:
        raise ValueError(f"Unknown init: {cfg.init}. Use 'xavier' or 'unit'.")
