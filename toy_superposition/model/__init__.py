"""Tied-weight autoencoder model, losses and optimizers."""

from .params import AdamWState, ModelParams, Gradients
from .losses import LossBreakdown, ImportanceWeightedLoss, SparsityPenaltyLoss, make_loss
from .optim import SGD, AdamW, make_optimizer
from .autoencoder import (
    ForwardResult,
    SuperpositionModel,
    init_params,
    forward,
    compute_gradients,
    backward,
)

__all__ = [
    "AdamWState",
    "ModelParams",
    "Gradients",
    "LossBreakdown",
    "ImportanceWeightedLoss",
    "SparsityPenaltyLoss",
    "make_loss",
    "SGD",
    "AdamW",
    "make_optimizer",
    "ForwardResult",
    "SuperpositionModel",
    "init_params",
    "forward",
    "compute_gradients",
    "backward",
]
