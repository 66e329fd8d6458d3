"""Training loop, schedules and convergence detection."""

from .schedules import constant_lr, linear_lr, cosine_decay_lr, exponential_lr, learning_rate_at
from .convergence import ConvergenceTracker
from .loop import TrainResult, train_iter, run_training, run_training_async

__all__ = [
    "constant_lr",
    "linear_lr",
    "cosine_decay_lr",
    "exponential_lr",
    "learning_rate_at",
    "ConvergenceTracker",
    "TrainResult",
    "train_iter",
    "run_training",
    "run_training_async",
]
