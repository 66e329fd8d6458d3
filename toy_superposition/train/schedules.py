"""
Learning-rate schedules.

The step-scale functions return a multiplier for the base learning rate.
"""

import math

from ..config import TrainConfig


def constant_lr(step: int, steps: int) -> float:
    return 1.0


def linear_lr(step: int, steps: int) -> float:
    return 1.0 - step / steps


def cosine_decay_lr(step: int, steps: int) -> float:
    if steps <= 1:
        return 1.0
    return math.cos(0.5 * math.pi * step / (steps - 1))


def exponential_lr(initial: float, minimum: float, rate: float, step: int) -> float:
    """max(minimum, initial * rate**step)."""
    return max(minimum, initial * rate ** step)


_SCALES = {
    "constant": constant_lr,
    "linear": linear_lr,
    "cosine": cosine_decay_lr,
}


def learning_rate_at(cfg: TrainConfig, step: int) -> float:
    """
    Effective learning rate for a given step.

    Args:
        cfg: Training configuration
        step: Zero-based iteration index

    Returns:
        Learning rate for this iteration
    """
    if cfg.lr_schedule == "exponential":
        initial = cfg.initial_learning_rate
        if initial is None:
            initial = cfg.learning_rate
        return exponential_lr(initial, cfg.min_learning_rate, cfg.decay_rate, step)
    if cfg.lr_schedule not in _SCALES:
        raise ValueError(
            f"Unknown lr_schedule: {cfg.lr_schedule}. Use one of {sorted(_SCALES) + ['exponential']}."
        )
    return cfg.learning_rate * _SCALES[cfg.lr_schedule](step, cfg.steps)
