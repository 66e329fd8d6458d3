"""
Training loop with convergence detection and cooperative suspension points.
"""

import asyncio
import math
from typing import TYPE_CHECKING, Any, Dict, Generator, NamedTuple, Optional
from tqdm.auto import tqdm

from ..config import TrainConfig
from ..data.batches import compute_importance_vector
from .convergence import ConvergenceTracker
from .schedules import learning_rate_at

if TYPE_CHECKING:
    from ..model.autoencoder import SuperpositionModel

# Iterations below threshold required before declaring convergence
PATIENCE = {"importance": 20, "sparsity": 10}


class TrainResult(NamedTuple):
    final_loss: float
    steps: int
    converged: bool


def train_iter(
    model: "SuperpositionModel",
    cfg: TrainConfig
) -> Generator[Dict[str, Any], None, Optional[TrainResult]]:
    """
    Train a model, suspending every `cfg.callback_every` iterations.

    Each suspension yields the progress record that was also passed to
    `cfg.callback`. The generator's return value (StopIteration.value) is
    the TrainResult, or None if the model was already training.

    Args:
        model: Model to train in place
        cfg: Training configuration

    Yields:
        Progress records {step, loss, learning_rate, converged}
    """
    if model.is_training:
        return None

    run_id = model.begin_run()

    patience = cfg.patience if cfg.patience is not None else PATIENCE[model.config.loss]
    tracker = ConvergenceTracker(cfg.convergence_threshold, patience)
    importance = compute_importance_vector(model.input_dim, cfg.importance)
    loss = math.inf
    steps_done = 0

    progress_bar = tqdm(total=cfg.steps, desc="Training", disable=not cfg.progress)
    try:
        for step in range(cfg.steps):
            if not model.owns_run(run_id):
                break

            lr = learning_rate_at(cfg, step)
            batch = model.generate_batch(
                cfg.batch_size, cfg.sparsity, cfg.importance, cfg.index_scaling
            )
            loss = model.train_step(batch, lr, importance, cfg.sparsity_weight)
            model.record_loss(loss)
            steps_done += 1
            converged = tracker.update(loss)

            progress_bar.update(1)
            progress_bar.set_postfix(loss=loss, lr=lr)

            if converged:
                print(f"Converged at step {step}")
                break

            if step % cfg.callback_every == 0:
                progress = {
                    "step": step,
                    "loss": loss,
                    "learning_rate": lr,
                    "converged": converged,
                }
                if cfg.callback is not None:
                    cfg.callback(progress)
                yield progress
    finally:
        progress_bar.close()
        model.end_run(run_id)

    return TrainResult(
        final_loss=loss,
        steps=steps_done,
        converged=tracker.converged,
    )


def run_training(model: "SuperpositionModel", cfg: TrainConfig) -> Optional[TrainResult]:
    """Drive train_iter to completion without suspending."""
    gen = train_iter(model, cfg)
    while True:
        try:
            next(gen)
        except StopIteration as stop:
            return stop.value


async def run_training_async(model: "SuperpositionModel", cfg: TrainConfig) -> Optional[TrainResult]:
    """Drive train_iter, handing control to the event loop at every suspension point."""
    gen = train_iter(model, cfg)
    while True:
        try:
            next(gen)
        except StopIteration as stop:
            return stop.value
        await asyncio.sleep(0)
