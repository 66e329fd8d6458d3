"""Synthetic data generation."""

from .batches import compute_importance_vector, generate_sample, generate_batch

__all__ = ["compute_importance_vector", "generate_sample", "generate_batch"]
