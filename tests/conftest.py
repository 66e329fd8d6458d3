import numpy as np
import pytest

from toy_superposition import ModelConfig, SuperpositionModel


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def importance_model():
    """Paper configuration: bias, output ReLU, AdamW, importance-weighted loss."""
    return SuperpositionModel.from_config(ModelConfig.importance_preset(5, 2, seed=0))


@pytest.fixture
def sparsity_model():
    """ReLU hidden layer, SGD with column re-normalization, MSE + L1 loss."""
    return SuperpositionModel.from_config(
        ModelConfig.sparsity_preset(5, 2, activation="relu", seed=0)
    )
