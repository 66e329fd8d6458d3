"""
Toy Superposition: tied-weight autoencoders on sparse synthetic features
"""

__version__ = "0.1.0"

from . import linalg, data, model, train, analysis
from .config import ModelConfig, TrainConfig, AnalysisConfig
from .types import Matrix, Vector, ShapeError
from .model import SuperpositionModel
from .train import TrainResult

__all__ = [
    "linalg",
    "data",
    "model",
    "train",
    "analysis",
    "ModelConfig",
    "TrainConfig",
    "AnalysisConfig",
    "Matrix",
    "Vector",
    "ShapeError",
    "SuperpositionModel",
    "TrainResult",
]
