"""Analysis utilities for learned representations."""

from . import representation, features, stats
from .representation import (
    RepresentationAnalysis,
    FeatureQuality,
    gram_matrix,
    orthogonality_score,
    analyze_representation,
    feature_reconstruction_quality,
)

__all__ = [
    "representation",
    "features",
    "stats",
    "RepresentationAnalysis",
    "FeatureQuality",
    "gram_matrix",
    "orthogonality_score",
    "analyze_representation",
    "feature_reconstruction_quality",
]
