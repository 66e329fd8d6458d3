"""
Core type definitions for toy_superposition package.
"""

import numpy as np
from typing_extensions import TypeAlias

# Core data types
Matrix: TypeAlias = np.ndarray        # [rows, cols]
Vector: TypeAlias = np.ndarray        # [n]
Batch: TypeAlias = np.ndarray         # [batch_size, input_dim]
WeightMatrix: TypeAlias = np.ndarray  # [hidden_dim, input_dim]
GramMatrix: TypeAlias = np.ndarray    # [input_dim, input_dim]


class ShapeError(ValueError):
    """Raised when operands of a linear-algebra operation have mismatched shapes."""
