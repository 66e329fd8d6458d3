#!/usr/bin/env python3
"""
Example: Compare per-feature superposition across sparsity levels.
"""

import os
import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from toy_superposition import (
    ModelConfig, TrainConfig, AnalysisConfig,
    SuperpositionModel
)


def main():
    """Feature analysis example."""
    
    sparsities = [0.0, 0.7, 0.9]
    importance = 0.8
    
    for sparsity in sparsities:
        print(f"\n=== sparsity={sparsity} ===")
        
        model = SuperpositionModel.from_config(
            ModelConfig.importance_preset(input_dim=8, hidden_dim=3, seed=42)
        )
        model.train(TrainConfig(
            steps=300,
            batch_size=64,
            learning_rate=1e-2,
            lr_schedule="linear",
            sparsity=sparsity,
            importance=importance
        ))
        
        table = model.feature_statistics(AnalysisConfig(
            test_batch_size=500,
            sparsity=sparsity,
            importance=importance
        ))
        print(table.round(3).to_string())
        
        # Features holding more than half a dimension
        represented = (table["dimensionality"] > 0.5).sum()
        print(f"Features with dimensionality > 0.5: {represented}/{model.input_dim}")


if __name__ == "__main__":
    main()
