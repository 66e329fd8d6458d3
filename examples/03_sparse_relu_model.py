#!/usr/bin/env python3
"""
Example: ReLU hidden layer, plain SGD and an L1 penalty on hidden activations,
with an external stop issued from the progress callback.
"""

import os
import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import numpy as np
from toy_superposition import (
    ModelConfig, TrainConfig, AnalysisConfig,
    SuperpositionModel
)


def main():
    """Sparse ReLU model example."""
    
    model = SuperpositionModel.from_config(
        ModelConfig.sparsity_preset(input_dim=5, hidden_dim=2, activation="relu", seed=1)
    )
    
    max_steps = 150
    
    def on_progress(progress):
        """Print progress and stop after a fixed number of steps."""
        print(f"  step {progress['step']:4d} | loss {progress['loss']:.3e} | lr {progress['learning_rate']:.2e}")
        if progress["step"] >= max_steps:
            model.stop()
    
    result = model.train(TrainConfig(
        epochs=200,
        batch_size=16,
        learning_rate=0.05,
        initial_learning_rate=0.05,
        min_learning_rate=1e-3,
        decay_rate=0.99,
        sparsity=0.8,
        sparsity_weight=0.1,
        callback=on_progress
    ))
    
    print(f"Stopped after {result.steps} epochs | final loss: {result.final_loss:.6f}")
    print("Column norms:", np.linalg.norm(model.weights, axis=0).round(3))
    print(f"Orthogonality: {model.analyze_representation().orthogonality:.3f}")

    # Hidden activation sparsity under the L1 penalty
    h_stats = model.hidden_activation_stats(AnalysisConfig(test_batch_size=200, sparsity=0.8))
    print(f"Hidden sparsity: {h_stats['sparsity']:.3f} | mean active: {h_stats['mean_active']:.3f}")


if __name__ == "__main__":
    main()
