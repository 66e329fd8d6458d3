#!/usr/bin/env python3
"""
Example: Train a toy model of superposition with importance-weighted loss.
"""

import os
import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from toy_superposition import (
    ModelConfig, TrainConfig,
    SuperpositionModel, analysis
)


def main():
    """Train toy model example."""
    
    # Configuration
    model_cfg = ModelConfig.importance_preset(input_dim=5, hidden_dim=2, seed=0)
    
    train_cfg = TrainConfig(
        steps=500,
        batch_size=64,
        learning_rate=1e-3,
        lr_schedule="cosine",
        sparsity=0.9,
        importance=0.9,
        progress=True
    )
    
    model = SuperpositionModel.from_config(model_cfg)
    print(f"input_dim: {model.input_dim}, hidden_dim: {model.hidden_dim}")
    
    # Train
    print("Training toy model...")
    result = model.train(train_cfg)
    
    status = "converged" if result.converged else "completed"
    print(f"Training {status} after {result.steps} steps | final loss: {result.final_loss:.6f}")
    
    # Loss curve summary
    smoothed = analysis.stats.moving_average(model.loss_history, window=20)
    print(f"Smoothed loss: start {smoothed[0]:.6f} -> end {smoothed[-1]:.6f}")
    
    # Representation
    rep = model.analyze_representation()
    print(f"Orthogonality: {rep.orthogonality:.3f}")
    print("W^T W:")
    print(rep.gram_matrix.round(3))
    print("Bias:", model.bias.round(3))


if __name__ == "__main__":
    main()
