"""
Statistical helpers for loss curves and hidden activations.
"""

import numpy as np
from typing import Dict, Sequence


def moving_average(values: Sequence[float], window: int = 10) -> np.ndarray:
    """
    Trailing moving average of a loss history.

    Args:
        values: Loss values in order
        window: Window length (shortened at the start of the series)

    Returns:
        Averages [len(values)]
    """
    arr = np.asarray(values, dtype=np.float64)
    if len(arr) == 0:
        return arr

    cumsum = np.cumsum(np.insert(arr, 0, 0.0))
    idx = np.arange(1, len(arr) + 1)
    start = np.maximum(idx - window, 0)
    return (cumsum[idx] - cumsum[start]) / (idx - start)


def compute_activation_stats(
    h_vals: np.ndarray,
    min_activation: float = 0.0
) -> Dict[str, float]:
    """
    Compute basic statistics for hidden activations.

    Args:
        h_vals: Hidden activation values (any shape)
        min_activation: Minimum activation threshold

    Returns:
        Dictionary with activation statistics
    """
    h_vals = np.asarray(h_vals).ravel()
    active_mask = h_vals > min_activation
    active_vals = h_vals[active_mask]

    stats = {
        "total_activations": len(h_vals),
        "active_count": int(active_mask.sum()),
        "sparsity": 1.0 - (active_mask.sum() / len(h_vals)),
        "mean_activation": float(h_vals.mean()),
        "mean_active": float(active_vals.mean()) if len(active_vals) > 0 else 0.0,
        "max_activation": float(h_vals.max()),
        "l1_per_unit": float(np.abs(h_vals).mean()),
    }

    return stats
