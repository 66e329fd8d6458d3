"""
Convergence detection on a stream of loss values.
"""

import math


class ConvergenceTracker:
    """Counts consecutive iterations whose relative loss change is below threshold."""

    def __init__(self, threshold: float = 1e-5, patience: int = 20):
        self.threshold = threshold
        self.patience = patience
        self.previous_loss = math.inf
        self.count = 0

    def update(self, loss: float) -> bool:
        """
        Record a loss value.

        Args:
            loss: Loss of the latest iteration

        Returns:
            Whether training has converged
        """
        if math.isinf(self.previous_loss):
            relative_change = math.inf
        else:
            relative_change = abs(loss - self.previous_loss) / (self.previous_loss + 1e-8)

        if relative_change < self.threshold:
            self.count += 1
        else:
            self.count = 0

        self.previous_loss = loss
        return self.converged

    @property
    def converged(self) -> bool:
        return self.count > self.patience
