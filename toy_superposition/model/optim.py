"""
Update rules: plain scaled gradient descent and AdamW.

Both return new parameter records; inputs are left untouched.
"""

import numpy as np
from typing import Optional

from ..linalg import matrix
from .params import AdamWState, Gradients, ModelParams


class SGD:
    """W <- W - lr * dW, optionally followed by unit-norm columns."""

    def __init__(self, renormalize: bool = False):
        self.renormalize = renormalize

    def init_state(self, W: np.ndarray, bias: Optional[np.ndarray]) -> None:
        return None

    def update(self, params: ModelParams, grads: Gradients, lr: float) -> ModelParams:
        W = matrix.subtract(params.W, matrix.scale(grads.dW, lr))
        if self.renormalize:
            W = matrix.normalize(W)
        bias = params.bias
        if bias is not None and grads.db is not None:
            bias = bias - lr * grads.db
        return ModelParams(W=W, bias=bias, opt_state=params.opt_state)


class AdamW:
    """
    Adam with decoupled weight decay.

    Weight decay applies to W only; the bias takes the plain Adam step.
    """

    def __init__(
        self,
        beta1: float = 0.9,
        beta2: float = 0.999,
        eps: float = 1e-8,
        weight_decay: float = 1e-4
    ):
        self.beta1 = beta1
        self.beta2 = beta2
        self.eps = eps
        self.weight_decay = weight_decay

    def init_state(self, W: np.ndarray, bias: Optional[np.ndarray]) -> AdamWState:
        return AdamWState(
            m_W=np.zeros_like(W),
            v_W=np.zeros_like(W),
            m_b=None if bias is None else np.zeros_like(bias),
            v_b=None if bias is None else np.zeros_like(bias),
            t=0,
        )

    def _moments(self, m: np.ndarray, v: np.ndarray, g: np.ndarray, t: int):
        m = self.beta1 * m + (1.0 - self.beta1) * g
        v = self.beta2 * v + (1.0 - self.beta2) * g * g
        m_hat = m / (1.0 - self.beta1 ** t)
        v_hat = v / (1.0 - self.beta2 ** t)
        return m, v, m_hat / (np.sqrt(v_hat) + self.eps)

    def update(self, params: ModelParams, grads: Gradients, lr: float) -> ModelParams:
        state = params.opt_state
        if state is None:
            state = self.init_state(params.W, params.bias)
        t = state.t + 1

        m_W, v_W, step_W = self._moments(state.m_W, state.v_W, grads.dW, t)
        W = params.W - lr * (step_W + self.weight_decay * params.W)

        bias, m_b, v_b = params.bias, state.m_b, state.v_b
        if bias is not None and grads.db is not None:
            m_b, v_b, step_b = self._moments(m_b, v_b, grads.db, t)
            bias = bias - lr * step_b

        return ModelParams(W=W, bias=bias, opt_state=AdamWState(m_W, v_W, m_b, v_b, t))


def make_optimizer(name: str, renormalize: bool = False):
    """
    Create an update rule by name.

    Args:
        name: "adamw" or "sgd"
        renormalize: Unit-norm W columns after each step (sgd only)

    Returns:
        Optimizer
    """
    if name == "adamw":
        return AdamW()
    elif name == "sgd":
        return SGD(renormalize=renormalize)
    else:
        raise ValueError(f"Unknown optimizer: {name}. Use 'adamw' or 'sgd'.")
