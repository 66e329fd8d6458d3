"""
Tied-weight superposition autoencoder.

The math lives in pure functions over ModelParams; SuperpositionModel is a
stateful wrapper that owns one parameter record, its loss history and the
training flag.
"""

import numpy as np
from typing import Dict, List, NamedTuple, Optional, Tuple

from ..config import ModelConfig, TrainConfig, AnalysisConfig
from ..data import batches
from ..linalg import matrix, vector
from ..types import Batch, Vector
from ..analysis import representation, features, stats
from ..train.loop import TrainResult, train_iter, run_training, run_training_async
from .losses import LossBreakdown, make_loss
from .optim import make_optimizer
from .params import Gradients, ModelParams, init_weights


class ForwardResult(NamedTuple):
    h: Vector         # Hidden activations [hidden_dim]
    x_hat: Vector     # Reconstruction [input_dim]
    h_pre: Vector     # Hidden pre-activation
    out_pre: Vector   # Decoder output before the output nonlinearity


def init_params(cfg: ModelConfig, rng: np.random.Generator) -> ModelParams:
    """
    Fresh parameters: random W, zero bias and zero optimizer moments.

    Args:
        cfg: Model configuration
        rng: Random generator

    Returns:
        Initial ModelParams
    """
    W = init_weights(cfg, rng)
    bias = vector.zeros(cfg.input_dim) if cfg.use_bias else None
    opt_state = make_optimizer(cfg.optimizer, cfg.renormalize).init_state(W, bias)
    return ModelParams(W=W, bias=bias, opt_state=opt_state)


def forward(params: ModelParams, x: Vector, cfg: ModelConfig) -> ForwardResult:
    """
    Encode then decode with tied weights.

    h = W x (ReLU if activation == "relu"); x_hat = W^T h (+ bias), with a
    ReLU on the output if cfg.output_relu.

    Args:
        params: Model parameters
        x: Input vector [input_dim]
        cfg: Model configuration

    Returns:
        ForwardResult with activations and pre-activations
    """
    h_pre = matrix.multiply_vector(params.W, x)
    h = vector.relu(h_pre) if cfg.activation == "relu" else h_pre

    out_pre = matrix.multiply_vector(matrix.transpose(params.W), h)
    if params.bias is not None:
        out_pre = vector.add(out_pre, params.bias)
    x_hat = vector.relu(out_pre) if cfg.output_relu else out_pre

    return ForwardResult(h=h, x_hat=x_hat, h_pre=h_pre, out_pre=out_pre)


def compute_gradients(
    params: ModelParams,
    x: Vector,
    cfg: ModelConfig,
    loss_fn,
    importance: Optional[Vector] = None
) -> Tuple[LossBreakdown, Gradients]:
    """
    Loss and analytic gradients for one sample.

    W appears in both the encoder and the (transposed) decoder, so
    dW = outer(dL/dh_pre, x) + outer(h, dL/dout_pre). ReLU gates zero the
    gradient wherever their pre-activation is <= 0.

    Args:
        params: Model parameters
        x: Input vector [input_dim]
        cfg: Model configuration
        loss_fn: Loss functional
        importance: Per-feature importance weights [input_dim]

    Returns:
        (loss, gradients)
    """
    result = forward(params, x, cfg)
    loss = loss_fn(x, result.x_hat, result.h, importance)

    d_out = loss_fn.grad_output(x, result.x_hat, importance)
    if cfg.output_relu:
        d_out = d_out * (result.out_pre > 0)

    d_h = matrix.multiply_vector(params.W, d_out) + loss_fn.grad_hidden(result.h)
    if cfg.activation == "relu":
        d_h = d_h * (result.h_pre > 0)

    dW = np.outer(d_h, x) + np.outer(result.h, d_out)
    db = d_out if params.bias is not None else None
    return loss, Gradients(dW=dW, db=db)


def backward(
    params: ModelParams,
    x: Vector,
    learning_rate: float,
    cfg: ModelConfig,
    loss_fn,
    optimizer,
    importance: Optional[Vector] = None
) -> Tuple[LossBreakdown, ModelParams]:
    """One gradient step on a single sample; returns the pre-step loss and new params."""
    loss, grads = compute_gradients(params, x, cfg, loss_fn, importance)
    return loss, optimizer.update(params, grads, learning_rate)


class SuperpositionModel:
    """Tied-weight autoencoder with more features than hidden units."""

    def __init__(
        self,
        input_dim: int,
        hidden_dim: int,
        activation: str = "linear",
        **options
    ):
        """
        Initialize a model with freshly randomized weights.

        Args:
            input_dim: Number of input features
            hidden_dim: Number of hidden units (<= input_dim)
            activation: "linear" or "relu" on the hidden layer
            **options: Remaining ModelConfig fields (variant, seed, ...)
        """
        self.config = ModelConfig(
            input_dim=input_dim,
            hidden_dim=hidden_dim,
            activation=activation,
            **options,
        )
        self.input_dim = self.config.input_dim
        self.hidden_dim = self.config.hidden_dim
        self.activation = self.config.activation

        # Training and analysis draw from independent streams
        train_seed, analysis_seed = np.random.SeedSequence(self.config.seed).spawn(2)
        self.rng = np.random.default_rng(train_seed)
        self.analysis_rng = np.random.default_rng(analysis_seed)
        self.optimizer = make_optimizer(self.config.optimizer, self.config.renormalize)
        self.params = init_params(self.config, self.rng)

        self._loss_history: List[float] = []
        self._run_id = 0
        self.is_training = False
        self.total_steps = 0

    @classmethod
    def from_config(cls, cfg: ModelConfig) -> "SuperpositionModel":
        options = cfg.model_dump(exclude={"input_dim", "hidden_dim", "activation"})
        return cls(cfg.input_dim, cfg.hidden_dim, cfg.activation, **options)

    # Read accessors

    @property
    def weights(self) -> np.ndarray:
        return self.params.W.copy()

    @property
    def bias(self) -> Optional[np.ndarray]:
        return None if self.params.bias is None else self.params.bias.copy()

    @property
    def loss_history(self) -> List[float]:
        return list(self._loss_history)

    @staticmethod
    def compute_importance_vector(input_dim: int, decay: float) -> Vector:
        return batches.compute_importance_vector(input_dim, decay)

    # Forward / backward

    def forward(self, x: Vector) -> Tuple[Vector, Vector]:
        """
        Run the model on one input.

        Args:
            x: Input vector [input_dim]

        Returns:
            Tuple of (hidden_activations, reconstruction)
        """
        result = forward(self.params, np.asarray(x, dtype=np.float64), self.config)
        return result.h, result.x_hat

    def compute_loss(
        self,
        x: Vector,
        x_hat: Vector,
        h: Vector,
        importance: Optional[Vector] = None,
        sparsity_weight: float = 0.0
    ) -> LossBreakdown:
        return make_loss(self.config.loss, sparsity_weight)(x, x_hat, h, importance)

    def backward(
        self,
        x: Vector,
        learning_rate: float = 0.01,
        importance: Optional[Vector] = None,
        sparsity_weight: float = 0.0
    ) -> LossBreakdown:
        """
        Take one optimizer step on a single sample.

        Args:
            x: Input vector [input_dim]
            learning_rate: Step size
            importance: Per-feature importance weights (importance loss)
            sparsity_weight: L1 coefficient (sparsity loss)

        Returns:
            Loss before the update
        """
        loss_fn = make_loss(self.config.loss, sparsity_weight)
        loss, self.params = backward(
            self.params,
            np.asarray(x, dtype=np.float64),
            learning_rate,
            self.config,
            loss_fn,
            self.optimizer,
            importance,
        )
        return loss

    def generate_batch(
        self,
        batch_size: int,
        sparsity: float,
        importance: Optional[float] = None,
        index_scaling: bool = False
    ) -> Batch:
        return batches.generate_batch(
            self.input_dim, batch_size, sparsity, importance, index_scaling, self.rng
        )

    def train_step(
        self,
        batch: Batch,
        learning_rate: float,
        importance: Optional[Vector] = None,
        sparsity_weight: float = 0.0
    ) -> float:
        """
        One pass over the batch, updating after every sample.

        Returns:
            Batch-mean total loss
        """
        total_loss = 0.0
        for x in batch:
            total_loss += self.backward(x, learning_rate, importance, sparsity_weight).total

        self.total_steps += 1
        return total_loss / len(batch)

    # Training

    def train(self, cfg: Optional[TrainConfig] = None, **kwargs) -> Optional[TrainResult]:
        """
        Train until the step budget is spent, convergence, or stop().

        Accepts a TrainConfig or its fields as keyword arguments. Returns
        None without side effects if training is already in progress.
        """
        return run_training(self, cfg if cfg is not None else TrainConfig(**kwargs))

    def train_iter(self, cfg: Optional[TrainConfig] = None, **kwargs):
        """Generator form of train(); yields a progress record at each suspension point."""
        return train_iter(self, cfg if cfg is not None else TrainConfig(**kwargs))

    async def train_async(self, cfg: Optional[TrainConfig] = None, **kwargs) -> Optional[TrainResult]:
        return await run_training_async(self, cfg if cfg is not None else TrainConfig(**kwargs))

    def stop(self) -> None:
        """Request the training loop to stop at the next iteration boundary."""
        self.is_training = False

    # Run bookkeeping used by the training loop

    def begin_run(self) -> int:
        """Claim the model for a new run; resets history and step count."""
        self._run_id += 1
        self.is_training = True
        self._loss_history = []
        self.total_steps = 0
        return self._run_id

    def owns_run(self, run_id: int) -> bool:
        """Whether run_id is the latest run and has not been stopped."""
        return self.is_training and self._run_id == run_id

    def end_run(self, run_id: int) -> None:
        if self._run_id == run_id:
            self.is_training = False

    def record_loss(self, loss: float) -> None:
        self._loss_history.append(loss)

    # Analysis

    def analyze_representation(self) -> representation.RepresentationAnalysis:
        return representation.analyze_representation(self.params.W)

    def compute_feature_reconstruction_quality(
        self,
        test_batch_size: int = 500,
        sparsity: float = 0.1,
        importance_decay: float = 0.9,
        progress: bool = False
    ) -> representation.FeatureQuality:
        """
        Per-feature reconstruction quality on fresh samples.

        Samples come from the model's analysis stream, which is independent
        of the stream that generates training batches.
        """
        return representation.feature_reconstruction_quality(
            lambda x: self.forward(x)[1],
            self.input_dim,
            test_batch_size,
            sparsity,
            importance_decay,
            self.analysis_rng,
            progress,
        )

    def feature_statistics(self, cfg: Optional[AnalysisConfig] = None):
        """
        Per-feature table of norm, interference, dimensionality and quality.

        Returns:
            pandas DataFrame indexed by feature
        """
        cfg = cfg if cfg is not None else AnalysisConfig()
        quality = self.compute_feature_reconstruction_quality(
            cfg.test_batch_size, cfg.sparsity, cfg.importance
        )
        return features.feature_table(self.params.W, quality)

    def hidden_activation_stats(self, cfg: Optional[AnalysisConfig] = None) -> Dict[str, float]:
        """
        Summary statistics of hidden activations on fresh samples.

        Args:
            cfg: Analysis configuration (sample count and sparsity)

        Returns:
            Dictionary with activation statistics
        """
        cfg = cfg if cfg is not None else AnalysisConfig()
        batch = batches.generate_batch(
            self.input_dim, cfg.test_batch_size, cfg.sparsity, rng=self.analysis_rng
        )
        h = np.stack([self.forward(x)[0] for x in batch])
        return stats.compute_activation_stats(h)
