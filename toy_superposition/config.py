"""
Configuration classes for toy_superposition package.
"""

from pydantic import BaseModel, ConfigDict, Field, AliasChoices, field_validator, model_validator
from typing import Any, Callable, Literal, Optional


class ModelConfig(BaseModel):
    """Configuration for the tied-weight autoencoder."""
    input_dim: int = Field(5, ge=1)  # Number of input features
    hidden_dim: int = Field(2, ge=1)  # Number of hidden units
    activation: Literal["linear", "relu"] = "linear"  # Hidden-layer nonlinearity
    output_relu: bool = True  # ReLU on the decoder output
    use_bias: bool = True  # Decoder bias of length input_dim
    loss: Literal["importance", "sparsity"] = "importance"
    optimizer: Literal["adamw", "sgd"] = "adamw"
    renormalize: bool = False  # Unit-norm W columns after each SGD update
    init: Literal["xavier", "unit"] = "xavier"
    seed: Optional[int] = None

    @model_validator(mode="after")
    def _check_dims(self) -> "ModelConfig":
        if self.hidden_dim > self.input_dim:
            raise ValueError(
                f"hidden_dim ({self.hidden_dim}) must not exceed input_dim ({self.input_dim})"
            )
        return self

    @classmethod
    def importance_preset(cls, input_dim: int = 5, hidden_dim: int = 2, **kwargs) -> "ModelConfig":
        """Bias + output ReLU + AdamW on the importance-weighted loss."""
        return cls(
            input_dim=input_dim,
            hidden_dim=hidden_dim,
            output_relu=True,
            use_bias=True,
            loss="importance",
            optimizer="adamw",
            init="xavier",
            **kwargs,
        )

    @classmethod
    def sparsity_preset(cls, input_dim: int = 5, hidden_dim: int = 2, **kwargs) -> "ModelConfig":
        """No bias, plain SGD with column re-normalization, MSE + L1 loss."""
        return cls(
            input_dim=input_dim,
            hidden_dim=hidden_dim,
            output_relu=False,
            use_bias=False,
            loss="sparsity",
            optimizer="sgd",
            renormalize=True,
            init="unit",
            **kwargs,
        )


class TrainConfig(BaseModel):
    """Configuration for a training run."""
    model_config = ConfigDict(populate_by_name=True, arbitrary_types_allowed=True)

    steps: int = Field(10000, ge=0, validation_alias=AliasChoices("steps", "epochs"))
    batch_size: int = Field(1024, ge=1)
    learning_rate: float = 1e-3
    lr_schedule: Literal["constant", "linear", "cosine", "exponential"] = "constant"
    initial_learning_rate: Optional[float] = None  # Selects exponential decay when set
    min_learning_rate: float = 1e-5
    decay_rate: float = 0.995
    sparsity: float = 0.1  # Fraction of zero features per sample
    importance: float = 1.0  # Importance decay per feature index
    sparsity_weight: float = 0.0  # L1 coefficient for the sparsity loss
    index_scaling: bool = False  # Scale entry j by (j/n)^(1-importance) before normalizing
    convergence_threshold: float = 1e-5
    patience: Optional[int] = None  # Defaults per loss shape: 20 importance, 10 sparsity
    callback_every: int = Field(10, ge=1)
    callback: Optional[Callable[..., Any]] = None
    progress: bool = False  # Show a tqdm progress bar

    @field_validator("sparsity")
    @classmethod
    def _check_sparsity(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError(f"sparsity must be in [0, 1], got {v}")
        return v

    @model_validator(mode="after")
    def _select_schedule(self) -> "TrainConfig":
        if self.initial_learning_rate is not None:
            self.lr_schedule = "exponential"
        return self

    @property
    def epochs(self) -> int:
        return self.steps


class AnalysisConfig(BaseModel):
    """Configuration for post-hoc representation analysis."""
    test_batch_size: int = Field(500, ge=1)  # Samples drawn for reconstruction quality
    sparsity: float = 0.1
    importance: float = 0.9  # Importance decay used for weighting
