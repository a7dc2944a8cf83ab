"""op_models: ODE test models for time-integration verification."""

from __future__ import annotations

from .ball_parabolic import BallParabolicModel
from .config import BallParabolicConfig, valid_parameters, validate_parameters
from .errors import (
    ConfigurationError,
    ErrorCode,
    OpModelsError,
    ShapeMismatchError,
    UnsupportedRegimeError,
)
from .operators import build_scaled_identity_operator
from .regimes import ExactValues, Regime, classify_regime, exact_values
from .spaces import DefaultVectorSpaceFactory, VectorSpace, VectorSpaceFactory
from .types import Configurable, Evaluable, ModelEvaluation, ModelState

__all__ = [
    "BallParabolicConfig",
    "BallParabolicModel",
    "ConfigurationError",
    "Configurable",
    "DefaultVectorSpaceFactory",
    "ErrorCode",
    "Evaluable",
    "ExactValues",
    "ModelEvaluation",
    "ModelState",
    "OpModelsError",
    "Regime",
    "ShapeMismatchError",
    "UnsupportedRegimeError",
    "VectorSpace",
    "VectorSpaceFactory",
    "build_scaled_identity_operator",
    "classify_regime",
    "exact_values",
    "valid_parameters",
    "validate_parameters",
]

__version__ = "0.1.0"
