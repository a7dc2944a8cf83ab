# src/op_models/types.py
"""Type definitions shared by op_models models.

The model contract is split into two independent capabilities:

- :class:`Evaluable`: vector spaces, nominal values and residual/Jacobian
  evaluation, i.e. what a time stepper consumes.
- :class:`Configurable`: validation of named physical parameters.

Both are structural protocols; a model satisfies them by providing the
methods, not by inheriting from them.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, TypeAlias, runtime_checkable

import numpy as np
from numpy.typing import NDArray

if TYPE_CHECKING:
    from pydantic import BaseModel
    from scipy.sparse.linalg import LinearOperator

    from .spaces import VectorSpace

# -----------------------------------------------------------------------------
# Core numeric aliases
# -----------------------------------------------------------------------------

Float64Array: TypeAlias = NDArray[np.float64]

# -----------------------------------------------------------------------------
# Evaluation containers
# -----------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ModelState:
    """Time, state derivatives and parameters at one instant.

    Attributes:
        t: Time.
        x: Position, shape (vec_length,).
        x_dot: Velocity, shape (vec_length,).
        x_dot_dot: Acceleration, shape (vec_length,), if known.
        p: Parameter vector (c, f, k), if attached.
    """

    t: float
    x: Float64Array
    x_dot: Float64Array
    x_dot_dot: Float64Array | None = None
    p: Float64Array | None = None


@dataclass(frozen=True, slots=True)
class ModelEvaluation:
    """Outputs of one model evaluation.

    Attributes:
        residual: Residual vector (implicit form) or acceleration (explicit form).
        response: Response vector g.
        jacobian: Jacobian operator, present only when requested.
    """

    residual: Float64Array
    response: Float64Array
    jacobian: LinearOperator | None = None


# -----------------------------------------------------------------------------
# Capability protocols
# -----------------------------------------------------------------------------


@runtime_checkable
class Evaluable(Protocol):
    """Protocol for models a time stepper can evaluate."""

    def get_x_space(self) -> VectorSpace:
        """Return the state vector space."""
        ...

    def get_f_space(self) -> VectorSpace:
        """Return the residual vector space."""
        ...

    def get_p_space(self, index: int = 0) -> VectorSpace:
        """Return the parameter vector space."""
        ...

    def get_g_space(self, index: int = 0) -> VectorSpace:
        """Return the response vector space."""
        ...

    def get_nominal_values(self) -> ModelState:
        """Return the initial state and parameter values."""
        ...

    def evaluate(
        self,
        x: object,
        x_dot: object,
        x_dot_dot: object | None = None,
        t: float = 0.0,
        *,
        alpha: float = 0.0,
        beta: float = 0.0,
        omega: float = 0.0,
        want_jacobian: bool = False,
    ) -> ModelEvaluation:
        """Evaluate residual, response and optionally the Jacobian."""
        ...


@runtime_checkable
class Configurable(Protocol):
    """Protocol for models that accept named physical parameters."""

    def valid_parameters(self) -> dict[str, float]:
        """Return accepted parameter names mapped to their defaults."""
        ...

    def validate_parameters(self, params: Mapping[str, Any] | None) -> BaseModel:
        """Validate parameters and return the frozen configuration."""
        ...
