# src/op_models/errors.py
"""Error types and standardized raise helpers for op_models.

Design intent:
- every failure is raised synchronously at the offending call
- callers can catch the package base class or the matching builtin
  (ValueError / NotImplementedError) without importing op_models
"""

from __future__ import annotations

from enum import StrEnum
from typing import Final, NoReturn

_CONFIG_PREFIX_MSG: Final[str] = "Invalid op_models model configuration."

_SHAPE_MISMATCH_MSG: Final[str] = (
    "{name} has an invalid shape. Expected {expected}. Got: {got!r}."
)

_UNSUPPORTED_REGIME_MSG: Final[str] = (
    "No closed-form exact solution is available for k > 0 with c != 0 "
    "(got c={c!r}, k={k!r}). The exact solution is defined only for k == 0 "
    "or c == 0."
)


class ErrorCode(StrEnum):
    """Machine-readable classification for op_models failures."""

    INVALID_CONFIGURATION = "invalid_configuration"
    SHAPE_MISMATCH = "shape_mismatch"
    UNSUPPORTED_REGIME = "unsupported_regime"


class OpModelsError(Exception):
    """Base exception for op_models errors."""

    def __init__(self, message: str, *, code: ErrorCode | None = None) -> None:
        """
        Initialize an OpModelsError.

        Args:
            message: Human-readable error message.
            code: Optional machine-readable error code classifying the error.
        """
        super().__init__(message)
        self.code: ErrorCode | None = code


class ConfigurationError(OpModelsError, ValueError):
    """Raised when model parameters are invalid at construction time."""


class ShapeMismatchError(OpModelsError, ValueError):
    """Raised when a caller-supplied vector disagrees with the model dimension."""


class UnsupportedRegimeError(OpModelsError, NotImplementedError):
    """Raised when the exact solution is requested for a regime without one."""


def raise_configuration_error(
    *,
    invalid: list[str] | None = None,
    detail: str | None = None,
) -> NoReturn:
    """
    Raise a standardized ConfigurationError.

    Args:
        invalid: Names of the offending parameters, if known.
        detail: Additional detail about the configuration issue.

    Raises:
        ConfigurationError: Always.
    """
    parts: list[str] = [_CONFIG_PREFIX_MSG]
    if invalid:
        parts.append(f"Invalid parameter(s): {sorted(set(invalid))}.")
    if detail:
        parts.append(f"Detail: {detail}")
    msg = " ".join(parts)

    raise ConfigurationError(msg, code=ErrorCode.INVALID_CONFIGURATION)


def raise_shape_mismatch(*, name: str, expected: str, got: object) -> NoReturn:
    """
    Raise a standardized ShapeMismatchError.

    Args:
        name: Name of the offending vector (for error messages).
        expected: Description of the expected shape.
        got: Actual shape received.

    Raises:
        ShapeMismatchError: Always.
    """
    msg = _SHAPE_MISMATCH_MSG.format(name=name, expected=expected, got=got)
    raise ShapeMismatchError(msg, code=ErrorCode.SHAPE_MISMATCH)


def raise_unsupported_regime(*, c: float, k: float) -> NoReturn:
    """
    Raise a standardized UnsupportedRegimeError.

    Args:
        c: Configured damping coefficient.
        k: Configured stiffness coefficient.

    Raises:
        UnsupportedRegimeError: Always.
    """
    msg = _UNSUPPORTED_REGIME_MSG.format(c=c, k=k)
    raise UnsupportedRegimeError(msg, code=ErrorCode.UNSUPPORTED_REGIME)
