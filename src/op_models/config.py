# src/op_models/config.py
"""Configuration model for the ball-parabolic ODE.

This module defines the pydantic-facing configuration object used to set the
physical coefficients of

    x'' + c x' + k x = f

Notes:
    - Parameters may be given by short name (`c`, `f`, `k`) or by their long
      descriptive names ("Damping coeff c", "Forcing coeff f", "x coeff k").
    - Unknown parameters are rejected (`extra="forbid"`); a misspelled
      coefficient would otherwise silently fall back to its default.
    - The defaults describe the canonical ball thrown upward under unit
      gravity: x(t) = t (1 - 0.5 t) on [0, 2].
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from .errors import raise_configuration_error


class BallParabolicConfig(BaseModel):
    """Physical coefficients of the ball-parabolic model.

    Attributes:
        c: Damping coefficient multiplying x'.
        f: Constant forcing on the right-hand side.
        k: Stiffness coefficient multiplying x; must be non-negative.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    c: float = Field(
        default=0.0,
        allow_inf_nan=False,
        validation_alias=AliasChoices("c", "Damping coeff c"),
        description="Damping coefficient",
    )
    f: float = Field(
        default=-1.0,
        allow_inf_nan=False,
        validation_alias=AliasChoices("f", "Forcing coeff f"),
        description="Forcing coefficient",
    )
    k: float = Field(
        default=0.0,
        ge=0.0,
        allow_inf_nan=False,
        validation_alias=AliasChoices("k", "x coeff k"),
        description="Coefficient multiplying x (stiffness)",
    )

    def as_tuple(self) -> tuple[float, float, float]:
        """Return the coefficients in parameter-space order (c, f, k)."""
        return (self.c, self.f, self.k)


def valid_parameters() -> dict[str, float]:
    """Return the accepted parameter names mapped to their default values.

    Returns:
        Dict of short parameter name to default value.
    """
    return {
        name: float(field.default)
        for name, field in BallParabolicConfig.model_fields.items()
    }


def validate_parameters(
    params: BallParabolicConfig | Mapping[str, Any] | None,
) -> BallParabolicConfig:
    """Validate a parameter mapping and fill in defaults.

    Args:
        params: An existing config (returned unchanged), a mapping of named
            parameters, or None for all defaults.

    Returns:
        Validated, frozen BallParabolicConfig.

    Raises:
        ConfigurationError: If a parameter is unknown, non-finite, of the wrong
            type, or k < 0.
    """
    if params is None:
        return BallParabolicConfig()
    if isinstance(params, BallParabolicConfig):
        return params
    if not isinstance(params, Mapping):
        raise_configuration_error(
            detail=f"expected a mapping of parameters, got {type(params).__name__}"
        )

    try:
        return BallParabolicConfig.model_validate(dict(params))
    except ValidationError as exc:
        invalid = [str(err["loc"][0]) for err in exc.errors() if err["loc"]]
        raise_configuration_error(invalid=invalid, detail=str(exc))
