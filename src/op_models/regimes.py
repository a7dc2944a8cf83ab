# src/op_models/regimes.py
"""Closed-form solutions of x'' + c x' + k x = f with x(0) = 0, x'(0) = 1.

The exact solution depends on which coefficients vanish. The regime is
selected once from (c, k) by :func:`classify_regime`; each supported regime
maps to one branch function returning position, velocity and acceleration.

| Regime        | Condition       | x(t)                                            |
|---------------|-----------------|-------------------------------------------------|
| BALLISTIC     | k == 0, c == 0  | t (1 + f t / 2)                                 |
| DAMPED        | k == 0, c != 0  | (c - f)/c^2 (1 - exp(-c t)) + f t / c           |
| OSCILLATORY   | k > 0,  c == 0  | sin(w t)/w + f/k (1 - cos(w t)),  w = sqrt(k)   |
| UNSUPPORTED   | k > 0,  c != 0  | none                                            |

Coefficient comparisons are exact: a damping of 1e-300 is damped, not
ballistic. Velocities and accelerations are the analytic derivatives of the
selected branch. The damped branch is evaluated in a form that stays
accurate as c approaches zero and reduces to the ballistic parabola there.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from enum import StrEnum
from typing import Any, NamedTuple

import numpy as np
import numpy.typing as npt

from .errors import raise_configuration_error, raise_unsupported_regime

FloatArray = npt.NDArray[np.floating[Any]]

_NEGATIVE_K_ERROR = "k must be non-negative; got {k}"

# Taylor coefficients 1/(n+2)! of (e^{-s} - 1 + s) / s^2 in powers of -s.
_DAMPED_SERIES: tuple[float, ...] = tuple(
    1.0 / math.factorial(n + 2) for n in range(12)
)
_DAMPED_SERIES_CUTOFF = 0.1


class Regime(StrEnum):
    """Coefficient regimes of the ball-parabolic model."""

    BALLISTIC = "ballistic"
    DAMPED = "damped"
    OSCILLATORY = "oscillatory"
    UNSUPPORTED = "unsupported"


class ExactValues(NamedTuple):
    """Exact position, velocity and acceleration at one or more times."""

    x: FloatArray
    x_dot: FloatArray
    x_dot_dot: FloatArray


def classify_regime(c: float, k: float) -> Regime:
    """
    Select the exact-solution regime for the given coefficients.

    Args:
        c: Damping coefficient.
        k: Stiffness coefficient.

    Raises:
        ConfigurationError: if k is negative.

    Returns:
        The matching Regime.
    """
    if k < 0.0:
        raise_configuration_error(invalid=["k"], detail=_NEGATIVE_K_ERROR.format(k=k))
    if k == 0.0:
        return Regime.BALLISTIC if c == 0.0 else Regime.DAMPED
    return Regime.OSCILLATORY if c == 0.0 else Regime.UNSUPPORTED


def _ballistic(t: FloatArray, c: float, f: float, k: float) -> ExactValues:  # noqa: ARG001
    x = t * (1.0 + 0.5 * f * t)
    x_dot = 1.0 + f * t
    x_dot_dot = np.full_like(t, f)
    return ExactValues(x, x_dot, x_dot_dot)


def _damped(t: FloatArray, c: float, f: float, k: float) -> ExactValues:  # noqa: ARG001
    ct = c * t
    decay = np.exp(-ct)
    expm1_ct = np.expm1(-ct)

    # q = (e^{-ct} - 1 + ct) / c^2, by series where the direct form cancels
    series = np.zeros_like(t)
    for coeff in reversed(_DAMPED_SERIES):
        series = series * (-ct) + coeff
    q = np.where(
        np.abs(ct) < _DAMPED_SERIES_CUTOFF, t * t * series, (expm1_ct + ct) / c / c
    )

    x = t + (f - c) * q
    x_dot = decay - f * (expm1_ct / c)
    x_dot_dot = -(c - f) * decay
    return ExactValues(x, x_dot, x_dot_dot)


def _oscillatory(t: FloatArray, c: float, f: float, k: float) -> ExactValues:  # noqa: ARG001
    w = np.sqrt(k)
    sin_wt = np.sin(w * t)
    cos_wt = np.cos(w * t)
    x = sin_wt / w + (f / k) * (1.0 - cos_wt)
    x_dot = cos_wt + (f / w) * sin_wt
    x_dot_dot = -w * sin_wt + f * cos_wt
    return ExactValues(x, x_dot, x_dot_dot)


_BRANCHES: dict[Regime, Callable[[FloatArray, float, float, float], ExactValues]] = {
    Regime.BALLISTIC: _ballistic,
    Regime.DAMPED: _damped,
    Regime.OSCILLATORY: _oscillatory,
}


def exact_values(
    regime: Regime,
    t: npt.ArrayLike,
    *,
    c: float,
    f: float,
    k: float,
) -> ExactValues:
    """
    Evaluate the closed-form solution branch for a regime.

    Args:
        regime: Regime previously selected by classify_regime(c, k).
        t: Time or array of times.
        c: Damping coefficient.
        f: Forcing coefficient.
        k: Stiffness coefficient.

    Raises:
        UnsupportedRegimeError: if regime is UNSUPPORTED.

    Returns:
        ExactValues with arrays shaped like t.
    """
    branch = _BRANCHES.get(regime)
    if branch is None:
        raise_unsupported_regime(c=c, k=k)

    t_arr = np.asarray(t, dtype=np.float64)
    return branch(t_arr, float(c), float(f), float(k))
