# src/op_models/ball_parabolic.py
"""Ball-parabolic test model: x'' + c x' + k x = f, x(0) = 0, x'(0) = 1.

With the default coefficients (c = 0, f = -1, k = 0) this is a ball thrown
upward under unit gravity, x(t) = t (1 - 0.5 t), landing at t = 2. Damping
and a linear spring can be switched on through the configuration; see
:mod:`op_models.regimes` for the closed forms used for verification.

The model is a fixture for time steppers. It owns no simulation state: every
call receives the state it evaluates and returns freshly allocated outputs.
Two evaluation forms are supported:

- implicit (x'' supplied): residual R = x'' + c x' + k x - f, with Jacobian
  W = omega dR/dx'' + alpha dR/dx' + beta dR/dx = omega + alpha c + beta k.
- explicit (x'' omitted): the acceleration x'' = f - c x' - k x, with
  Jacobian -(alpha c + beta k).
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Final

import numpy as np

from .config import BallParabolicConfig, valid_parameters, validate_parameters
from .operators import build_scaled_identity_operator
from .regimes import ExactValues, Regime, classify_regime, exact_values
from .spaces import DefaultVectorSpaceFactory, VectorSpace, VectorSpaceFactory
from .types import Float64Array, ModelEvaluation, ModelState

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

_VEC_LENGTH: Final[int] = 1
_NUM_RESPONSES: Final[int] = 1
_P_NAMES: Final[tuple[str, ...]] = ("c", "f", "k")

_X0: Final[float] = 0.0
_X_DOT0: Final[float] = 1.0

_NEGATIVE_TIME_ERROR = "Exact solution is defined for finite t >= 0; got t={t}"
_TIMES_1D_ERROR = "times must be a 1D array"
_SPACE_INDEX_ERROR = "{kind} space index out of bounds: {index}"


def _read_only(arr: Float64Array) -> Float64Array:
    arr.setflags(write=False)
    return arr


class BallParabolicModel:
    """Ball-parabolic ODE model evaluator.

    Satisfies the :class:`op_models.types.Evaluable` and
    :class:`op_models.types.Configurable` protocols.
    """

    def __init__(
        self,
        config: BallParabolicConfig | Mapping[str, Any] | None = None,
        *,
        space_factory: VectorSpaceFactory | None = None,
    ) -> None:
        """
        Initialize BallParabolicModel.

        Args:
            config: Coefficients as a BallParabolicConfig, a mapping of named
                parameters, or None for the defaults (c=0, f=-1, k=0).
            space_factory: Factory creating the model's vector spaces. Defaults
                to NumPy float64 storage.

        Raises:
            ConfigurationError: if a parameter is unknown or invalid (e.g. k < 0).
        """
        self._config = validate_parameters(config)
        self._space_factory = space_factory or DefaultVectorSpaceFactory()
        self._setup()

    def _setup(self) -> None:
        """Build spaces, nominal values and the regime. Runs once, from __init__."""
        self._vec_length = _VEC_LENGTH
        self._num_responses = _NUM_RESPONSES

        factory = self._space_factory
        self._x_space = factory.create_space(self._vec_length, ("x",))
        self._f_space = factory.create_space(self._vec_length, ("residual",))
        self._p_space = factory.create_space(len(_P_NAMES), _P_NAMES)
        self._g_space = factory.create_space(self._num_responses, ("x",))

        c, f, k = self._config.as_tuple()
        self._c = c
        self._f = f
        self._k = k
        self._regime = classify_regime(c, k)
        self._p_values = _read_only(self._p_space.as_member((c, f, k), name="p"))

        self._nominal_values = ModelState(
            t=0.0,
            x=_read_only(self._x_space.as_member(_X0, name="x")),
            x_dot=_read_only(self._x_space.as_member(_X_DOT0, name="x_dot")),
            x_dot_dot=_read_only(
                self._x_space.as_member(f - c * _X_DOT0 - k * _X0, name="x_dot_dot")
            ),
            p=self._p_values,
        )

        logger.debug(
            "BallParabolicModel configured: c=%g f=%g k=%g regime=%s",
            c,
            f,
            k,
            self._regime,
        )

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def config(self) -> BallParabolicConfig:
        """Frozen coefficient configuration."""
        return self._config

    @property
    def regime(self) -> Regime:
        """Exact-solution regime selected from (c, k)."""
        return self._regime

    @property
    def vec_length(self) -> int:
        """Number of state unknowns."""
        return self._vec_length

    @property
    def num_responses(self) -> int:
        """Number of responses."""
        return self._num_responses

    @staticmethod
    def valid_parameters() -> dict[str, float]:
        """Return accepted parameter names mapped to their defaults."""
        return valid_parameters()

    @staticmethod
    def validate_parameters(
        params: Mapping[str, Any] | None,
    ) -> BallParabolicConfig:
        """Validate parameters without constructing a model.

        Raises:
            ConfigurationError: if a parameter is unknown or invalid.
        """
        return validate_parameters(params)

    # ------------------------------------------------------------------
    # Vector spaces
    # ------------------------------------------------------------------

    def get_x_space(self) -> VectorSpace:
        """Return the state vector space."""
        return self._x_space

    def get_f_space(self) -> VectorSpace:
        """Return the residual vector space."""
        return self._f_space

    def get_p_space(self, index: int = 0) -> VectorSpace:
        """
        Return the parameter vector space.

        Args:
            index: Parameter-vector index; the model has exactly one.

        Raises:
            IndexError: if index is not 0.

        Returns:
            Parameter space of dimension 3, components (c, f, k).
        """
        if index != 0:
            raise IndexError(_SPACE_INDEX_ERROR.format(kind="Parameter", index=index))
        return self._p_space

    def get_p_names(self, index: int = 0) -> tuple[str, ...]:
        """Return the parameter component names."""
        names = self.get_p_space(index).names
        return names if names is not None else ()

    def get_g_space(self, index: int = 0) -> VectorSpace:
        """
        Return the response vector space.

        Args:
            index: Response index; the model has exactly one.

        Raises:
            IndexError: if index is not 0.

        Returns:
            Response space of dimension num_responses.
        """
        if index != 0:
            raise IndexError(_SPACE_INDEX_ERROR.format(kind="Response", index=index))
        return self._g_space

    # Descriptive aliases
    get_state_space = get_x_space
    get_parameter_space = get_p_space
    get_response_space = get_g_space

    # ------------------------------------------------------------------
    # Nominal values / evaluation
    # ------------------------------------------------------------------

    def get_nominal_values(self) -> ModelState:
        """
        Return the initial condition x(0) = 0, x'(0) = 1 and the parameters.

        The acceleration is the consistent value f - c. The returned arrays
        are read-only and shared between calls.

        Returns:
            Nominal ModelState at t = 0.
        """
        return self._nominal_values

    def evaluate(
        self,
        x: object,
        x_dot: object,
        x_dot_dot: object | None = None,
        t: float = 0.0,  # noqa: ARG002 (autonomous system)
        *,
        alpha: float = 0.0,
        beta: float = 0.0,
        omega: float = 0.0,
        want_jacobian: bool = False,
    ) -> ModelEvaluation:
        """
        Evaluate the residual (or acceleration), response and Jacobian.

        Args:
            x: Position, length vec_length.
            x_dot: Velocity, length vec_length.
            x_dot_dot: Acceleration, length vec_length. If None, the explicit
                form is evaluated and the acceleration is returned as residual.
            t: Evaluation time (unused; the system is autonomous).
            alpha: Coefficient on dR/dx' in the Jacobian.
            beta: Coefficient on dR/dx in the Jacobian.
            omega: Coefficient on dR/dx'' in the Jacobian (implicit form only).
            want_jacobian: Whether to build the Jacobian operator.

        Raises:
            ShapeMismatchError: if an input vector has the wrong length.

        Returns:
            ModelEvaluation with freshly allocated outputs.
        """
        x_arr = self._x_space.as_member(x, name="x")
        x_dot_arr = self._x_space.as_member(x_dot, name="x_dot")

        c, f, k = self._c, self._f, self._k

        if x_dot_dot is None:
            residual = f - c * x_dot_arr - k * x_arr
            w_coeff = -(alpha * c + beta * k)
        else:
            x_dot_dot_arr = self._x_space.as_member(x_dot_dot, name="x_dot_dot")
            residual = x_dot_dot_arr + c * x_dot_arr + k * x_arr - f
            w_coeff = omega + alpha * c + beta * k

        response = self._g_space.as_member(x_arr[: self._num_responses], name="g")

        jacobian = None
        if want_jacobian:
            jacobian = build_scaled_identity_operator(
                self._vec_length, w_coeff, dtype=self._x_space.dtype
            )

        return ModelEvaluation(
            residual=self._f_space.as_member(residual, name="residual"),
            response=response,
            jacobian=jacobian,
        )

    # ------------------------------------------------------------------
    # First-order form
    # ------------------------------------------------------------------

    def first_order_rhs(self, t: float, y: npt.ArrayLike) -> Float64Array:  # noqa: ARG002
        """
        Right-hand side of the equivalent first-order system y' = F(y).

        Args:
            t: Time (unused; included for stepper API compatibility).
            y: Stacked state (x, x'), length 2 * vec_length.

        Returns:
            Stacked derivative (x', x'').
        """
        n = self._vec_length
        y_arr = self._stacked(y)
        x_arr, x_dot_arr = y_arr[:n], y_arr[n:]
        x_dot_dot = self._f - self._c * x_dot_arr - self._k * x_arr
        return np.concatenate((x_dot_arr, x_dot_dot))

    def first_order_jacobian(self, t: float, y: npt.ArrayLike) -> Float64Array:  # noqa: ARG002
        """
        Dense Jacobian dF/dy of first_order_rhs.

        Args:
            t: Time (unused).
            y: Stacked state (x, x'), used only for its shape.

        Returns:
            Array of shape (2 * vec_length, 2 * vec_length).
        """
        n = self._vec_length
        self._stacked(y)
        eye = np.eye(n, dtype=np.float64)
        jac = np.zeros((2 * n, 2 * n), dtype=np.float64)
        jac[:n, n:] = eye
        jac[n:, :n] = -self._k * eye
        jac[n:, n:] = -self._c * eye
        return jac

    def _stacked(self, y: npt.ArrayLike) -> Float64Array:
        stacked_space = self._space_factory.create_space(2 * self._vec_length)
        return stacked_space.as_member(y, name="y")

    # ------------------------------------------------------------------
    # Exact solution
    # ------------------------------------------------------------------

    def get_exact_solution(self, t: float) -> ModelState:
        """
        Evaluate the closed-form solution at time t.

        Args:
            t: Time, t >= 0.

        Raises:
            ValueError: if t is negative or not finite.
            UnsupportedRegimeError: if k > 0 and c != 0.

        Returns:
            ModelState with exact x, x', x'' and the parameter vector.
        """
        t_val = float(t)
        if not np.isfinite(t_val) or t_val < 0.0:
            raise ValueError(_NEGATIVE_TIME_ERROR.format(t=t_val))

        values = self._exact(t_val)
        space = self._x_space
        return ModelState(
            t=t_val,
            x=space.as_member(values.x, name="x"),
            x_dot=space.as_member(values.x_dot, name="x_dot"),
            x_dot_dot=space.as_member(values.x_dot_dot, name="x_dot_dot"),
            p=self._p_values,
        )

    def exact_solution_on_grid(self, times: npt.ArrayLike) -> ExactValues:
        """
        Evaluate the closed-form solution on a 1D grid of times.

        Args:
            times: 1D array of non-negative times.

        Raises:
            ValueError: if times is not 1D or contains negative or non-finite values.
            UnsupportedRegimeError: if k > 0 and c != 0.

        Returns:
            ExactValues with arrays of shape (len(times),).
        """
        t_arr = np.asarray(times, dtype=np.float64)
        if t_arr.ndim != 1:
            raise ValueError(_TIMES_1D_ERROR)
        bad = t_arr[~np.isfinite(t_arr) | (t_arr < 0.0)]
        if bad.size:
            raise ValueError(_NEGATIVE_TIME_ERROR.format(t=float(bad[0])))
        return self._exact(t_arr)

    def _exact(self, t: float | Float64Array) -> ExactValues:
        return exact_values(self._regime, t, c=self._c, f=self._f, k=self._k)
