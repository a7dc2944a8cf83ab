# tests/test_verification.py
"""Verification of numerical trajectories against the exact solution.

Design principle:
- The model is driven the way an external stepper drives it:
    * scipy.integrate.solve_ivp consumes the first-order RHS and Jacobian
    * a Newmark-beta loop consumes the implicit residual and the Jacobian
      operator (solved with GMRES, so no dense representation is assumed)
- Newmark average acceleration is second order, so halving dt should divide
  the error by about four:  p ~= log2(err(dt) / err(dt/2)).
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import pytest
from scipy.integrate import solve_ivp
from scipy.sparse.linalg import gmres

from op_models import BallParabolicModel

pytestmark = pytest.mark.verification


@dataclass(slots=True, frozen=True)
class NewmarkParams:
    """Newmark-beta coefficients (average acceleration by default)."""

    beta: float = 0.25
    gamma: float = 0.5
    newton_tol: float = 1e-12
    max_newton: int = 10


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------


def _newmark_run(
    model: BallParabolicModel,
    t_end: float,
    n_steps: int,
    params: NewmarkParams | None = None,
) -> tuple[float, float]:
    """Integrate with implicit Newmark-beta and return (x, x') at t_end."""
    p = params or NewmarkParams()
    dt = t_end / n_steps

    nominal = model.get_nominal_values()
    assert nominal.x_dot_dot is not None
    x = nominal.x.copy()
    v = nominal.x_dot.copy()
    a = nominal.x_dot_dot.copy()

    for step in range(n_steps):
        t_next = (step + 1) * dt
        x_pred = x + dt * v + (0.5 - p.beta) * dt**2 * a
        v_pred = v + (1.0 - p.gamma) * dt * a

        a_next = a.copy()
        for _ in range(p.max_newton):
            x_next = x_pred + p.beta * dt**2 * a_next
            v_next = v_pred + p.gamma * dt * a_next
            out = model.evaluate(
                x_next,
                v_next,
                a_next,
                t_next,
                omega=1.0,
                alpha=p.gamma * dt,
                beta=p.beta * dt**2,
                want_jacobian=True,
            )
            if np.max(np.abs(out.residual)) < p.newton_tol:
                break
            assert out.jacobian is not None
            delta, info = gmres(out.jacobian, -out.residual, rtol=1e-14, atol=0.0)
            assert info == 0
            a_next = a_next + delta

        x = x_pred + p.beta * dt**2 * a_next
        v = v_pred + p.gamma * dt * a_next
        a = a_next

    return float(x[0]), float(v[0])


def _observed_order(err_coarse: float, err_fine: float) -> float:
    return float(np.log2(err_coarse / err_fine))


# -----------------------------------------------------------------------------
# solve_ivp against the exact solution
# -----------------------------------------------------------------------------


@pytest.mark.parametrize("method", ["RK45", "Radau"])
def test_solve_ivp_matches_exact_solution(
    supported_model: BallParabolicModel, method: str
) -> None:
    """A tight-tolerance integration reproduces the closed form."""
    model = supported_model
    nominal = model.get_nominal_values()
    y0 = np.concatenate((nominal.x, nominal.x_dot))
    times = np.linspace(0.0, 3.0, 31)

    options = {"jac": model.first_order_jacobian} if method == "Radau" else {}
    sol = solve_ivp(
        model.first_order_rhs,
        (0.0, 3.0),
        y0,
        method=method,
        t_eval=times,
        **options,
        rtol=1e-10,
        atol=1e-12,
    )
    assert sol.success

    exact = model.exact_solution_on_grid(times)
    np.testing.assert_allclose(sol.y[0], exact.x, rtol=1e-6, atol=1e-7)
    np.testing.assert_allclose(sol.y[1], exact.x_dot, rtol=1e-6, atol=1e-7)


def test_solve_ivp_ball_lands_at_two(default_model: BallParabolicModel) -> None:
    """The canonical ball returns to x = 0 at t = 2."""
    sol = solve_ivp(
        default_model.first_order_rhs,
        (0.0, 2.0),
        np.array([0.0, 1.0]),
        rtol=1e-10,
        atol=1e-12,
    )
    assert sol.success
    assert sol.y[0, -1] == pytest.approx(0.0, abs=1e-8)
    assert sol.y[1, -1] == pytest.approx(-1.0, abs=1e-8)


# -----------------------------------------------------------------------------
# Implicit Newmark-beta driven through evaluate()
# -----------------------------------------------------------------------------


def test_newmark_exact_for_ballistic(default_model: BallParabolicModel) -> None:
    """Average acceleration integrates constant acceleration exactly."""
    x, v = _newmark_run(default_model, t_end=2.0, n_steps=8)
    assert x == pytest.approx(0.0, abs=1e-12)
    assert v == pytest.approx(-1.0, abs=1e-12)


@pytest.mark.parametrize(
    "coeffs",
    [
        {"c": 0.5, "f": -1.0, "k": 0.0},
        {"c": 0.0, "f": 1.0, "k": 4.0},
        {"c": 0.0, "f": 0.0, "k": 2.5},
    ],
)
def test_newmark_second_order_convergence(coeffs: dict[str, float]) -> None:
    """Halving dt reduces the error by ~4x."""
    model = BallParabolicModel(coeffs)
    t_end = 2.0
    exact = model.get_exact_solution(t_end)

    errors = []
    for n_steps in (40, 80, 160):
        x, v = _newmark_run(model, t_end=t_end, n_steps=n_steps)
        errors.append(abs(x - exact.x[0]) + abs(v - exact.x_dot[0]))

    for coarse, fine in zip(errors, errors[1:], strict=False):
        assert 1.8 < _observed_order(coarse, fine) < 2.2


def test_newmark_runs_in_unsupported_regime() -> None:
    """Residual/Jacobian evaluation does not depend on an exact solution."""
    model = BallParabolicModel({"c": 1.0, "f": 0.0, "k": 1.0})
    x_coarse, _ = _newmark_run(model, t_end=1.0, n_steps=50)
    x_fine, _ = _newmark_run(model, t_end=1.0, n_steps=100)
    assert x_coarse == pytest.approx(x_fine, abs=1e-3)
