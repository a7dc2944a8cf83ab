# op_models/examples/ball_parabolic_regimes.py
"""Exact vs. numerical trajectories of the ball-parabolic model in each regime.

This example demonstrates the model API:

- get_nominal_values() supplies the initial state (x, x') = (0, 1).
- first_order_rhs / first_order_jacobian drive a generic integrator
  (scipy.integrate.solve_ivp, Radau).
- exact_solution_on_grid() supplies the closed form for comparison.

One plot per supported regime is written to examples/output/ball_parabolic/.
The spring-damper configuration (k > 0, c != 0) is integrated too, but has no
exact curve.

This script saves plots to disk (no interactive windows).
"""

from __future__ import annotations

import logging
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
from scipy.integrate import solve_ivp

from op_models import BallParabolicModel, UnsupportedRegimeError

logger = logging.getLogger(__name__)

_OUTPUT_DIR = Path(__file__).resolve().parent / "output" / "ball_parabolic"
_SOLVE_FAILED_ERROR = "solve_ivp failed for {name}: {message}"

_CASES: dict[str, dict[str, float]] = {
    "ballistic": {"c": 0.0, "f": -1.0, "k": 0.0},
    "damped": {"c": 2.0, "f": 0.0, "k": 0.0},
    "oscillatory": {"c": 0.0, "f": 1.0, "k": 4.0},
    "spring_damper": {"c": 0.5, "f": 0.0, "k": 4.0},
}


def integrate(model: BallParabolicModel, times: np.ndarray, *, name: str) -> np.ndarray:
    """Integrate the model's first-order form and return x on the grid.

    Args:
        model: Configured model.
        times: 1D array of output times starting at 0.
        name: Case name for error messages.

    Raises:
        RuntimeError: If the integrator reports failure.

    Returns:
        Position history, shape (len(times),).
    """
    nominal = model.get_nominal_values()
    y0 = np.concatenate((nominal.x, nominal.x_dot))
    sol = solve_ivp(
        model.first_order_rhs,
        (float(times[0]), float(times[-1])),
        y0,
        method="Radau",
        t_eval=times,
        jac=model.first_order_jacobian,
        rtol=1e-8,
        atol=1e-10,
    )
    if not sol.success:
        raise RuntimeError(_SOLVE_FAILED_ERROR.format(name=name, message=sol.message))
    return sol.y[0]


def save_trajectory_plot(
    times: np.ndarray,
    x_num: np.ndarray,
    x_exact: np.ndarray | None,
    *,
    title: str,
    out_path: Path,
) -> None:
    """Save numerical (and exact, when available) trajectories to an image file.

    Args:
        times: 1D array of times.
        x_num: Numerical positions.
        x_exact: Exact positions, or None if no closed form exists.
        title: Plot title.
        out_path: Output path for the saved figure.
    """
    plt.figure(figsize=(8, 5))
    plt.plot(times, x_num, label="Radau")
    if x_exact is not None:
        plt.plot(times, x_exact, "--", label="exact")
        err = float(np.max(np.abs(x_num - x_exact)))
        title = f"{title}\nmax |x - x_exact| = {err:.3e}"
    plt.grid(visible=True)
    plt.legend()
    plt.title(title)
    plt.xlabel("t")
    plt.ylabel("x")
    plt.tight_layout()

    out_path.parent.mkdir(parents=True, exist_ok=True)
    plt.savefig(out_path, dpi=150)
    plt.close()


def main() -> None:
    """Run every case and save one plot per case."""
    logging.basicConfig(level=logging.INFO)
    times = np.linspace(0.0, 4.0, 201)

    for name, coeffs in _CASES.items():
        model = BallParabolicModel(coeffs)
        x_num = integrate(model, times, name=name)

        try:
            x_exact = model.exact_solution_on_grid(times).x
        except UnsupportedRegimeError:
            logger.info("%s: no closed form (regime=%s)", name, model.regime)
            x_exact = None

        save_trajectory_plot(
            times,
            x_num,
            x_exact,
            title=f"{name}: c={coeffs['c']}, f={coeffs['f']}, k={coeffs['k']}",
            out_path=_OUTPUT_DIR / f"{name}.png",
        )


if __name__ == "__main__":
    main()
