"""Global pytest configuration and shared fixtures for op_models."""

from __future__ import annotations

from typing import Final

import pytest

from op_models import BallParabolicModel

# -----------------------------------------------------------------------------
# Coefficient sets for each supported regime
# -----------------------------------------------------------------------------

SUPPORTED_COEFFS: Final[dict[str, dict[str, float]]] = {
    "ballistic": {"c": 0.0, "f": -1.0, "k": 0.0},
    "ballistic-forced-up": {"c": 0.0, "f": 3.0, "k": 0.0},
    "damped": {"c": 2.0, "f": 0.0, "k": 0.0},
    "damped-forced": {"c": 0.5, "f": -1.0, "k": 0.0},
    "damped-negative": {"c": -0.3, "f": 1.0, "k": 0.0},
    "oscillatory": {"c": 0.0, "f": 1.0, "k": 4.0},
    "oscillatory-unforced": {"c": 0.0, "f": 0.0, "k": 2.5},
}


# -----------------------------------------------------------------------------
# Global markers registration safety (for local pytest runs)
# -----------------------------------------------------------------------------


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers used by the test suite."""
    config.addinivalue_line(
        "markers",
        "verification: compares a numerical trajectory against the exact solution",
    )


# -----------------------------------------------------------------------------
# Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def default_model() -> BallParabolicModel:
    """Model with default coefficients (c=0, f=-1, k=0)."""
    return BallParabolicModel()


@pytest.fixture(params=sorted(SUPPORTED_COEFFS))
def supported_model(request: pytest.FixtureRequest) -> BallParabolicModel:
    """Model in each regime that has a closed-form solution."""
    return BallParabolicModel(SUPPORTED_COEFFS[request.param])
