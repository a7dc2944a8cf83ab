# src/op_models/operators.py
"""Linear operators returned by model evaluation.

The Jacobian of a model residual is handed to external solvers as a SciPy
LinearOperator so they can apply it without assuming a matrix representation.
Operators are built fresh on every call and share no scratch storage, so
concurrent evaluations never alias each other's outputs.
"""

from __future__ import annotations

from typing import cast

import numpy as np
from numpy.typing import DTypeLike, NDArray
from scipy.sparse.linalg import LinearOperator

_OPERATOR_SCALE_ERROR = "scale must be a finite float; got {scale}"


def build_scaled_identity_operator(
    n: int,
    scale: float,
    *,
    dtype: DTypeLike = np.float64,
) -> LinearOperator:
    """Build the operator scale * I of size n.

    This is the Jacobian shape of a model whose degrees of freedom are
    uncoupled and share the same coefficients.

    Args:
        n: Operator size.
        scale: Diagonal value.
        dtype: Floating dtype.

    Raises:
        ValueError: If scale is not finite.

    Returns:
        Freshly allocated LinearOperator applying scale * I.
    """
    if not np.isfinite(scale):
        raise ValueError(_OPERATOR_SCALE_ERROR.format(scale=scale))

    # The matrix is private to the operator (closed over by matvec).
    op_arr = float(scale) * np.eye(n, dtype=np.dtype(dtype))

    def matvec(v: NDArray[np.floating]) -> NDArray[np.floating]:
        return cast("NDArray[np.floating]", op_arr @ v)

    def rmatvec(v: NDArray[np.floating]) -> NDArray[np.floating]:
        return cast("NDArray[np.floating]", op_arr.T @ v)

    def matmat(m: NDArray[np.floating]) -> NDArray[np.floating]:
        return cast("NDArray[np.floating]", op_arr @ m)

    return LinearOperator(
        shape=op_arr.shape,
        dtype=op_arr.dtype,
        matvec=matvec,
        rmatvec=rmatvec,
        matmat=matmat,
    )
