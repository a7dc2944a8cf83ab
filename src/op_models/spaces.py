# src/op_models/spaces.py
"""Vector-space descriptors for model state, residual, parameter and response vectors.

A model only knows the dimension and the component names of its vectors. The
concrete storage is decided by a vector-space factory supplied by the caller,
so an external linear-algebra backend can own allocation. The default factory
allocates NumPy float64 arrays.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

import numpy as np
import numpy.typing as npt

from .errors import raise_shape_mismatch

FloatArray = npt.NDArray[np.floating[Any]]

_DIM_ERROR = "Vector space dimension must be positive; got {dim}"
_NAMES_LEN_ERROR = "names length {actual} doesn't match dimension {expected}"


class ArrayBackend(Protocol):
    """Minimal array backend interface for vector-space storage."""

    def asarray(
        self,
        x: object,
        dtype: object | None = None,
    ) -> np.ndarray:
        """Convert input to an array of the backend type."""
        ...


@dataclass(frozen=True, slots=True)
class VectorSpace:
    """Immutable descriptor of a finite-dimensional real vector space.

    Attributes:
        dim: Number of components.
        names: Optional component names, one per component.
        dtype: Floating dtype of members.
        xp: Array backend used to allocate members.
    """

    dim: int
    names: tuple[str, ...] | None = None
    dtype: np.dtype[Any] = field(default_factory=lambda: np.dtype(np.float64))
    xp: ArrayBackend = field(default=np, compare=False, repr=False)

    def __post_init__(self) -> None:
        """Validate dimension and names.

        Raises:
            ValueError: if dim is not positive or names has the wrong length.
        """
        if self.dim < 1:
            raise ValueError(_DIM_ERROR.format(dim=self.dim))
        if self.names is not None and len(self.names) != self.dim:
            raise ValueError(
                _NAMES_LEN_ERROR.format(actual=len(self.names), expected=self.dim)
            )

    @property
    def shape(self) -> tuple[int]:
        """Shape of every member of this space."""
        return (self.dim,)

    def as_member(self, values: object, *, name: str = "vector") -> FloatArray:
        """
        Convert values into a new member of this space.

        Scalars are accepted for one-dimensional spaces.

        Args:
            values: Array-like values.
            name: Name used in the error message.

        Returns:
            A freshly allocated 1D array of shape (dim,).
        """
        arr = self.xp.asarray(values, dtype=self.dtype)
        if arr.ndim == 0 and self.dim == 1:
            arr = arr.reshape(self.shape)
        self.check(arr, name=name)
        return arr.copy()

    def check(self, arr: object, *, name: str = "vector") -> None:
        """
        Validate that arr is shaped like a member of this space.

        Args:
            arr: Array to validate.
            name: Name used in the error message.

        Raises:
            ShapeMismatchError: if arr does not have shape (dim,).
        """
        arr_shape = np.shape(arr)
        if arr_shape != self.shape:
            raise_shape_mismatch(name=name, expected=str(self.shape), got=arr_shape)


@runtime_checkable
class VectorSpaceFactory(Protocol):
    """Protocol for objects that create vector spaces of a given dimension."""

    def create_space(
        self,
        dim: int,
        names: tuple[str, ...] | None = None,
    ) -> VectorSpace:
        """Create a vector space of dimension dim."""
        ...


@dataclass(frozen=True, slots=True)
class DefaultVectorSpaceFactory:
    """Factory producing NumPy-backed vector spaces.

    Attributes:
        dtype: Floating dtype of members.
        xp: Array backend module (default NumPy).
    """

    dtype: npt.DTypeLike = np.float64
    xp: ArrayBackend = np

    def create_space(
        self,
        dim: int,
        names: tuple[str, ...] | None = None,
    ) -> VectorSpace:
        """
        Create a vector space of dimension dim.

        Args:
            dim: Number of components.
            names: Optional component names.

        Returns:
            VectorSpace using this factory's dtype and backend.
        """
        return VectorSpace(
            dim=int(dim),
            names=None if names is None else tuple(names),
            dtype=np.dtype(self.dtype),
            xp=self.xp,
        )
