################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Column-major square matrix base class.

Entries are stored in a float64 array indexed ``[column, row]``, so column
``c`` is the contiguous slice ``cols[c]``. Concrete dimensions derive from
:class:`Matrix` and supply the determinant and inversion algorithms.

Matrices are values. Every accessor returns a copy, and the in-place
operations replace the storage owned by the receiver.
"""

from __future__ import annotations

import logging
import numbers
from abc import ABC
from abc import abstractmethod
from typing import Callable
from typing import Iterator
from typing import Optional
from typing import TypeVar

import numpy as np
from numpy.typing import NDArray

from .units import MathConstants
from .units import approx_eq
from .vector import Vec


_LOG: logging.Logger = logging.getLogger(__name__)

_M = TypeVar("_M", bound="Matrix")


class SingularMatrixError(Exception):
    """Raised when inverting a matrix with zero determinant in place."""


class Matrix(ABC):
    """Square, column-major matrix of fixed dimension."""

    # Number of rows and columns, set by each concrete dimension
    DIM: int = 0

    # Mutable value type
    __hash__ = None  # type: ignore[assignment]

    # Make numpy scalars defer to __rmul__ instead of broadcasting over columns
    __array_ufunc__ = None

    def __init__(self, cols: NDArray[np.float64]) -> None:
        """Initialize from a (DIM, DIM) array indexed [column, row]."""
        array: NDArray[np.float64] = np.array(cols, dtype=float)
        if array.shape != (self.DIM, self.DIM):
            raise ValueError(f"cols must be shape ({self.DIM}, {self.DIM})")
        self._cols: NDArray[np.float64] = array

    ############################################################################
    # Construction
    ############################################################################

    @classmethod
    def new(cls: type[_M], *entries: float) -> _M:
        """Create a matrix from DIM * DIM scalars in column-major order."""
        if len(entries) != cls.DIM * cls.DIM:
            raise ValueError(f"{cls.__name__} needs {cls.DIM * cls.DIM} entries")
        array: NDArray[np.float64] = np.asarray(entries, dtype=float)
        return cls(array.reshape((cls.DIM, cls.DIM)))

    @classmethod
    def from_cols(cls: type[_M], *columns: NDArray[np.float64]) -> _M:
        """Create a matrix from DIM column vectors."""
        if len(columns) != cls.DIM:
            raise ValueError(f"{cls.__name__} needs {cls.DIM} columns")
        cols: list[NDArray[np.float64]] = [
            Vec.ensure_shape(column, cls.DIM, f"column {index}")
            for index, column in enumerate(columns)
        ]
        return cls(np.stack(cols))

    @classmethod
    def from_value(cls: type[_M], value: float) -> _M:
        """Create a diagonal matrix with value on the diagonal."""
        return cls(np.diag(np.full(cls.DIM, value, dtype=float)))

    @classmethod
    def zero(cls: type[_M]) -> _M:
        """Return the zero matrix."""
        return cls.from_value(0.0)

    @classmethod
    def ident(cls: type[_M]) -> _M:
        """Return the identity matrix."""
        return cls.from_value(1.0)

    @classmethod
    def from_array(cls: type[_M], array: NDArray[np.float64]) -> _M:
        """Create a matrix from a row-major (DIM, DIM) array."""
        mat: NDArray[np.float64] = np.asarray(array, dtype=float)
        if mat.shape != (cls.DIM, cls.DIM):
            raise ValueError(f"array must be shape ({cls.DIM}, {cls.DIM})")
        return cls(mat.T)

    @classmethod
    def from_matrix(cls: type[_M], other: Matrix) -> _M:
        """Convert a matrix of another dimension.

        The overlapping upper-left block is copied. Rows and columns that do
        not exist in ``other`` are taken from the identity.
        """
        result: NDArray[np.float64] = np.eye(cls.DIM, dtype=float)
        size: int = min(cls.DIM, other.DIM)
        result[:size, :size] = other._cols[:size, :size]
        return cls(result)

    def to_array(self) -> NDArray[np.float64]:
        """Return a row-major copy of the entries."""
        return np.array(self._cols.T, dtype=float)

    ############################################################################
    # Element access
    ############################################################################

    def _check_index(self, index: int, name: str) -> None:
        if not 0 <= index < self.DIM:
            raise IndexError(f"{name} index {index} out of range [0, {self.DIM})")

    def c(self, c: int) -> NDArray[np.float64]:
        """Return a copy of column c."""
        self._check_index(c, "column")
        return self._cols[c].copy()

    def set_c(self, c: int, column: NDArray[np.float64]) -> None:
        """Replace column c."""
        self._check_index(c, "column")
        vec: NDArray[np.float64] = Vec.ensure_shape(column, self.DIM, "column")
        cols: NDArray[np.float64] = self._cols.copy()
        cols[c] = vec
        self._cols = cols

    def r(self, r: int) -> NDArray[np.float64]:
        """Return row r, gathered from every column."""
        self._check_index(r, "row")
        return np.array([self._cols[c][r] for c in range(self.DIM)], dtype=float)

    def cr(self, c: int, r: int) -> float:
        """Return the entry at column c, row r."""
        self._check_index(c, "column")
        self._check_index(r, "row")
        return float(self._cols[c][r])

    def set_cr(self, c: int, r: int, value: float) -> None:
        """Replace the entry at column c, row r."""
        self._check_index(c, "column")
        self._check_index(r, "row")
        cols: NDArray[np.float64] = self._cols.copy()
        cols[c][r] = value
        self._cols = cols

    def swap_c(self, a: int, b: int) -> None:
        """Swap columns a and b."""
        tmp: NDArray[np.float64] = self.c(a)
        self.set_c(a, self.c(b))
        self.set_c(b, tmp)

    def swap_r(self, a: int, b: int) -> None:
        """Swap rows a and b."""
        self._check_index(a, "row")
        self._check_index(b, "row")
        cols: NDArray[np.float64] = self._cols.copy()
        cols[:, [a, b]] = cols[:, [b, a]]
        self._cols = cols

    def swap_cr(self, a: tuple[int, int], b: tuple[int, int]) -> None:
        """Swap the entries at (column, row) positions a and b."""
        ca, ra = a
        cb, rb = b
        tmp: float = self.cr(ca, ra)
        self.set_cr(ca, ra, self.cr(cb, rb))
        self.set_cr(cb, rb, tmp)

    def map(self: _M, fn: Callable[[NDArray[np.float64]], NDArray[np.float64]]) -> _M:
        """Return a new matrix built by applying fn to each column."""
        return type(self).from_cols(*(fn(column) for column in self))

    def bimap(
        self: _M,
        other: _M,
        fn: Callable[[NDArray[np.float64], NDArray[np.float64]], NDArray[np.float64]],
    ) -> _M:
        """Return a new matrix built from fn over pairs of matching columns."""
        self._check_same_type(other)
        return type(self).from_cols(*(fn(a, b) for a, b in zip(self, other)))

    def _check_same_type(self, other: object) -> None:
        if type(other) is not type(self):
            raise TypeError(
                f"expected {type(self).__name__}, got {type(other).__name__}"
            )

    ############################################################################
    # Arithmetic
    ############################################################################

    def neg(self: _M) -> _M:
        """Return the matrix with every entry negated."""
        return self.map(lambda column: -column)

    def neg_self(self) -> None:
        """Negate every entry in place."""
        self._cols = -self._cols

    def mul_s(self: _M, s: float) -> _M:
        """Return the matrix with every entry multiplied by s."""
        return self.map(lambda column: column * s)

    def div_s(self: _M, s: float) -> _M:
        """Return the matrix with every entry divided by s."""
        return self.map(lambda column: column / s)

    def rem_s(self: _M, s: float) -> _M:
        """Return the truncated remainder of every entry divided by s."""
        return self.map(lambda column: np.fmod(column, s))

    def mul_self_s(self, s: float) -> None:
        """Multiply every entry by s in place."""
        self._cols = self.mul_s(s)._cols

    def div_self_s(self, s: float) -> None:
        """Divide every entry by s in place."""
        self._cols = self.div_s(s)._cols

    def rem_self_s(self, s: float) -> None:
        """Replace every entry by its truncated remainder modulo s."""
        self._cols = self.rem_s(s)._cols

    def add_m(self: _M, other: _M) -> _M:
        """Return the component-wise sum."""
        return self.bimap(other, lambda a, b: a + b)

    def sub_m(self: _M, other: _M) -> _M:
        """Return the component-wise difference."""
        return self.bimap(other, lambda a, b: a - b)

    def add_self_m(self: _M, other: _M) -> None:
        """Add other in place."""
        self._cols = self.add_m(other)._cols

    def sub_self_m(self: _M, other: _M) -> None:
        """Subtract other in place."""
        self._cols = self.sub_m(other)._cols

    def mul_v(self, v: NDArray[np.float64]) -> NDArray[np.float64]:
        """Return the matrix-vector product."""
        vec: NDArray[np.float64] = Vec.ensure_shape(v, self.DIM, "v")
        return np.array(
            [np.dot(self.r(i), vec) for i in range(self.DIM)], dtype=float
        )

    def mul_m(self: _M, other: _M) -> _M:
        """Return the matrix product self * other."""
        self._check_same_type(other)
        rows: list[NDArray[np.float64]] = [self.r(i) for i in range(self.DIM)]
        cols: NDArray[np.float64] = np.array(
            [
                [np.dot(row, other._cols[j]) for row in rows]
                for j in range(self.DIM)
            ],
            dtype=float,
        )
        return type(self)(cols)

    ############################################################################
    # Algebra
    ############################################################################

    def transpose(self: _M) -> _M:
        """Return the transposed matrix."""
        return type(self)(self._cols.T)

    def transpose_self(self) -> None:
        """Transpose in place by swapping each pair of mirrored entries."""
        for i in range(self.DIM):
            for j in range(i + 1, self.DIM):
                self.swap_cr((i, j), (j, i))

    def trace(self) -> float:
        """Return the sum of the diagonal entries."""
        return float(sum(self.cr(i, i) for i in range(self.DIM)))

    @abstractmethod
    def determinant(self) -> float:
        """Return the determinant."""

    @abstractmethod
    def invert(self: _M) -> Optional[_M]:
        """Return the inverse, or None if the matrix is singular.

        Singularity uses the absolute tolerance MathConstants.APPROX_EPSILON on
        the determinant, so a well-conditioned matrix with small entries, such
        as Mat4.from_value(1e-3), has no inverse.
        """

    def invert_self(self) -> None:
        """Replace the matrix with its inverse.

        Raises:
            SingularMatrixError: The determinant is approximately zero. The
                matrix is left unchanged.
        """
        inverse: Optional[Matrix] = self.invert()
        if inverse is None:
            _LOG.warning("Refusing to invert singular %s in place", type(self).__name__)
            raise SingularMatrixError(
                "Attempted to invert a matrix with zero determinant"
            )
        self._cols = inverse._cols

    def _log_singular(self, det: float) -> None:
        _LOG.debug("%s has determinant %g, no inverse", type(self).__name__, det)

    ############################################################################
    # Predicates
    ############################################################################

    def approx_eq(
        self, other: Matrix, epsilon: float = MathConstants.APPROX_EPSILON
    ) -> bool:
        """Check component-wise approximate equality."""
        if type(other) is not type(self):
            return False
        return approx_eq(self._cols, other._cols, epsilon)

    def is_identity(self) -> bool:
        """Check whether the matrix is approximately the identity."""
        return self.approx_eq(type(self).ident())

    def is_rotated(self) -> bool:
        """Check whether the matrix differs from the identity."""
        return not self.is_identity()

    def is_invertible(self) -> bool:
        """Check whether the determinant is not approximately zero.

        The comparison is absolute, so any |det| <= MathConstants.APPROX_EPSILON
        counts as singular regardless of the scale of the entries.
        """
        return not approx_eq(self.determinant(), 0.0)

    def is_diagonal(self) -> bool:
        """Check whether every off-diagonal entry is approximately zero."""
        return all(
            approx_eq(self.cr(c, r), 0.0)
            for c in range(self.DIM)
            for r in range(self.DIM)
            if c != r
        )

    def is_symmetric(self) -> bool:
        """Check whether the matrix approximately equals its transpose."""
        return all(
            approx_eq(self.cr(c, r), self.cr(r, c))
            for c in range(self.DIM)
            for r in range(self.DIM)
            if c != r
        )

    ############################################################################
    # Python protocol
    ############################################################################

    def __len__(self) -> int:
        return self.DIM

    def __getitem__(self, c: int) -> NDArray[np.float64]:
        return self.c(c)

    def __iter__(self) -> Iterator[NDArray[np.float64]]:
        for c in range(self.DIM):
            yield self.c(c)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        if type(other) is not type(self):
            return False
        return bool(np.array_equal(self._cols, other._cols))

    def __repr__(self) -> str:
        return f"{type(self).__name__}.from_cols({self._cols.tolist()})"

    def __neg__(self: _M) -> _M:
        return self.neg()

    def __add__(self: _M, other: _M) -> _M:
        return self.add_m(other)

    def __sub__(self: _M, other: _M) -> _M:
        return self.sub_m(other)

    def __mul__(self: _M, s: object) -> _M:
        if not isinstance(s, numbers.Real):
            return NotImplemented
        return self.mul_s(float(s))

    __rmul__ = __mul__

    def __truediv__(self: _M, s: object) -> _M:
        if not isinstance(s, numbers.Real):
            return NotImplemented
        return self.div_s(float(s))

    def __mod__(self: _M, s: object) -> _M:
        if not isinstance(s, numbers.Real):
            return NotImplemented
        return self.rem_s(float(s))

    def __matmul__(self, other: object) -> Matrix | NDArray[np.float64]:
        if isinstance(other, Matrix):
            return self.mul_m(other)
        return self.mul_v(np.asarray(other, dtype=float))
