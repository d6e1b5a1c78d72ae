################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Tests for the dimension-generic matrix operations."""

from __future__ import annotations

from typing import Optional

import numpy as np
import pytest
from numpy.typing import NDArray

from oasis_math.linalg.mat2 import Mat2
from oasis_math.linalg.mat3 import Mat3
from oasis_math.linalg.mat4 import Mat4
from oasis_math.linalg.matrix import Matrix
from oasis_math.linalg.matrix import SingularMatrixError


MATRIX_TYPES: list[type[Matrix]] = [Mat2, Mat3, Mat4]


def _random(cls: type[Matrix], seed: int) -> Matrix:
    rng: np.random.Generator = np.random.default_rng(seed)
    array: NDArray[np.float64] = rng.normal(scale=0.5, size=(cls.DIM, cls.DIM))
    return cls.from_array(array + 2.0 * np.eye(cls.DIM))


@pytest.mark.parametrize("cls", MATRIX_TYPES)
def test_identity_trace_and_determinant(cls: type[Matrix]) -> None:
    """Checks trace and determinant of the identity and zero matrices."""
    assert cls.ident().trace() == float(cls.DIM)
    assert cls.ident().determinant() == 1.0
    assert cls.zero().determinant() == 0.0
    assert cls.zero().trace() == 0.0


@pytest.mark.parametrize("cls", MATRIX_TYPES)
def test_from_value(cls: type[Matrix]) -> None:
    """Checks from_value places the value on the diagonal only."""
    m: Matrix = cls.from_value(3.0)
    assert np.array_equal(m.to_array(), 3.0 * np.eye(cls.DIM))
    assert m.is_diagonal()
    assert cls.from_value(1.0) == cls.ident()
    assert cls.from_value(0.0) == cls.zero()


@pytest.mark.parametrize("cls", MATRIX_TYPES)
@pytest.mark.parametrize("value", [np.inf, -np.inf, np.nan])
def test_from_value_non_finite(cls: type[Matrix], value: float) -> None:
    """Checks a non-finite diagonal leaves the off-diagonal entries zero."""
    m: Matrix = cls.from_value(value)
    assert m.is_diagonal()
    for c in range(cls.DIM):
        for r in range(cls.DIM):
            if c != r:
                assert m.cr(c, r) == 0.0
    assert np.array_equal(np.diag(m.to_array()), np.full(cls.DIM, value), equal_nan=True)


@pytest.mark.parametrize("cls", MATRIX_TYPES)
def test_invert_roundtrip(cls: type[Matrix]) -> None:
    """Checks M * inv(M) and inv(M) * M are the identity."""
    m: Matrix = _random(cls, 7)
    inverse: Optional[Matrix] = m.invert()
    assert inverse is not None
    assert m.mul_m(inverse).is_identity()
    assert inverse.mul_m(m).is_identity()


@pytest.mark.parametrize("cls", MATRIX_TYPES)
def test_invert_zero_is_none(cls: type[Matrix]) -> None:
    """Checks the zero matrix has no inverse."""
    assert not cls.zero().is_invertible()
    assert cls.zero().invert() is None


@pytest.mark.parametrize("cls", MATRIX_TYPES)
def test_invert_self_singular_raises(cls: type[Matrix]) -> None:
    """Checks in-place inversion of a singular matrix raises."""
    m: Matrix = cls.zero()
    with pytest.raises(SingularMatrixError):
        m.invert_self()
    assert m == cls.zero()


@pytest.mark.parametrize("cls", MATRIX_TYPES)
def test_invert_self(cls: type[Matrix]) -> None:
    """Checks in-place inversion matches the copying inverse."""
    m: Matrix = _random(cls, 11)
    expected: Optional[Matrix] = m.invert()
    assert expected is not None
    m.invert_self()
    assert m == expected


@pytest.mark.parametrize("cls", MATRIX_TYPES)
def test_transpose_twice(cls: type[Matrix]) -> None:
    """Checks transposing twice is the identity operation."""
    m: Matrix = _random(cls, 1)
    assert m.transpose().transpose().approx_eq(m)


@pytest.mark.parametrize("cls", MATRIX_TYPES)
def test_transpose_of_product(cls: type[Matrix]) -> None:
    """Checks (M N)^T equals N^T M^T."""
    m: Matrix = _random(cls, 2)
    n: Matrix = _random(cls, 3)
    lhs: Matrix = m.mul_m(n).transpose()
    rhs: Matrix = n.transpose().mul_m(m.transpose())
    assert lhs.approx_eq(rhs)


@pytest.mark.parametrize("cls", MATRIX_TYPES)
def test_mul_m_matches_numpy(cls: type[Matrix]) -> None:
    """Checks the matrix product against numpy."""
    m: Matrix = _random(cls, 4)
    n: Matrix = _random(cls, 5)
    assert np.allclose(m.mul_m(n).to_array(), m.to_array() @ n.to_array())
    assert (m @ n) == m.mul_m(n)


@pytest.mark.parametrize("cls", MATRIX_TYPES)
def test_mul_v_matches_numpy(cls: type[Matrix]) -> None:
    """Checks the matrix-vector product against numpy."""
    m: Matrix = _random(cls, 6)
    v: NDArray[np.float64] = np.arange(1.0, cls.DIM + 1.0)
    assert np.allclose(m.mul_v(v), m.to_array() @ v)
    assert np.allclose(m @ v, m.mul_v(v))


@pytest.mark.parametrize("cls", MATRIX_TYPES)
def test_rows_and_columns(cls: type[Matrix]) -> None:
    """Checks row and column access agree with the entries."""
    m: Matrix = cls.new(*(float(i) for i in range(cls.DIM * cls.DIM)))
    array: NDArray[np.float64] = m.to_array()
    for i in range(cls.DIM):
        assert np.array_equal(m.c(i), array[:, i])
        assert np.array_equal(m.r(i), array[i, :])
        assert np.array_equal(m[i], m.c(i))
        for j in range(cls.DIM):
            assert m.cr(i, j) == array[j, i]
    assert len(m) == cls.DIM
    assert len(list(m)) == cls.DIM


@pytest.mark.parametrize("cls", MATRIX_TYPES)
def test_index_out_of_range(cls: type[Matrix]) -> None:
    """Checks out-of-range indices raise IndexError."""
    m: Matrix = cls.ident()
    with pytest.raises(IndexError):
        m.c(cls.DIM)
    with pytest.raises(IndexError):
        m.r(-1)
    with pytest.raises(IndexError):
        m.cr(0, cls.DIM)
    with pytest.raises(IndexError):
        m.set_cr(cls.DIM, 0, 1.0)


@pytest.mark.parametrize("cls", MATRIX_TYPES)
def test_accessors_return_copies(cls: type[Matrix]) -> None:
    """Checks mutating a returned column leaves the matrix unchanged."""
    m: Matrix = cls.ident()
    column: NDArray[np.float64] = m.c(0)
    column[0] = 5.0
    row: NDArray[np.float64] = m.r(0)
    row[0] = 5.0
    assert m == cls.ident()


def test_swaps() -> None:
    """Checks column, row and entry swaps."""
    m: Mat3 = Mat3.new(1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0, 8.0, 9.0)
    m.swap_c(0, 2)
    assert m == Mat3.new(7.0, 8.0, 9.0, 4.0, 5.0, 6.0, 1.0, 2.0, 3.0)
    m.swap_r(0, 1)
    assert m == Mat3.new(8.0, 7.0, 9.0, 5.0, 4.0, 6.0, 2.0, 1.0, 3.0)
    m.swap_cr((0, 0), (2, 2))
    assert m.cr(0, 0) == 3.0
    assert m.cr(2, 2) == 8.0


def test_setters() -> None:
    """Checks column and entry replacement."""
    m: Mat2 = Mat2.zero()
    m.set_c(1, np.array([3.0, 4.0]))
    m.set_cr(0, 0, 1.0)
    assert m == Mat2.new(1.0, 0.0, 3.0, 4.0)
    with pytest.raises(ValueError):
        m.set_c(0, np.array([1.0, 2.0, 3.0]))


def test_scalar_ops() -> None:
    """Checks scalar multiplication, division and remainder."""
    m: Mat2 = Mat2.new(-3.0, 3.0, 5.0, 1.0)
    assert m.mul_s(2.0) == Mat2.new(-6.0, 6.0, 10.0, 2.0)
    assert m.div_s(2.0) == Mat2.new(-1.5, 1.5, 2.5, 0.5)
    assert m.rem_s(2.0) == Mat2.new(-1.0, 1.0, 1.0, 1.0)
    assert 2.0 * m == m * 2.0
    assert np.float64(2.0) * m == m.mul_s(2.0)
    assert m / 2.0 == m.div_s(2.0)
    assert m % 2.0 == m.rem_s(2.0)


def test_scalar_ops_in_place() -> None:
    """Checks in-place scalar operations."""
    m: Mat2 = Mat2.new(-3.0, 3.0, 5.0, 1.0)
    m.mul_self_s(2.0)
    assert m == Mat2.new(-6.0, 6.0, 10.0, 2.0)
    m.div_self_s(4.0)
    assert m == Mat2.new(-1.5, 1.5, 2.5, 0.5)
    m.rem_self_s(1.0)
    assert m == Mat2.new(-0.5, 0.5, 0.5, 0.5)


def test_neg_add_sub() -> None:
    """Checks negation, addition and subtraction."""
    a: Mat2 = Mat2.new(1.0, 2.0, 3.0, 4.0)
    b: Mat2 = Mat2.new(4.0, 3.0, 2.0, 1.0)
    assert -a == Mat2.new(-1.0, -2.0, -3.0, -4.0)
    assert a.neg() == -a
    assert a + b == Mat2.from_value(5.0) + Mat2.new(0.0, 5.0, 5.0, 0.0)
    assert a - b == Mat2.new(-3.0, -1.0, 1.0, 3.0)

    c: Mat2 = Mat2.new(1.0, 2.0, 3.0, 4.0)
    c.add_self_m(b)
    assert c == a.add_m(b)
    c.sub_self_m(b)
    assert c == a
    c.neg_self()
    assert c == -a


def test_mixed_dimensions_rejected() -> None:
    """Checks operations between different dimensions raise TypeError."""
    with pytest.raises(TypeError):
        Mat2.ident() + Mat3.ident()  # type: ignore[operator]
    with pytest.raises(TypeError):
        Mat3.ident().mul_m(Mat4.ident())  # type: ignore[arg-type]
    assert Mat2.ident() != Mat3.ident()
    assert not Mat2.ident().approx_eq(Mat3.ident())


def test_construction_errors() -> None:
    """Checks malformed construction arguments raise ValueError."""
    with pytest.raises(ValueError):
        Mat2.new(1.0, 2.0, 3.0)
    with pytest.raises(ValueError):
        Mat3.from_cols(np.zeros(3), np.zeros(3))
    with pytest.raises(ValueError):
        Mat3.from_cols(np.zeros(3), np.zeros(2), np.zeros(3))
    with pytest.raises(ValueError):
        Mat4.from_array(np.zeros((3, 3)))


def test_predicates() -> None:
    """Checks the structural predicates."""
    symmetric: Mat3 = Mat3.new(1.0, 2.0, 3.0, 2.0, 4.0, 5.0, 3.0, 5.0, 6.0)
    assert symmetric.is_symmetric()
    assert not symmetric.is_diagonal()
    assert symmetric.is_rotated()

    skewed: Mat3 = Mat3.new(1.0, 2.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 1.0)
    assert not skewed.is_symmetric()
    assert not skewed.is_identity()

    nearly: Mat4 = Mat4.ident().add_m(Mat4.from_value(1.0e-7))
    assert nearly.is_identity()
    assert nearly.is_diagonal()


def test_map_and_bimap() -> None:
    """Checks column-wise mapping helpers."""
    a: Mat2 = Mat2.new(1.0, 2.0, 3.0, 4.0)
    b: Mat2 = Mat2.ident()
    assert a.map(lambda column: column[::-1]) == Mat2.new(2.0, 1.0, 4.0, 3.0)
    assert a.bimap(b, lambda x, y: x * y) == Mat2.new(1.0, 0.0, 0.0, 4.0)


def test_matrix_is_unhashable() -> None:
    """Checks mutable matrices cannot be used as dict keys."""
    with pytest.raises(TypeError):
        hash(Mat2.ident())
