################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Numerical constants and approximate equality."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray


class MathConstants:
    """Numerical constants shared by the matrix types."""

    # Absolute tolerance for approximate equality of scalars
    APPROX_EPSILON: float = 1.0e-5
    # Threshold below which a vector norm is treated as zero
    EPS: float = 1e-12


def approx_eq(
    a: float | NDArray[np.float64],
    b: float | NDArray[np.float64],
    epsilon: float = MathConstants.APPROX_EPSILON,
) -> bool:
    """Return True when every component of a and b differs by at most epsilon."""
    lhs: NDArray[np.float64] = np.asarray(a, dtype=float)
    rhs: NDArray[np.float64] = np.asarray(b, dtype=float)
    if lhs.shape != rhs.shape:
        return False
    return bool(np.all(np.isclose(lhs, rhs, rtol=0.0, atol=epsilon)))


def assert_finite(x: NDArray[np.float64], name: str) -> None:
    """Raise ValueError when the array contains non-finite values."""
    if not np.all(np.isfinite(x)):
        raise ValueError(f"{name} must be finite")
