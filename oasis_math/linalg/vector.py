################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Small fixed-size vector helpers."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from .units import MathConstants
from .units import assert_finite


class Vec:
    """Vector utilities for 2, 3 and 4 component vectors."""

    @staticmethod
    def ensure_shape(v: NDArray[np.float64], dim: int, name: str) -> NDArray[np.float64]:
        """Return v as a float array, raising ValueError unless it has shape (dim,)."""
        vec: NDArray[np.float64] = np.asarray(v, dtype=float)
        if vec.shape != (dim,):
            raise ValueError(f"{name} must be shape ({dim},)")
        return vec

    @staticmethod
    def normalize(
        v: NDArray[np.float64],
        eps: float = MathConstants.EPS,
    ) -> NDArray[np.float64]:
        """Normalize a vector."""
        vec: NDArray[np.float64] = np.asarray(v, dtype=float)
        if vec.ndim != 1:
            raise ValueError("v must be a 1D vector")
        assert_finite(vec, "v")
        norm: float = float(np.linalg.norm(vec))
        if norm < eps:
            raise ValueError("v has near-zero norm")
        return vec / norm
