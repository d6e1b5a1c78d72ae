################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""2x2 column-major matrix."""

from __future__ import annotations

from typing import Optional

import numpy as np

from .matrix import Matrix
from .units import approx_eq


class Mat2(Matrix):
    """2x2 matrix stored as two column vectors."""

    DIM: int = 2

    @staticmethod
    def from_angle(radians: float) -> "Mat2":
        """Create a counter-clockwise rotation by the given angle."""
        cos_theta: float = float(np.cos(radians))
        sin_theta: float = float(np.sin(radians))
        return Mat2.new(cos_theta, sin_theta, -sin_theta, cos_theta)

    def determinant(self) -> float:
        """Return the determinant."""
        return self.cr(0, 0) * self.cr(1, 1) - self.cr(1, 0) * self.cr(0, 1)

    def invert(self) -> Optional["Mat2"]:
        """Return the adjugate divided by the determinant."""
        det: float = self.determinant()
        if approx_eq(det, 0.0):
            self._log_singular(det)
            return None
        return Mat2.new(
            self.cr(1, 1) / det,
            -self.cr(0, 1) / det,
            -self.cr(1, 0) / det,
            self.cr(0, 0) / det,
        )
