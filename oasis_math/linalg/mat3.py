################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""3x3 column-major matrix and rotation matrix to quaternion conversion."""

from __future__ import annotations

import math
from typing import Optional

import numpy as np
from numpy.typing import NDArray

from .matrix import Matrix
from .quat import Quat
from .units import approx_eq
from .vector import Vec


class Mat3(Matrix):
    """3x3 matrix stored as three column vectors."""

    DIM: int = 3

    @staticmethod
    def look_at(dir: NDArray[np.float64], up: NDArray[np.float64]) -> "Mat3":
        """Create a basis with columns (up, side, dir) facing along dir.

        Raises:
            ValueError: dir or up has near-zero length, or they are parallel.
        """
        forward: NDArray[np.float64] = Vec.normalize(Vec.ensure_shape(dir, 3, "dir"))
        side: NDArray[np.float64] = np.cross(
            forward, Vec.normalize(Vec.ensure_shape(up, 3, "up"))
        )
        up_ortho: NDArray[np.float64] = Vec.normalize(np.cross(side, forward))
        return Mat3.from_cols(up_ortho, side, forward)

    @staticmethod
    def from_quat(q: Quat) -> "Mat3":
        """Create the rotation matrix of a quaternion."""
        return Mat3.from_array(q.as_matrix())

    def determinant(self) -> float:
        """Return the determinant by cofactor expansion."""
        return (
            self.cr(0, 0)
            * (self.cr(1, 1) * self.cr(2, 2) - self.cr(2, 1) * self.cr(1, 2))
            - self.cr(1, 0)
            * (self.cr(0, 1) * self.cr(2, 2) - self.cr(2, 1) * self.cr(0, 2))
            + self.cr(2, 0)
            * (self.cr(0, 1) * self.cr(1, 2) - self.cr(1, 1) * self.cr(0, 2))
        )

    def invert(self) -> Optional["Mat3"]:
        """Return the inverse, built from cross products of the columns."""
        det: float = self.determinant()
        if approx_eq(det, 0.0):
            self._log_singular(det)
            return None

        # Row i of the inverse is the cross product of the other two columns
        c0: NDArray[np.float64] = self.c(0)
        c1: NDArray[np.float64] = self.c(1)
        c2: NDArray[np.float64] = self.c(2)
        return Mat3.from_cols(
            np.cross(c1, c2) / det,
            np.cross(c2, c0) / det,
            np.cross(c0, c1) / det,
        ).transpose()

    def to_quat(self) -> Quat:
        """Convert a rotation matrix to a quaternion.

        Uses Shoemake's method: the branch is chosen by the trace, or else by
        the largest diagonal entry, which keeps the square root argument away
        from zero. The matrix is assumed orthonormal with determinant 1, and
        the result is not re-normalized.
        """
        trace: float = self.trace()
        m00: float = self.cr(0, 0)
        m11: float = self.cr(1, 1)
        m22: float = self.cr(2, 2)

        s: float
        w: float
        x: float
        y: float
        z: float
        if trace >= 0.0:
            s = math.sqrt(1.0 + trace)
            w = 0.5 * s
            s = 0.5 / s
            x = (self.cr(1, 2) - self.cr(2, 1)) * s
            y = (self.cr(2, 0) - self.cr(0, 2)) * s
            z = (self.cr(0, 1) - self.cr(1, 0)) * s
        elif m00 > m11 and m00 > m22:
            s = math.sqrt(1.0 + m00 - m11 - m22)
            x = 0.5 * s
            s = 0.5 / s
            w = (self.cr(1, 2) - self.cr(2, 1)) * s
            y = (self.cr(1, 0) + self.cr(0, 1)) * s
            z = (self.cr(2, 0) + self.cr(0, 2)) * s
        elif m11 > m22:
            s = math.sqrt(1.0 + m11 - m00 - m22)
            y = 0.5 * s
            s = 0.5 / s
            w = (self.cr(2, 0) - self.cr(0, 2)) * s
            x = (self.cr(1, 0) + self.cr(0, 1)) * s
            z = (self.cr(2, 1) + self.cr(1, 2)) * s
        else:
            s = math.sqrt(1.0 + m22 - m00 - m11)
            z = 0.5 * s
            s = 0.5 / s
            w = (self.cr(0, 1) - self.cr(1, 0)) * s
            x = (self.cr(2, 0) + self.cr(0, 2)) * s
            y = (self.cr(2, 1) + self.cr(1, 2)) * s

        return Quat(w, x, y, z)
