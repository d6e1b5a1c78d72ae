################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""Quaternion components in wxyz order."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from .units import MathConstants


@dataclass(frozen=True)
class Quat:
    """Quaternion with scalar part w and vector part (x, y, z).

    Components are stored as given. Conversion from a rotation matrix does not
    re-normalize, so call :meth:`normalized` when strict unit length matters.
    """

    w: float
    x: float
    y: float
    z: float

    def __post_init__(self) -> None:
        """Coerce components to float."""
        for name in ("w", "x", "y", "z"):
            object.__setattr__(self, name, float(getattr(self, name)))

    @staticmethod
    def identity() -> "Quat":
        """Return the identity quaternion."""
        return Quat(1.0, 0.0, 0.0, 0.0)

    @staticmethod
    def from_axis_angle(axis: NDArray[np.float64], radians: float) -> "Quat":
        """Create a rotation of the given angle about a non-zero axis."""
        vec: NDArray[np.float64] = np.asarray(axis, dtype=float)
        if vec.shape != (3,):
            raise ValueError("axis must be shape (3,)")
        norm: float = float(np.linalg.norm(vec))
        if norm < MathConstants.EPS:
            raise ValueError("axis has near-zero norm")
        half: float = 0.5 * radians
        v: NDArray[np.float64] = vec / norm * np.sin(half)
        return Quat(float(np.cos(half)), float(v[0]), float(v[1]), float(v[2]))

    def as_tuple(self) -> tuple[float, float, float, float]:
        """Return the components as (w, x, y, z)."""
        return (self.w, self.x, self.y, self.z)

    def to_wxyz(self) -> NDArray[np.float64]:
        """Return the components as an array in wxyz order."""
        return np.array(self.as_tuple(), dtype=float)

    def norm(self) -> float:
        """Return the Euclidean norm of the components."""
        return float(np.linalg.norm(self.to_wxyz()))

    def normalized(self) -> "Quat":
        """Return a unit quaternion."""
        norm: float = self.norm()
        if norm < MathConstants.EPS:
            raise ValueError("Quaternion norm is too small")
        return Quat(*(self.to_wxyz() / norm))

    def as_matrix(self) -> NDArray[np.float64]:
        """Return the row-major rotation matrix of the normalized quaternion."""
        q: Quat = self.normalized()
        w: float = q.w
        x: float = q.x
        y: float = q.y
        z: float = q.z
        return np.array(
            [
                [
                    1.0 - 2.0 * (y * y + z * z),
                    2.0 * (x * y - z * w),
                    2.0 * (x * z + y * w),
                ],
                [
                    2.0 * (x * y + z * w),
                    1.0 - 2.0 * (x * x + z * z),
                    2.0 * (y * z - x * w),
                ],
                [
                    2.0 * (x * z - y * w),
                    2.0 * (y * z + x * w),
                    1.0 - 2.0 * (x * x + y * y),
                ],
            ],
            dtype=float,
        )

    def almost_equal(
        self, other: "Quat", atol: float = MathConstants.APPROX_EPSILON
    ) -> bool:
        """Check approximate equality, accounting for sign ambiguity."""
        q1: NDArray[np.float64] = self.to_wxyz()
        q2: NDArray[np.float64] = other.to_wxyz()
        if np.allclose(q1, q2, rtol=0.0, atol=atol):
            return True
        return bool(np.allclose(q1, -q2, rtol=0.0, atol=atol))
