################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Fixed-size square matrices and rotation conversions."""

from __future__ import annotations

from oasis_math.linalg.mat2 import Mat2
from oasis_math.linalg.mat3 import Mat3
from oasis_math.linalg.mat4 import Mat4
from oasis_math.linalg.matrix import Matrix
from oasis_math.linalg.matrix import SingularMatrixError
from oasis_math.linalg.quat import Quat
from oasis_math.linalg.units import MathConstants
from oasis_math.linalg.units import approx_eq
from oasis_math.linalg.vector import Vec


__all__ = [
    "Mat2",
    "Mat3",
    "Mat4",
    "MathConstants",
    "Matrix",
    "Quat",
    "SingularMatrixError",
    "Vec",
    "approx_eq",
]
