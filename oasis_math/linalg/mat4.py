################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################
"""4x4 column-major matrix."""

from __future__ import annotations

from typing import Optional

from .mat3 import Mat3
from .matrix import Matrix
from .units import approx_eq


# Cofactor signs for the expansion along row 0
_COFACTOR_SIGNS: tuple[float, ...] = (1.0, -1.0, 1.0, -1.0)


class Mat4(Matrix):
    """4x4 matrix stored as four column vectors."""

    DIM: int = 4

    def _minor(self, c: int) -> Mat3:
        """Return the 3x3 minor that excludes column c and row 0."""
        return Mat3.from_cols(
            *(self._cols[col, 1:] for col in range(self.DIM) if col != c)
        )

    def determinant(self) -> float:
        """Return the determinant by cofactor expansion over four minors."""
        return sum(
            sign * self.cr(c, 0) * self._minor(c).determinant()
            for c, sign in enumerate(_COFACTOR_SIGNS)
        )

    def invert(self) -> Optional["Mat4"]:
        """Return the inverse using Gauss-Jordan elimination.

        The augmented system [A | I] is reduced with column operations, so the
        pivot search runs along row j and the chosen column is swapped into
        place in both A and I. Once A is the identity, I holds the inverse.
        """
        det: float = self.determinant()
        if approx_eq(det, 0.0):
            self._log_singular(det)
            return None

        A: Mat4 = Mat4(self._cols)
        inv: Mat4 = Mat4.ident()

        for j in range(self.DIM):
            # Find the largest entry in row j among the remaining columns
            pivot: int = j
            for i in range(j + 1, self.DIM):
                if abs(A.cr(i, j)) > abs(A.cr(pivot, j)):
                    pivot = i

            # Swap columns to put the pivot on the diagonal
            A.swap_c(pivot, j)
            inv.swap_c(pivot, j)

            # Scale column j to have a unit diagonal
            scale: float = A.cr(j, j)
            inv.set_c(j, inv.c(j) / scale)
            A.set_c(j, A.c(j) / scale)

            # Eliminate row j from the other columns, doing the same to inv
            for i in range(self.DIM):
                if i != j:
                    factor: float = A.cr(i, j)
                    inv.set_c(i, inv.c(i) - inv.c(j) * factor)
                    A.set_c(i, A.c(i) - A.c(j) * factor)

        return inv
