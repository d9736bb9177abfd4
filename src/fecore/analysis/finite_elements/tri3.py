from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

import fecore.analysis.gauss as gauss
from fecore.analysis.finite_elements.gcellset import GCellSet
from fecore.analysis.finite_elements.registry import register_gcellset
from fecore.contracts import ensure_param_coords
from fecore.geometry.families import SIMPLEX

if TYPE_CHECKING:
    import numpy.typing as npt


# B_N = [
#   [dN1/dxi, dN1/deta],
#   [dN2/dxi, dN2/deta],
#   [dN3/dxi, dN3/deta]
# ]
B_N = np.array([
    [-1.0, -1.0],
    [1.0, 0.0],
    [0.0, 1.0],
])


@register_gcellset
class Tri3(GCellSet):
    """
    Represents a set of three-node linear triangular cells (T3).

    The reference cell is the triangle (0,0)-(1,0)-(0,1).
    """
    TYPE = "T3"
    DIM = 2
    CELL_SIZE = 3
    FAMILY = SIMPLEX

    @staticmethod
    def bfun(param_coords: npt.ArrayLike) -> npt.NDArray[np.float64]:
        """
        Calculate the basis functions of the T3 cell.

        Args:
            param_coords: Parametric coordinates [xi, eta] in the range [0, 1].

        Returns:
            (3, 1) basis function values ``[1 - xi - eta, xi, eta]``.
        """
        xi, eta = ensure_param_coords(param_coords, 2, "T3")[:2]
        return np.array([
            [1.0 - xi - eta],
            [xi],
            [eta],
        ])

    @staticmethod
    def bfundpar(param_coords: npt.ArrayLike) -> npt.NDArray[np.float64]:
        ensure_param_coords(param_coords, 2, "T3")
        return B_N.copy()

    @staticmethod
    def integration_rule(n_points: int | None = None) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
        return gauss.gauss_points_weights_triangle(n_points or 3)
