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


B_N = np.array([
    [-1.0, -1.0, -1.0],
    [1.0, 0.0, 0.0],
    [0.0, 1.0, 0.0],
    [0.0, 0.0, 1.0],
])


@register_gcellset
class Tet4(GCellSet):
    """
    Represents a set of four-node linear tetrahedral cells (T4).
    """
    TYPE = "T4"
    DIM = 3
    CELL_SIZE = 4
    FAMILY = SIMPLEX

    @staticmethod
    def bfun(param_coords: npt.ArrayLike) -> npt.NDArray[np.float64]:
        """
        Calculate the basis functions of the T4 cell.

        Args:
            param_coords: Parametric coordinates [xi, eta, zeta] in the range [0, 1].

        Returns:
            (4, 1) basis function values ``[1 - xi - eta - zeta, xi, eta, zeta]``.
        """
        xi, eta, zeta = ensure_param_coords(param_coords, 3, "T4")[:3]
        return np.array([
            [1.0 - xi - eta - zeta],
            [xi],
            [eta],
            [zeta],
        ])

    @staticmethod
    def bfundpar(param_coords: npt.ArrayLike) -> npt.NDArray[np.float64]:
        ensure_param_coords(param_coords, 3, "T4")
        return B_N.copy()

    @staticmethod
    def integration_rule(n_points: int | None = None) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
        return gauss.gauss_points_weights_tetrahedron(n_points or 4)
