from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

import fecore.analysis.gauss as gauss
from fecore.analysis.finite_elements.gcellset import GCellSet
from fecore.analysis.finite_elements.registry import register_gcellset
from fecore.contracts import ensure_param_coords
from fecore.geometry.families import HYPERCUBE

if TYPE_CHECKING:
    import numpy.typing as npt

# Each quad (0, 1, 2, 3) is drawn as the triangles (0, 1, 2) and (2, 3, 0)
QUAD_TRIANGLES = np.array([
    [0, 1, 2],
    [2, 3, 0],
])


@register_gcellset
class Quad4(GCellSet):
    """
    Represents a set of four-node bilinear quadrilateral cells (Q4).
    """
    TYPE = "Q4"
    DIM = 2
    CELL_SIZE = 4
    FAMILY = HYPERCUBE

    @staticmethod
    def bfun(param_coords: npt.ArrayLike) -> npt.NDArray[np.float64]:
        """
        Calculate the basis functions of the Q4 cell.

        Args:
            param_coords: Parametric coordinates [xi, eta] in the range [-1, 1].

        Returns:
            (4, 1) basis function values ``[N1, N2, N3, N4]``.
        """
        xi, eta = ensure_param_coords(param_coords, 2, "Q4")[:2]
        return 0.25 * np.array([
            [(1.0 - xi) * (1.0 - eta)],
            [(1.0 + xi) * (1.0 - eta)],
            [(1.0 + xi) * (1.0 + eta)],
            [(1.0 - xi) * (1.0 + eta)],
        ])

    @staticmethod
    def bfundpar(param_coords: npt.ArrayLike) -> npt.NDArray[np.float64]:
        """
        Calculate the derivatives of the basis functions of the Q4 cell.

        Args:
            param_coords: Parametric coordinates [xi, eta] in the range [-1, 1].

        Returns:
            (4, 2) matrix, row i holds [dNi/dxi, dNi/deta].
        """
        xi, eta = ensure_param_coords(param_coords, 2, "Q4")[:2]
        return 0.25 * np.array([
            [-(1.0 - eta), -(1.0 - xi)],
            [(1.0 - eta), -(1.0 + xi)],
            [(1.0 + eta), (1.0 + xi)],
            [-(1.0 + eta), (1.0 - xi)],
        ])

    @staticmethod
    def integration_rule(n_points: int | None = None) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
        return gauss.gauss_points_weights_tensor(n_points or 2, 2)

    def triangles(self) -> npt.NDArray[np.int64]:
        quads = self.topology.cells_in_dim(2)
        return quads[:, QUAD_TRIANGLES].reshape(-1, 3)
