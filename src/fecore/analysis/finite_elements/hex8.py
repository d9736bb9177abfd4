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

# Corner signs of the reference brick, node i sits at (XI[i], ETA[i], ZETA[i])
XI = np.array([-1.0, 1.0, 1.0, -1.0, -1.0, 1.0, 1.0, -1.0])
ETA = np.array([-1.0, -1.0, 1.0, 1.0, -1.0, -1.0, 1.0, 1.0])
ZETA = np.array([-1.0, -1.0, -1.0, -1.0, 1.0, 1.0, 1.0, 1.0])

# Two triangles per face of the brick
BRICK_TRIANGLES = np.array([
    [0, 3, 1], [1, 3, 2],
    [0, 1, 4], [1, 5, 4],
    [1, 2, 5], [6, 5, 2],
    [2, 3, 7], [7, 6, 2],
    [0, 4, 7], [7, 3, 0],
    [4, 5, 6], [6, 7, 4],
])


@register_gcellset
class Hex8(GCellSet):
    """
    Represents a set of eight-node trilinear brick cells (H8).

    Nodes 0-3 form the bottom face (zeta = -1), nodes 4-7 the top face, each
    listed counter-clockwise when seen from the top.
    """
    TYPE = "H8"
    DIM = 3
    CELL_SIZE = 8
    FAMILY = HYPERCUBE

    @staticmethod
    def bfun(param_coords: npt.ArrayLike) -> npt.NDArray[np.float64]:
        """
        Calculate the basis functions of the H8 cell.

        Args:
            param_coords: Parametric coordinates [xi, eta, zeta] in the range [-1, 1].

        Returns:
            (8, 1) basis function values.
        """
        xi, eta, zeta = ensure_param_coords(param_coords, 3, "H8")[:3]
        values = 0.125 * (1.0 + XI * xi) * (1.0 + ETA * eta) * (1.0 + ZETA * zeta)
        return values.reshape(-1, 1)

    @staticmethod
    def bfundpar(param_coords: npt.ArrayLike) -> npt.NDArray[np.float64]:
        """
        Calculate the derivatives of the basis functions of the H8 cell.

        Args:
            param_coords: Parametric coordinates [xi, eta, zeta] in the range [-1, 1].

        Returns:
            (8, 3) matrix, row i holds [dNi/dxi, dNi/deta, dNi/dzeta].
        """
        xi, eta, zeta = ensure_param_coords(param_coords, 3, "H8")[:3]
        one_xi = 1.0 + XI * xi
        one_eta = 1.0 + ETA * eta
        one_zeta = 1.0 + ZETA * zeta
        return 0.125 * np.column_stack([
            XI * one_eta * one_zeta,
            ETA * one_xi * one_zeta,
            ZETA * one_xi * one_eta,
        ])

    @staticmethod
    def integration_rule(n_points: int | None = None) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
        return gauss.gauss_points_weights_tensor(n_points or 2, 3)

    def triangles(self) -> npt.NDArray[np.int64]:
        bricks = self.topology.cells_in_dim(3)
        return bricks[:, BRICK_TRIANGLES].reshape(-1, 3)
