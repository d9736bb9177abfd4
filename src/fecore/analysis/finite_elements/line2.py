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


@register_gcellset
class Line2(GCellSet):
    """
    Represents a set of two-node linear curve cells (L2).

    The reference cell is the interval [-1, 1]. Line cells are members of
    both families; cell sets built with ``family="P1L2T3T4"`` report the
    simplex family and can not be extruded.
    """
    TYPE = "L2"
    DIM = 1
    CELL_SIZE = 2
    FAMILY = HYPERCUBE

    @staticmethod
    def bfun(param_coords: npt.ArrayLike) -> npt.NDArray[np.float64]:
        """
        Calculate the basis functions of the L2 cell.

        Args:
            param_coords: Parametric coordinate [xi] in the range [-1, 1].

        Returns:
            (2, 1) basis function values ``[N1, N2]``.
        """
        xi = ensure_param_coords(param_coords, 1, "L2")[0]
        return np.array([
            [0.5 * (1.0 - xi)],
            [0.5 * (1.0 + xi)],
        ])

    @staticmethod
    def bfundpar(param_coords: npt.ArrayLike) -> npt.NDArray[np.float64]:
        """Constant (2, 1) derivatives of the basis functions with respect to xi."""
        ensure_param_coords(param_coords, 1, "L2")
        return np.array([
            [-0.5],
            [0.5],
        ])

    @staticmethod
    def integration_rule(n_points: int | None = None) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
        return gauss.gauss_points_weights_edge(n_points or 2)

    def triangles(self) -> npt.NDArray[np.int64]:
        return np.empty((0, 3), dtype=np.int64)
