from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

import fecore.analysis.gauss as gauss
from fecore.analysis.finite_elements.gcellset import GCellSet
from fecore.analysis.finite_elements.registry import register_gcellset
from fecore.geometry.families import HYPERCUBE

if TYPE_CHECKING:
    import numpy.typing as npt


@register_gcellset
class Point1(GCellSet):
    """
    Represents a set of one-node point cells (P1).
    """
    TYPE = "P1"
    DIM = 0
    CELL_SIZE = 1
    FAMILY = HYPERCUBE

    @staticmethod
    def bfun(param_coords: npt.ArrayLike = None) -> npt.NDArray[np.float64]:
        return np.array([[1.0]])

    @staticmethod
    def bfundpar(param_coords: npt.ArrayLike = None) -> npt.NDArray[np.float64]:
        return np.array([[0.0]])

    @staticmethod
    def integration_rule(n_points: int | None = None) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
        return gauss.gauss_points_weights_point()
