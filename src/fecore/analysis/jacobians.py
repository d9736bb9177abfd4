"""
Manifold Jacobians
==================
Jacobian kernels shared by all cell types of the same manifold dimension.

Why is this file needed?
------------------------
1. Dispatch: ``JACOBIANS[manifold][target]`` selects the kernel that measures
   a cell of a given manifold dimension in a (possibly higher) target
   dimension: a curve in a surface model, a surface in a volume model, ...
2. Reduced models: Lifting a Jacobian to a higher dimension multiplies it
   by the "other dimension" of the cell set (thickness, cross-section area),
   or, for axisymmetric models, by the circumference 2πr of the body of
   revolution.

Lifting rules (m = manifold dimension, t = target dimension):
    own measure: 1 (point), |J[:, 0]| (curve), area (surface), det J (volume)
    t == m:                  own
    t > m, not axisymmetric: own * other (other**2 for a point in a volume)
    t > m, axisymmetric:     own * 2πr (* other when t - m >= 2)
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Callable

import numpy as np

import fecore.config as config
from fecore.contracts import ensure_matrix
from fecore.exceptions import GCellSetError
from fecore.utils import skew_matrix

if TYPE_CHECKING:
    import numpy.typing as npt
    from fecore.analysis.finite_elements.gcellset import GCellSet


def radius(N: npt.NDArray[np.float64], x: npt.NDArray[np.float64]) -> float:
    """First physical coordinate interpolated at the evaluation point, r = (Nᵀ x)[0]."""
    return float((N.T @ x)[0, 0])


def point_measure(J: npt.NDArray[np.float64]) -> float:
    return 1.0


def curve_measure(J: npt.NDArray[np.float64]) -> float:
    """Length of the single tangent vector."""
    return float(np.linalg.norm(J[:, 0]))


def surface_measure(J: npt.NDArray[np.float64]) -> float:
    """
    Area scale of the two tangent vectors.

    Args:
        J: Jacobian matrix (spatial_dim x 2).

    Raises:
        GCellSetError: If there are not exactly two tangent vectors, or the
            spatial dimension is neither 2 nor 3.

    Returns:
        The 2x2 determinant in plane, the norm of the cross product in space.
    """
    sdim, ntan = J.shape
    if ntan != 2:
        raise GCellSetError(f"Surface Jacobian needs exactly 2 tangent vectors, got {ntan}.")
    if sdim == ntan:
        return float(J[0, 0] * J[1, 1] - J[1, 0] * J[0, 1])
    if sdim == 3:
        return float(np.linalg.norm(skew_matrix(J[:, 0]) @ J[:, 1]))
    raise GCellSetError(f"Surface Jacobian is not defined in {sdim} spatial dimension(s).")


def volume_measure(J: npt.NDArray[np.float64]) -> float:
    """Determinant of the 3x3 Jacobian matrix."""
    if J.shape != (3, 3):
        raise GCellSetError(f"Volume Jacobian needs a 3x3 Jacobian matrix, got shape {J.shape}.")
    return float(np.linalg.det(J))


MEASURES: dict[int, Callable[[npt.NDArray[np.float64]], float]] = {
    0: point_measure,
    1: curve_measure,
    2: surface_measure,
    3: volume_measure,
}


def _own(manifold: int) -> Callable[..., float]:
    measure = MEASURES[manifold]

    def kernel(gcells: GCellSet, conn, N, J, x) -> float:
        return measure(J)

    return kernel


def _lifted(manifold: int, steps: int) -> Callable[..., float]:
    measure = MEASURES[manifold]

    def kernel(gcells: GCellSet, conn, N, J, x) -> float:
        jac = measure(J)
        if gcells.axis_symm:
            jac *= config.AXISYMMETRIC_FACTOR * radius(N, x)
            if steps >= 2:
                jac *= gcells.other_dimension(conn, N, x)
            return jac
        jac *= gcells.other_dimension(conn, N, x)
        if manifold == 0 and steps >= 3:
            # point volume is the lifted curve value times the other dimension
            jac *= gcells.other_dimension(conn, N, x)
        return jac

    return kernel


JACOBIANS: dict[int, dict[int, Callable[..., float]]] = {
    0: {1: _lifted(0, 1), 2: _lifted(0, 2), 3: _lifted(0, 3)},
    1: {1: _own(1), 2: _lifted(1, 1), 3: _lifted(1, 2)},
    2: {2: _own(2), 3: _lifted(2, 1)},
    3: {3: _own(3)},
}


def jacobian_in_dim(
    gcells: GCellSet,
    conn: npt.ArrayLike,
    N: npt.ArrayLike,
    J: npt.ArrayLike,
    x: npt.ArrayLike,
    dim: int
) -> float:
    """
    Evaluate the Jacobian of a cell of `gcells` measured in dimension `dim`.

    Args:
        gcells: The cell set the cell belongs to.
        conn: Connectivity of the single cell.
        N: Values of the basis functions (cell_size x 1).
        J: Jacobian matrix (spatial_dim x manifold_dim).
        x: Spatial coordinates of the cell nodes (cell_size x spatial_dim).
        dim: Target dimension: 1 (curve), 2 (surface) or 3 (volume).

    Raises:
        GCellSetError: If the cell type cannot be measured in `dim`.

    Returns:
        The Jacobian value.
    """
    kernels = JACOBIANS[gcells.dim]
    kernel = kernels.get(dim)
    if kernel is None:
        raise GCellSetError(
            f"{gcells.cell_type} (manifold dimension {gcells.dim}) cannot evaluate a Jacobian "
            f"in dimension {dim}; supported dimensions are {sorted(kernels)}."
        )

    N = ensure_matrix(N, gcells.cell_size, 1, what=f"{gcells.cell_type} basis function values")
    x = ensure_matrix(x, gcells.cell_size, "*", what=f"{gcells.cell_type} nodal coordinates")
    if gcells.dim > 0:
        J = ensure_matrix(J, what=f"{gcells.cell_type} Jacobian matrix")
    return kernel(gcells, conn, N, J, x)
