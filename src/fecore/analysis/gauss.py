from __future__ import annotations

import itertools as it
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt


def gauss_points_weights_point() -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
    """Trivial one-point rule of a point cell (no parametric coordinates)."""
    return np.zeros((1, 0)), np.array([1.0])


def gauss_points_weights_edge(n_points: int) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
    """
    Generate Gauss points and weights for a 1D Gaussian integration on [-1, 1].

    Args:
        n_points: Number of integration points.

    Raises:
        ValueError: If `n_points` is not 1, 2, or 3.

    Returns:
        A tuple containing the Gauss points, shape (n, 1), and weights.
    """
    if n_points == 1:
        points, weights = np.array([0.0]), np.array([2.0])
    elif n_points == 2:
        points, weights = np.array([-1/np.sqrt(3), 1/np.sqrt(3)]), np.array([1.0, 1.0])
    elif n_points == 3:
        points, weights = np.array([-np.sqrt(3/5), 0.0, np.sqrt(3/5)]), np.array([5/9, 8/9, 5/9])
    else:
        raise ValueError(f"Unsupported number of Gauss points: {n_points}. "
                         f"'n_points' must be 1, 2, or 3.")
    return points.reshape(-1, 1), weights


def gauss_points_weights_tensor(n_points: int, dim: int) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
    """
    Tensor-product Gauss rule on the reference square (dim=2) or cube (dim=3).

    Args:
        n_points: Number of integration points per direction.
        dim: Number of parametric directions.

    Returns:
        A tuple containing the Gauss points, shape (n_points**dim, dim), and weights.
    """
    points_1d, weights_1d = gauss_points_weights_edge(n_points)
    points_1d = points_1d.ravel()
    points = np.array(list(it.product(points_1d, repeat=dim)))
    weights = np.array([np.prod(w) for w in it.product(weights_1d, repeat=dim)])
    return points, weights


def gauss_points_weights_triangle(n_points: int) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
    """
    Generate Gauss points and weights for the reference triangle (0,0)-(1,0)-(0,1).

    The weights sum to the reference area 1/2.

    Args:
        n_points: Number of integration points.

    Raises:
        ValueError: If `n_points` is not 1 or 3.

    Returns:
        A tuple containing the Gauss points [xi, eta] and weights.
    """
    if n_points == 1:
        return np.array([[1.0/3.0, 1.0/3.0]]), np.array([0.5])
    elif n_points == 3:
        return np.array([
            [1.0/6.0, 1.0/6.0],
            [2.0/3.0, 1.0/6.0],
            [1.0/6.0, 2.0/3.0]]
        ), np.array([1.0/6.0, 1.0/6.0, 1.0/6.0])
    else:
        raise ValueError(f"Unsupported number of Gauss points: {n_points}. "
                         f"'n_points' must be 1 or 3.")


def gauss_points_weights_tetrahedron(n_points: int) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
    """
    Generate Gauss points and weights for the reference tetrahedron.

    The weights sum to the reference volume 1/6.

    Args:
        n_points: Number of integration points.

    Raises:
        ValueError: If `n_points` is not 1 or 4.

    Returns:
        A tuple containing the Gauss points [xi, eta, zeta] and weights.
    """
    if n_points == 1:
        return np.array([[0.25, 0.25, 0.25]]), np.array([1.0/6.0])
    elif n_points == 4:
        a = 0.5854101966249685
        b = 0.1381966011250105
        return np.array([
            [b, b, b],
            [a, b, b],
            [b, a, b],
            [b, b, a]]
        ), np.full(4, 1.0/24.0)
    else:
        raise ValueError(f"Unsupported number of Gauss points: {n_points}. "
                         f"'n_points' must be 1 or 4.")
