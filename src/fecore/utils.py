from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt


def rotate_left(values: Sequence[int], offset: int) -> tuple[int, ...]:
    """
    Return a new tuple rotated towards the left by the given offset.

    **Example**:

        rotate_left([3, 1, 2], 1)
        # Output: (1, 2, 3)
    """
    n = len(values)
    if n == 0:
        return ()
    start = offset % n
    return tuple(values[start:]) + tuple(values[:start])


def min_index(values: Sequence[int]) -> int:
    """Index of the smallest value (first one on ties)."""
    return min(range(len(values)), key=values.__getitem__)


def skew_matrix(vec: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    """
    Build the 3x3 skew-symmetric matrix of a 3-vector, so that skew_matrix(a) @ b == a × b.

    Args:
        vec: Vector of length 3.

    Raises:
        ValueError: If `vec` is not of length 3.

    Returns:
        The skew-symmetric cross-product matrix.
    """
    a = np.asarray(vec, dtype=np.float64).ravel()
    if a.shape[0] != 3:
        raise ValueError(f"skew_matrix expects a vector of length 3, got {a.shape[0]}.")
    return np.array([
        [0.0, -a[2], a[1]],
        [a[2], 0.0, -a[0]],
        [-a[1], a[0], 0.0],
    ])


def inflate_bounds(bounds: Sequence[float], inflate: float | Sequence[float]) -> npt.NDArray[np.float64]:
    """
    Grow a box [min0, max0, min1, max1, ...] by `inflate` on both sides of every axis.

    Args:
        bounds: Box bounds, two entries per axis.
        inflate: A scalar used for all axes or one value per axis.

    Raises:
        ValueError: If the number of per-axis values does not match the box.

    Returns:
        The inflated bounds.
    """
    out = np.array(bounds, dtype=np.float64)
    n_axes = out.shape[0] // 2
    amount = np.asarray(inflate, dtype=np.float64)
    if amount.ndim == 0:
        amount = np.full(n_axes, float(amount))
    if amount.shape != (n_axes,):
        raise ValueError(f"inflate must be a scalar or have {n_axes} entries, got {amount.shape[0]}.")
    out[0::2] -= amount
    out[1::2] += amount
    return out


def is_xyz_inside_box(xyz: Sequence[float], bounds: Sequence[float]) -> bool:
    """True if the point lies inside (or on) the box for every axis the box defines."""
    n_axes = len(bounds) // 2
    for axis in range(n_axes):
        value = xyz[axis] if axis < len(xyz) else 0.0
        if value < bounds[2 * axis] or value > bounds[2 * axis + 1]:
            return False
    return True
