"""
Input contracts for the numeric kernels.

The checks are skipped entirely when ``fecore.config.CONTRACTS_ENABLED`` is
False; the conversion to a float array always happens.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

import numpy as np

import fecore.config as config
from fecore.exceptions import ContractError

if TYPE_CHECKING:
    import numpy.typing as npt


def _as_float_array(value: Any, what: str) -> npt.NDArray[np.float64]:
    try:
        return np.asarray(value, dtype=np.float64)
    except (TypeError, ValueError) as err:
        raise ContractError(f"{what} is not numeric: {value!r}") from err


def ensure_vector(value: Any, length: int | str = "*", what: str = "vector") -> npt.NDArray[np.float64]:
    """
    Convert a value to a 1D float array, checking its length.

    Args:
        value: Array-like input.
        length: Required length, or ``"*"`` for any length.
        what: Name of the input used in error messages.

    Raises:
        ContractError: If the input is not numeric, not 1D or has the wrong length.

    Returns:
        The input as a 1D float array.
    """
    if not config.CONTRACTS_ENABLED:
        return np.asarray(value, dtype=np.float64)

    vec = _as_float_array(value, what)
    if vec.ndim != 1:
        raise ContractError(f"{what} must be a vector, got an array of shape {vec.shape}.")
    if length != "*" and vec.shape[0] != length:
        raise ContractError(f"{what} must have length {length}, got {vec.shape[0]}.")
    return vec


def ensure_matrix(
    value: Any,
    rows: int | str = "*",
    cols: int | str = "*",
    what: str = "matrix"
) -> npt.NDArray[np.float64]:
    """
    Convert a value to a 2D float array, checking its shape.

    Args:
        value: Array-like input.
        rows: Required number of rows, or ``"*"``.
        cols: Required number of columns, or ``"*"``.
        what: Name of the input used in error messages.

    Raises:
        ContractError: If the input is not numeric, not 2D or has the wrong shape.

    Returns:
        The input as a 2D float array.
    """
    if not config.CONTRACTS_ENABLED:
        return np.asarray(value, dtype=np.float64)

    mat = _as_float_array(value, what)
    if mat.ndim != 2:
        raise ContractError(f"{what} must be a matrix, got an array of shape {mat.shape}.")
    n_rows, n_cols = mat.shape
    if rows != "*" and n_rows != rows:
        raise ContractError(f"{what} must have {rows} rows, got {n_rows}.")
    if cols != "*" and n_cols != cols:
        raise ContractError(f"{what} must have {cols} columns, got {n_cols}.")
    return mat


def ensure_param_coords(param_coords: Any, dim: int, cell_type: str) -> npt.NDArray[np.float64]:
    """Parametric coordinates must hold at least ``dim`` entries."""
    if not config.CONTRACTS_ENABLED:
        return np.atleast_1d(np.asarray(param_coords, dtype=np.float64))

    coords = np.atleast_1d(_as_float_array(param_coords, f"{cell_type} parametric coordinates"))
    if coords.ndim != 1 or coords.shape[0] < dim:
        raise ContractError(
            f"{cell_type} expects {dim} parametric coordinate(s), got {coords.tolist()}."
        )
    return coords
