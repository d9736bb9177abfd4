"""
Configuration & Global Constants
================================
This module serves as the central registry for global constants and switches.

Why is this file needed?
------------------------
1. Contracts: Input-shape validation is a cross-cutting concern. It is on by
   default (development and tests) and can be switched off for production runs
   through the ``FECORE_CONTRACTS`` environment variable without changing any
   functional behaviour.
2. Constants: Numeric constants shared by the Jacobian kernels live here, so
   they are not scattered throughout the code.

Exports:
    CONTRACTS_ENABLED (bool): Whether shape/type contracts are checked.
    AXISYMMETRIC_FACTOR (float): Circumference factor 2π used for bodies of revolution.
    DEFAULT_OTHER_DIMENSION (float): Default thickness/area of reduced-dimension models.
"""
from __future__ import annotations

import logging
import os
from math import pi

logger = logging.getLogger(__name__)

_FALSY_VALUES = {"0", "false", "off", "no"}


def contracts_enabled_from_env(value: str | None) -> bool:
    """
    Interpret the value of the ``FECORE_CONTRACTS`` environment variable.

    Args:
        value: Raw value of the variable, or None if it is not set.

    Returns:
        False if the value is one of ``0``, ``false``, ``off``, ``no`` (case-insensitive), True otherwise.
    """
    if value is None:
        return True
    return value.strip().lower() not in _FALSY_VALUES


# Global Constants
CONTRACTS_ENABLED: bool = contracts_enabled_from_env(os.environ.get("FECORE_CONTRACTS"))
AXISYMMETRIC_FACTOR: float = 2.0 * pi
DEFAULT_OTHER_DIMENSION: float = 1.0


def set_contracts_enabled(enabled: bool) -> None:
    """Switch contract checking on or off at runtime (used by test harnesses)."""
    global CONTRACTS_ENABLED
    CONTRACTS_ENABLED = bool(enabled)
    logger.debug("Contracts %s.", "enabled" if CONTRACTS_ENABLED else "disabled")
