"""
Exceptions
==========
Error types raised by the finite-element core.

Every error is raised eagerly at the point where the bad input is detected
and is never retried or recovered internally. All of them subclass
``ValueError`` so callers that already catch ``ValueError`` keep working.
"""


class FecoreError(Exception):
    """Base class for all errors raised by fecore."""


class TopologyError(FecoreError, ValueError):
    """Raised when a topology is built or extruded from inconsistent data."""


class GCellSetError(FecoreError, ValueError):
    """Raised when a geometry cell set is used outside its contract."""


class ContractError(FecoreError, ValueError):
    """Raised when numeric input has the wrong shape or is not numeric."""


class AssemblyError(FecoreError, ValueError):
    """Raised when element vectors cannot be assembled into a global vector."""
