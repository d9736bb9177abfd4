"""
The ANALYSIS layer adds numerics on top of the geometry: basis functions,
Gauss rules and Jacobians of geometric cell sets.
"""
from fecore.analysis.finite_elements import (
    GCellSet,
    Hex8,
    Line2,
    Point1,
    Quad4,
    Tet4,
    Tri3,
    gcellset_class,
)
from fecore.analysis.jacobians import JACOBIANS, jacobian_in_dim

__all__ = [
    "GCellSet",
    "Hex8",
    "Line2",
    "Point1",
    "Quad4",
    "Tet4",
    "Tri3",
    "gcellset_class",
    "JACOBIANS",
    "jacobian_in_dim",
]
