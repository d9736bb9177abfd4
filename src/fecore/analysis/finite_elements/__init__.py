"""
Geometric cell sets: a topology plus the reference-element numerics of one
cell type. Importing this package registers all concrete cell types.
"""
from fecore.analysis.finite_elements.gcellset import GCellSet
from fecore.analysis.finite_elements.registry import gcellset_class, list_types, register_gcellset
from fecore.analysis.finite_elements.point1 import Point1
from fecore.analysis.finite_elements.line2 import Line2
from fecore.analysis.finite_elements.tri3 import Tri3
from fecore.analysis.finite_elements.quad4 import Quad4
from fecore.analysis.finite_elements.tet4 import Tet4
from fecore.analysis.finite_elements.hex8 import Hex8

__all__ = [
    "GCellSet",
    "Point1",
    "Line2",
    "Tri3",
    "Quad4",
    "Tet4",
    "Hex8",
    "gcellset_class",
    "list_types",
    "register_gcellset",
]
