"""
fecore: mesh topology, geometric cell sets and sparse assembly for finite
element codes.
"""
from fecore.analysis import GCellSet, Hex8, Line2, Point1, Quad4, Tet4, Tri3, gcellset_class
from fecore.exceptions import AssemblyError, ContractError, FecoreError, GCellSetError, TopologyError
from fecore.geometry import HYPERCUBE, SIMPLEX, NodeSet, Topology, hypercube, simplex
from fecore.solvers import ElementVector, SparseSystemVector

__version__ = "0.1.0"

__all__ = [
    "GCellSet",
    "Hex8",
    "Line2",
    "Point1",
    "Quad4",
    "Tet4",
    "Tri3",
    "gcellset_class",
    "AssemblyError",
    "ContractError",
    "FecoreError",
    "GCellSetError",
    "TopologyError",
    "HYPERCUBE",
    "SIMPLEX",
    "NodeSet",
    "Topology",
    "hypercube",
    "simplex",
    "ElementVector",
    "SparseSystemVector",
]
