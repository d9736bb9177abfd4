"""
The GEOMETRY layer holds pure connectivity and coordinate data.
It has NO knowledge of shape functions, Jacobians or assembly.
"""
from fecore.geometry.families import HYPERCUBE, SIMPLEX, FAMILIES
from fecore.geometry.node import CoordinateProvider, NodeSet
from fecore.geometry.topology import Topology, cell_key, hypercube, normalized_cell, simplex

__all__ = [
    "HYPERCUBE",
    "SIMPLEX",
    "FAMILIES",
    "CoordinateProvider",
    "NodeSet",
    "Topology",
    "cell_key",
    "hypercube",
    "normalized_cell",
    "simplex",
]
