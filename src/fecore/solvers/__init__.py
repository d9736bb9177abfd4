from fecore.solvers.system_vector import ElementVector, SparseSystemVector

__all__ = ["ElementVector", "SparseSystemVector"]
