from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Sequence, runtime_checkable

import numpy as np

from fecore.contracts import ensure_matrix

if TYPE_CHECKING:
    import numpy.typing as npt


@runtime_checkable
class CoordinateProvider(Protocol):
    """Anything that can report the spatial coordinates of a node."""

    def coordinates_at(self, index: int) -> npt.NDArray[np.float64]: ...


class NodeSet:
    """
    Represents the nodes of a mesh as an (n, spatial_dim) coordinate array.
    """
    def __init__(
        self,
        xyz: list[list[float]] | npt.NDArray[np.float64],
    ) -> None:
        """
        Initialize the node set with coordinates.

        Args:
            xyz: Coordinates of the nodes in the global system, one row per node [X, Y(, Z)].
        """
        self.xyz = ensure_matrix(xyz, what="NodeSet coordinates").copy()

    def __repr__(self) -> str:
        """String representation of the node set."""
        return f"{self.__class__.__name__}(n={self.number_of_nodes}, dim={self.spatial_dim})"

    def __len__(self) -> int:
        return self.number_of_nodes

    @property
    def number_of_nodes(self) -> int:
        """Number of nodes in the set."""
        return int(self.xyz.shape[0])

    @property
    def spatial_dim(self) -> int:
        """Number of spatial coordinates per node."""
        return int(self.xyz.shape[1])

    @property
    def x(self) -> npt.NDArray[np.float64]:
        """X-coordinates of the nodes."""
        return self.xyz[:, 0]

    @property
    def y(self) -> npt.NDArray[np.float64]:
        """Y-coordinates of the nodes."""
        return self.xyz[:, 1]

    def coordinates_at(self, index: int) -> npt.NDArray[np.float64]:
        """Coordinates of a single node."""
        return self.xyz[index]

    def coordinates(self, indices: Sequence[int] | npt.NDArray[np.int64]) -> npt.NDArray[np.float64]:
        """Coordinates of the given nodes, one row per node (the `x` matrix of a cell)."""
        return self.xyz[np.asarray(indices, dtype=np.int64)]
