from __future__ import annotations

import logging
import numbers
import uuid
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, ClassVar, Iterable, Sequence

import numpy as np

from fecore.analysis import jacobians
from fecore.analysis.finite_elements import registry
from fecore.config import DEFAULT_OTHER_DIMENSION
from fecore.contracts import ensure_matrix
from fecore.exceptions import GCellSetError
from fecore.geometry import families
from fecore.geometry.node import CoordinateProvider
from fecore.geometry.topology import Topology
from fecore.utils import inflate_bounds, is_xyz_inside_box

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


class GCellSet(ABC):
    """
    Abstract base class for geometric cell sets.

    A cell set owns a :class:`Topology` and adds the reference-element
    numerics of one cell type: basis functions, their parametric derivatives
    and the Jacobians mapping the reference cell to physical space.

    Concrete types declare ``TYPE``, ``DIM``, ``CELL_SIZE`` and ``FAMILY`` and
    implement :meth:`bfun`, :meth:`bfundpar` and :meth:`integration_rule`.
    """

    TYPE: ClassVar[str | None] = None
    DIM: ClassVar[int | None] = None
    CELL_SIZE: ClassVar[int | None] = None
    FAMILY: ClassVar[str | None] = None

    def __init__(
        self,
        conn: npt.ArrayLike | None = None,
        *,
        topology: Topology | None = None,
        other_dimension: float | Callable[..., float] = DEFAULT_OTHER_DIMENSION,
        axis_symm: bool = False,
        family: str | None = None
    ) -> None:
        """
        Initialize the cell set from a connectivity list or a prebuilt topology.

        Args:
            conn: Connectivity list, one row of 0-based node indices per cell.
            topology: Prebuilt topology (mutually exclusive with `conn`).
            other_dimension: Thickness/area of reduced-dimension models. Either a number or a
                callable ``(conn, N, x) -> float`` evaluated per cell and point.
            axis_symm: Whether the model is axisymmetric.
            family: Family used to build the topology from `conn`. Defaults to ``FAMILY``.

        Raises:
            GCellSetError: If the options are invalid or the topology does not match the cell type.
        """
        name = self.__class__.__name__
        if (conn is None) == (topology is None):
            raise GCellSetError(f"{name}: pass exactly one of `conn` or `topology`.")

        if topology is None:
            family = family or self.FAMILY
            if self.TYPE not in families.FAMILIES.get(family, ()):
                raise GCellSetError(f"{name}: type '{self.TYPE}' is not a member of family '{family}'.")
            topology = Topology.from_conn(conn, self.DIM, family)
        elif not isinstance(topology, Topology):
            raise GCellSetError(f"{name}: `topology` must be a Topology, got {type(topology).__name__}.")

        if not (isinstance(other_dimension, numbers.Real) or callable(other_dimension)):
            raise GCellSetError(f"{name}: `other_dimension` must be a number or a callable, got {other_dimension!r}.")

        cell_size = topology.cell_size_in_dim(topology.dim)
        if cell_size != self.CELL_SIZE:
            raise GCellSetError(f"{name}: cell size of the topology is {cell_size}, expected {self.CELL_SIZE}.")
        if topology.dim != self.DIM:
            raise GCellSetError(f"{name}: dimension of the topology is {topology.dim}, expected {self.DIM}.")

        self.id = str(uuid.uuid4())
        self.topology = topology
        self.axis_symm = bool(axis_symm)
        self._other_dimension = other_dimension if callable(other_dimension) else float(other_dimension)

    def __repr__(self) -> str:
        """String representation of the cell set."""
        return f"{self.__class__.__name__}(type='{self.TYPE}', count={self.count()}, axis_symm={self.axis_symm})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GCellSet):
            return NotImplemented
        return self.equals(other)

    # Identity

    @property
    def dim(self) -> int:
        """Manifold dimension of the cells."""
        return self.DIM

    @property
    def cell_size(self) -> int:
        """Number of nodes per cell."""
        return self.CELL_SIZE

    @property
    def cell_type(self) -> str:
        """Unique type name, e.g. 'Q4'."""
        return self.TYPE

    @property
    def family(self) -> str:
        """Family of the owned topology."""
        return self.topology.family

    def equals(self, other: GCellSet) -> bool:
        """True if both cell sets have the same type, options and (normalized) topology."""
        if not isinstance(other, GCellSet):
            return False
        if self.cell_type != other.cell_type or self.cell_size != other.cell_size:
            return False
        if self.axis_symm != other.axis_symm or self._other_dimension != other._other_dimension:
            return False
        return self.topology.equals(other.topology)

    def other_dimension(self, conn: Any = None, N: Any = None, x: Any = None) -> float:
        """
        Evaluate the other dimension (area, thickness) of a cell.

        Args:
            conn: Connectivity of a single cell.
            N: Values of the basis functions.
            x: Spatial coordinates of the cell nodes.

        Returns:
            The other dimension.
        """
        if callable(self._other_dimension):
            return float(self._other_dimension(conn, N, x))
        return self._other_dimension

    # Connectivity

    def conn(self) -> npt.NDArray[np.int64]:
        """Connectivity list, one row per cell."""
        return self.topology.max_cells()

    def count(self) -> int:
        """Number of cells."""
        return self.topology.number_of_cells_in_dim(self.topology.dim)

    def nfens(self) -> int:
        """Number of nodes the cells connect."""
        return self.topology.number_of_cells_in_dim(0)

    def vertices(self) -> npt.NDArray[np.int64]:
        """Node indices used by the cells. Mainly used for visualization."""
        return self.topology.point_indices()

    def edges(self) -> npt.NDArray[np.int64]:
        """Line cells of the topology. Mainly used for visualization."""
        if self.topology.dim < 1:
            return np.empty((0, 2), dtype=np.int64)
        return self.topology.cells_in_dim(1)

    def triangles(self) -> npt.NDArray[np.int64]:
        """Triangles covering the surface cells. Mainly used for visualization."""
        if self.topology.dim < 2:
            return np.empty((0, 3), dtype=np.int64)
        return self.topology.cells_in_dim(2)

    # Basis functions

    @staticmethod
    @abstractmethod
    def bfun(param_coords: npt.ArrayLike) -> npt.NDArray[np.float64]:
        """Basis function values at parametric coordinates (cell_size x 1)."""
        pass

    @staticmethod
    @abstractmethod
    def bfundpar(param_coords: npt.ArrayLike) -> npt.NDArray[np.float64]:
        """Parametric derivatives of the basis functions (cell_size x dim)."""
        pass

    @staticmethod
    @abstractmethod
    def integration_rule(n_points: int | None = None) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
        """Gauss points and weights on the reference cell (element default rule when `n_points` is None)."""
        pass

    def jacobian_matrix(self, nder: npt.ArrayLike, x: npt.ArrayLike) -> npt.NDArray[np.float64]:
        """
        Evaluate the Jacobian matrix J = xᵀ · nder.

        Args:
            nder: Basis function derivatives in the parametric domain (cell_size x dim).
            x: Nodal coordinates in the spatial domain (cell_size x spatial_dim).

        Returns:
            Jacobian matrix (spatial_dim x dim).
        """
        nder = ensure_matrix(nder, self.cell_size, "*", what=f"{self.cell_type} basis function derivatives")
        x = ensure_matrix(x, self.cell_size, "*", what=f"{self.cell_type} nodal coordinates")
        return x.T @ nder

    def bfundsp(self, nder: npt.ArrayLike, x: npt.ArrayLike) -> npt.NDArray[np.float64]:
        """
        Derivatives of the basis functions in the spatial domain, nder · J⁻¹.

        Raises:
            GCellSetError: If the Jacobian matrix is not square.
        """
        J = self.jacobian_matrix(nder, x)
        if J.shape[0] != J.shape[1]:
            raise GCellSetError(
                f"{self.cell_type}: spatial derivatives need a square Jacobian matrix, got shape {J.shape}."
            )
        return np.asarray(nder, dtype=np.float64) @ np.linalg.inv(J)

    # Jacobians

    def jacobian(self, conn: Any, N: npt.ArrayLike, J: npt.ArrayLike, x: npt.ArrayLike) -> float:
        """Jacobian in the cell's own manifold dimension (1 for points)."""
        if self.dim == 0:
            return jacobians.point_measure(J)
        return jacobians.MEASURES[self.dim](ensure_matrix(J, what=f"{self.cell_type} Jacobian matrix"))

    def jacobian_curve(self, conn: Any, N: npt.ArrayLike, J: npt.ArrayLike, x: npt.ArrayLike) -> float:
        """Jacobian measured as a length (target dimension 1)."""
        return self.jacobian_in_dim(conn, N, J, x, 1)

    def jacobian_surface(self, conn: Any, N: npt.ArrayLike, J: npt.ArrayLike, x: npt.ArrayLike) -> float:
        """Jacobian measured as an area (target dimension 2)."""
        return self.jacobian_in_dim(conn, N, J, x, 2)

    def jacobian_volume(self, conn: Any, N: npt.ArrayLike, J: npt.ArrayLike, x: npt.ArrayLike) -> float:
        """Jacobian measured as a volume (target dimension 3)."""
        return self.jacobian_in_dim(conn, N, J, x, 3)

    def jacobian_in_dim(
        self,
        conn: Any,
        N: npt.ArrayLike,
        J: npt.ArrayLike,
        x: npt.ArrayLike,
        dim: int
    ) -> float:
        """
        Evaluate the Jacobian measured in dimension `dim`.

        Args:
            conn: Connectivity of a single cell.
            N: Values of the basis functions (cell_size x 1).
            J: Jacobian matrix.
            x: Spatial coordinates (cell_size x spatial_dim).
            dim: 1 (curve), 2 (surface) or 3 (volume).

        Raises:
            GCellSetError: If the cell type does not support `dim`.

        Returns:
            The Jacobian value.
        """
        return jacobians.jacobian_in_dim(self, conn, N, J, x, dim)

    def measure(self, nodes: CoordinateProvider, dim: int | None = None, n_points: int | None = None) -> float:
        """
        Integrate the Jacobian over all cells: total length, area or volume.

        Args:
            nodes: Coordinates of the nodes.
            dim: Target dimension; defaults to the manifold dimension (1 for points).
            n_points: Gauss rule size passed to :meth:`integration_rule`.

        Returns:
            The total measure of the cell set in dimension `dim`.
        """
        target = dim if dim is not None else max(self.dim, 1)
        points, weights = self.integration_rule(n_points)

        total = 0.0
        for cell in self.conn():
            x = np.array([nodes.coordinates_at(int(i)) for i in cell], dtype=np.float64)
            for gp_i, w_i in zip(points, weights):
                n_i = self.bfun(gp_i)
                j_i = self.jacobian_matrix(self.bfundpar(gp_i), x)
                total += self.jacobian_in_dim(cell, n_i, j_i, x, target) * w_i
        return total

    # Structural operations

    def _chain_index(self) -> tuple[tuple[str, ...], int]:
        chain = families.FAMILIES[self.family]
        if self.cell_type not in chain:
            raise GCellSetError(f"{self.cell_type}: unknown type in family '{self.family}'.")
        return chain, chain.index(self.cell_type)

    def boundary_gcellset_class(self) -> type[GCellSet]:
        """Class of the boundary cells, e.g. L2 for Q4 and P1 for L2."""
        chain, idx = self._chain_index()
        if idx == 0:
            raise GCellSetError(f"{self.cell_type}: no boundary cell type in family '{self.family}'.")
        return registry.gcellset_class(chain[idx - 1])

    def boundary_cell_type(self) -> str:
        """Type name of the boundary cells."""
        return self.boundary_gcellset_class().TYPE

    def boundary_conn(self) -> npt.NDArray[np.int64]:
        """Connectivity of the exterior boundary cells."""
        return self.topology.boundary_conn()

    def boundary(self) -> GCellSet:
        """Cell set of the exterior boundary."""
        cls = self.boundary_gcellset_class()
        return cls(
            self.boundary_conn(),
            family=self.family,
            axis_symm=self.axis_symm,
            other_dimension=self._other_dimension
        )

    def extruded_gcellset_class(self) -> type[GCellSet]:
        """Class of the extruded cells, e.g. Q4 for L2 and H8 for Q4."""
        chain, idx = self._chain_index()
        if idx + 1 >= len(chain):
            raise GCellSetError(f"{self.cell_type}: no extruded cell type in family '{self.family}'.")
        return registry.gcellset_class(chain[idx + 1])

    def extrude(self, flags: Iterable[Any]) -> GCellSet:
        """
        Extrude the cell set one dimension up.

        Args:
            flags: One flag per layer; falsy layers are skipped.

        Returns:
            The extruded cell set.
        """
        cls = self.extruded_gcellset_class()
        return cls(
            topology=self.topology.extrude(flags),
            axis_symm=self.axis_symm,
            other_dimension=self._other_dimension
        )

    def subset(self, indices: Sequence[int]) -> GCellSet:
        """
        New cell set of the same type made of the selected cells.

        Args:
            indices: 0-based indices of the selected cells.

        Returns:
            The subset.
        """
        conn = self.conn()[np.asarray(indices, dtype=np.int64)]
        return self.__class__(
            conn,
            family=self.family,
            axis_symm=self.axis_symm,
            other_dimension=self._other_dimension
        )

    def clone(self) -> GCellSet:
        """Deep copy of the cell set (new id, copied topology)."""
        return self.__class__(
            topology=self.topology.clone(),
            axis_symm=self.axis_symm,
            other_dimension=self._other_dimension
        )

    def box_select(
        self,
        nodes: CoordinateProvider,
        bounds: Sequence[float],
        inflate: float | Sequence[float] | None = None,
        any_node: bool = False
    ) -> list[int]:
        """
        Indices of the cells whose nodes lie inside an axis-aligned box.

        Args:
            nodes: Coordinates of the nodes.
            bounds: [xmin, xmax, ymin, ymax, zmin, zmax] (two entries per axis).
            inflate: Amount to grow (or, when negative, shrink) the box per axis.
            any_node: Select a cell when any of its nodes is inside instead of all of them.

        Raises:
            GCellSetError: If the node provider or the bounds are invalid.

        Returns:
            The indices of the selected cells.
        """
        if not isinstance(nodes, CoordinateProvider):
            raise GCellSetError(f"box_select: `nodes` must provide coordinates_at(), got {type(nodes).__name__}.")
        box = np.asarray(bounds, dtype=np.float64)
        if box.ndim != 1 or box.shape[0] == 0 or box.shape[0] % 2:
            raise GCellSetError(f"box_select: bounds must hold two values per axis, got {list(bounds)}.")
        if inflate is not None:
            box = inflate_bounds(box, inflate)

        test = any if any_node else all
        selected = [
            idx for idx, cell in enumerate(self.conn().tolist())
            if test(is_xyz_inside_box(nodes.coordinates_at(node), box) for node in cell)
        ]
        logger.debug("box_select picked %d of %d %s cells.", len(selected), self.count(), self.cell_type)
        return selected
