"""
Mesh Topology
=============
Canonical connectivity of a discretized domain.

A topology stores, for every dimension ``0..dim``, an array of cells. The
``dim``-dimensional cells (maximal cells) are the input connectivity; every
lower dimension is derived from them by walking the facet patterns of the
cell family and collapsing sub-entities shared by neighbouring cells.

Two cells describe the same sub-entity when they visit the same nodes in the
same cyclic order, in either direction. Neighbouring cells traverse a shared
facet in opposite directions, so the deduplication key is both rotation and
orientation free (see :func:`cell_key`).
"""
from __future__ import annotations

import logging
from collections import Counter
from typing import TYPE_CHECKING, Any, Iterable, Sequence

import numpy as np

from fecore.exceptions import TopologyError
from fecore.geometry import families
from fecore.utils import min_index, rotate_left

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


def normalized_cell(cell: Sequence[int]) -> tuple[int, ...]:
    """
    Rotate a cell so that its smallest node index comes first.

    **Example**:

        normalized_cell([3, 1, 2])
        # Output: (1, 2, 3)
    """
    values = tuple(int(i) for i in cell)
    if not values:
        return values
    return rotate_left(values, min_index(values))


def cell_key(cell: Sequence[int]) -> tuple[int, ...]:
    """Deduplication key of a cell: the smaller normalized form of the cell and its reversal."""
    forward = normalized_cell(cell)
    backward = normalized_cell(forward[::-1])
    return min(forward, backward)


def _as_connectivity(conn: Any, size: int, what: str) -> npt.NDArray[np.int64]:
    """Convert a connectivity list to an (n, size) int64 array (always a copy)."""
    try:
        arr = np.asarray(conn)
    except (TypeError, ValueError) as err:
        raise TopologyError(f"{what}: connectivity is not a rectangular array.") from err

    if arr.size == 0:
        return np.empty((0, size), dtype=np.int64)
    if arr.ndim == 1 and size == 1:
        arr = arr.reshape(-1, 1)
    if arr.ndim != 2 or arr.shape[1] != size:
        raise TopologyError(f"{what}: expected cells of {size} node(s), got an array of shape {arr.shape}.")

    if not np.issubdtype(arr.dtype, np.integer):
        if not (np.issubdtype(arr.dtype, np.floating) and np.all(np.mod(arr, 1) == 0)):
            raise TopologyError(f"{what}: node indices must be integers, got dtype {arr.dtype}.")
    if np.any(arr < 0):
        raise TopologyError(f"{what}: node indices must be non-negative (0-based).")

    return arr.astype(np.int64)


def _count_facets(max_cells: npt.NDArray[np.int64], dim: int, family: str) -> Counter:
    """Count how many maximal cells reference each (dim - 1) facet."""
    counts: Counter = Counter()
    if dim == 0:
        return counts
    patterns = families.facets(family, dim)
    for cell in max_cells.tolist():
        for pattern in patterns:
            counts[cell_key([cell[i] for i in pattern])] += 1
    return counts


def _derive_sub_entities(
    max_cells: npt.NDArray[np.int64],
    dim: int,
    family: str
) -> list[npt.NDArray[np.int64]]:
    """
    Enumerate the sub-entities of every maximal cell in all lower dimensions.

    Each sub-entity is stored once, in the normalized orientation of its first
    occurrence.

    Returns:
        One connectivity array per dimension, ``0..dim``.
    """
    found: list[dict[tuple[int, ...], tuple[int, ...]]] = [{} for _ in range(dim)]

    for cell in max_cells.tolist():
        current = [tuple(cell)]
        for k in range(dim, 0, -1):
            lower: dict[tuple[int, ...], tuple[int, ...]] = {}
            for parent in current:
                for pattern in families.facets(family, k):
                    sub = tuple(parent[i] for i in pattern)
                    lower.setdefault(cell_key(sub), sub)
            for key, sub in lower.items():
                found[k - 1].setdefault(key, normalized_cell(sub))
            current = list(lower.values())

    cells = [
        np.array(list(entities.values()), dtype=np.int64).reshape(-1, families.cell_size(family, k))
        for k, entities in enumerate(found)
    ]
    cells.append(max_cells)
    return cells


def _stitch(bottom: npt.NDArray[np.int64], top: npt.NDArray[np.int64], dim: int) -> npt.NDArray[np.int64]:
    """Join a layer of cells with its copy one layer up into cells one dimension higher."""
    if dim == 1:
        # (a, b) -> (a, b, b', a'), counter-clockwise
        return np.column_stack((bottom[:, 0], bottom[:, 1], top[:, 1], top[:, 0]))
    return np.hstack((bottom, top))


class Topology:
    """
    Connectivity of a mesh in all dimensions.

    Instances are immutable: the stored arrays are read-only and every
    structural operation returns a new topology.
    """

    def __init__(self, cells: Sequence[npt.ArrayLike], family: str = families.HYPERCUBE) -> None:
        """
        Initialize the topology from already derived cells.

        Use :meth:`from_conn` (or :func:`hypercube` / :func:`simplex`) to build a
        topology from the maximal-cell connectivity only.

        Args:
            cells: One connectivity array per dimension, ``0..dim``.
            family: Name of the cell family, see :mod:`fecore.geometry.families`.

        Raises:
            TopologyError: If the family is unknown or a cell array has the wrong arity.
        """
        if family not in families.FAMILIES:
            raise TopologyError(f"Unknown cell family '{family}'. Known families: {sorted(families.FAMILIES)}.")

        dim = len(cells) - 1
        if not 0 <= dim <= families.max_dim(family):
            raise TopologyError(f"Family '{family}' does not support a topology of dimension {dim}.")

        arrays = []
        for k, conn in enumerate(cells):
            arr = _as_connectivity(conn, families.cell_size(family, k), f"Topology dimension {k}")
            arr.setflags(write=False)
            arrays.append(arr)

        self._family = family
        self._cells: tuple[npt.NDArray[np.int64], ...] = tuple(arrays)
        self._facet_counts = _count_facets(self._cells[-1], dim, family)

    @classmethod
    def from_conn(cls, conn: npt.ArrayLike, dim: int, family: str = families.HYPERCUBE) -> Topology:
        """
        Build a topology from the connectivity of its maximal cells.

        Args:
            conn: Connectivity list, one row of 0-based node indices per cell.
            dim: Manifold dimension of the cells.
            family: Name of the cell family.

        Raises:
            TopologyError: If the family or dimension is unknown, or the cells have the wrong arity.

        Returns:
            The topology with all sub-entities derived.
        """
        if family not in families.FAMILIES:
            raise TopologyError(f"Unknown cell family '{family}'. Known families: {sorted(families.FAMILIES)}.")
        if not 0 <= dim <= families.max_dim(family):
            raise TopologyError(f"Family '{family}' has no cells of dimension {dim}.")

        max_cells = _as_connectivity(conn, families.cell_size(family, dim), f"{families.cell_type(family, dim)} connectivity")
        cells = _derive_sub_entities(max_cells, dim, family)
        logger.debug(
            "Built %s topology of dimension %d: %s cells per dimension.",
            family, dim, [len(c) for c in cells]
        )
        return cls(cells, family)

    def __repr__(self) -> str:
        counts = ", ".join(str(len(c)) for c in self._cells)
        return f"{self.__class__.__name__}(family='{self._family}', dim={self.dim}, cells=[{counts}])"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Topology):
            return NotImplemented
        return self.equals(other)

    @property
    def dim(self) -> int:
        """Manifold dimension of the maximal cells."""
        return len(self._cells) - 1

    @property
    def family(self) -> str:
        """Name of the cell family."""
        return self._family

    def _check_dim(self, dim: int) -> int:
        if not 0 <= dim <= self.dim:
            raise TopologyError(f"Dimension {dim} is out of range 0..{self.dim}.")
        return dim

    def cells_in_dim(self, dim: int) -> npt.NDArray[np.int64]:
        """Connectivity of the cells of the given dimension (read-only)."""
        return self._cells[self._check_dim(dim)]

    def number_of_cells_in_dim(self, dim: int) -> int:
        """Number of cells of the given dimension."""
        return int(self.cells_in_dim(dim).shape[0])

    def cell_size_in_dim(self, dim: int) -> int:
        """Number of nodes per cell of the given dimension."""
        return families.cell_size(self._family, self._check_dim(dim))

    def max_cells(self) -> npt.NDArray[np.int64]:
        """Connectivity of the maximal cells, i.e. the mesh connectivity itself."""
        return self._cells[-1]

    def point_indices(self) -> npt.NDArray[np.int64]:
        """Sorted distinct node indices referenced by the mesh."""
        return np.unique(self._cells[-1])

    def boundary_conn(self) -> npt.NDArray[np.int64]:
        """
        Connectivity of the exterior boundary.

        A (dim - 1) cell belongs to the boundary when exactly one maximal cell
        references it. Boundary cells are returned in the normalized form of
        their only occurrence, in order of first appearance.

        Returns:
            The boundary connectivity; empty for point topologies.
        """
        if self.dim == 0:
            return np.empty((0, 0), dtype=np.int64)

        facets = self._cells[self.dim - 1]
        on_boundary = np.array(
            [self._facet_counts[cell_key(cell)] == 1 for cell in facets.tolist()],
            dtype=bool
        )
        return facets[on_boundary]

    def normalized(self) -> Topology:
        """
        Return an equivalent topology with every cell rotated to its normalized
        form and the cells of every dimension sorted lexicographically.
        """
        cells = []
        for arr in self._cells:
            canonical = sorted(normalized_cell(cell) for cell in arr.tolist())
            cells.append(np.array(canonical, dtype=np.int64).reshape(-1, arr.shape[1]))
        return Topology(cells, self._family)

    def equals(self, other: Topology) -> bool:
        """
        Structural equality of two topologies.

        Maximal cells are compared in normalized form, so cell order and the
        starting node of each cell do not matter. Lower dimensions are compared
        as sets of deduplication keys.
        """
        if not isinstance(other, Topology):
            return False
        if self.dim != other.dim or self._family != other._family:
            return False

        mine, theirs = self.normalized(), other.normalized()
        if not np.array_equal(mine.max_cells(), theirs.max_cells()):
            return False

        for k in range(self.dim):
            mine_keys = {cell_key(cell) for cell in mine._cells[k].tolist()}
            their_keys = {cell_key(cell) for cell in theirs._cells[k].tolist()}
            if mine_keys != their_keys:
                return False
        return True

    def extrude(self, flags: Iterable[Any]) -> Topology:
        """
        Extrude the topology one dimension up.

        The nodes are assumed to be replicated layer by layer: with ``n`` nodes per
        layer (largest node index + 1), layer ``i`` uses the node offset ``i * n``.
        A truthy flag ``flags[i]`` stitches the maximal cells of layer ``i`` to
        their copies in layer ``i + 1``; a falsy flag skips that layer.

        Args:
            flags: One flag per layer.

        Raises:
            TopologyError: If the family has no higher-dimensional hypercube member.

        Returns:
            The extruded topology.
        """
        dim = self.dim
        if dim >= families.max_dim(self._family):
            raise TopologyError(f"A {families.cell_type(self._family, dim)} topology cannot be extruded further.")
        if self._family != families.HYPERCUBE and dim >= 1:
            raise TopologyError(
                f"Extrusion of {families.cell_type(self._family, dim)} cells is only defined for the "
                f"'{families.HYPERCUBE}' family."
            )

        flags = [bool(flag) for flag in flags]
        points = self.point_indices()
        n_per_layer = int(points.max()) + 1 if points.size else 0
        base = self.max_cells()

        layers = [
            _stitch(base + layer * n_per_layer, base + (layer + 1) * n_per_layer, dim)
            for layer, keep in enumerate(flags) if keep
        ]
        size = families.cell_size(self._family, dim + 1)
        conn = np.vstack(layers) if layers else np.empty((0, size), dtype=np.int64)

        logger.debug("Extruding %d of %d layers (%d nodes per layer).", len(layers), len(flags), n_per_layer)
        return Topology.from_conn(conn, dim + 1, self._family)

    def clone(self) -> Topology:
        """Deep copy of the topology."""
        return Topology([arr.copy() for arr in self._cells], self._family)


def hypercube(conn: npt.ArrayLike, dim: int) -> Topology:
    """Topology of a point/line/quad/hex mesh of the given dimension."""
    return Topology.from_conn(conn, dim, families.HYPERCUBE)


def simplex(conn: npt.ArrayLike, dim: int) -> Topology:
    """Topology of a point/line/triangle/tetrahedron mesh of the given dimension."""
    return Topology.from_conn(conn, dim, families.SIMPLEX)
