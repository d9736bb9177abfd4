"""
Cell-type families.

A family is an ordered chain of cell types where each type is the boundary of
the next one and the extrusion of the previous one, e.g. P1 < L2 < Q4 < H8.
The facet patterns describe how a cell of a given dimension decomposes into
cells one dimension lower (local node positions, outward orientation).
"""
from __future__ import annotations

HYPERCUBE = "P1L2Q4H8"
SIMPLEX = "P1L2T3T4"

FAMILIES: dict[str, tuple[str, ...]] = {
    HYPERCUBE: ("P1", "L2", "Q4", "H8"),
    SIMPLEX: ("P1", "L2", "T3", "T4"),
}

CELL_SIZES: dict[str, tuple[int, ...]] = {
    HYPERCUBE: (1, 2, 4, 8),
    SIMPLEX: (1, 2, 3, 4),
}

_LINE_FACETS = ((0,), (1,))

FACETS: dict[str, dict[int, tuple[tuple[int, ...], ...]]] = {
    HYPERCUBE: {
        1: _LINE_FACETS,
        2: ((0, 1), (1, 2), (2, 3), (3, 0)),
        3: (
            (0, 3, 2, 1),
            (0, 1, 5, 4),
            (1, 2, 6, 5),
            (2, 3, 7, 6),
            (3, 0, 4, 7),
            (4, 5, 6, 7),
        ),
    },
    SIMPLEX: {
        1: _LINE_FACETS,
        2: ((0, 1), (1, 2), (2, 0)),
        3: ((0, 2, 1), (0, 1, 3), (1, 2, 3), (2, 0, 3)),
    },
}


def check_family(family: str) -> str:
    """Return the family name, raising KeyError for unknown families."""
    if family not in FAMILIES:
        raise KeyError(f"Unknown cell family '{family}'. Known families: {sorted(FAMILIES)}.")
    return family


def max_dim(family: str) -> int:
    """Highest manifold dimension available in the family."""
    return len(FAMILIES[check_family(family)]) - 1


def cell_size(family: str, dim: int) -> int:
    """Number of nodes of a cell of the family at dimension `dim`."""
    sizes = CELL_SIZES[check_family(family)]
    if not 0 <= dim < len(sizes):
        raise KeyError(f"Family '{family}' has no cells of dimension {dim}.")
    return sizes[dim]


def cell_type(family: str, dim: int) -> str:
    """Type name of the family member at dimension `dim`."""
    types = FAMILIES[check_family(family)]
    if not 0 <= dim < len(types):
        raise KeyError(f"Family '{family}' has no cells of dimension {dim}.")
    return types[dim]


def facets(family: str, dim: int) -> tuple[tuple[int, ...], ...]:
    """Local facet pattern of a cell of dimension `dim` (dim >= 1)."""
    patterns = FACETS[check_family(family)]
    if dim not in patterns:
        raise KeyError(f"Family '{family}' has no facet pattern for dimension {dim}.")
    return patterns[dim]


def families_of(type_name: str) -> list[str]:
    """All families in which the given cell type appears."""
    return [name for name, chain in FAMILIES.items() if type_name in chain]
