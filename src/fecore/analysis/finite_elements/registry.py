from __future__ import annotations

from typing import TYPE_CHECKING

from fecore.exceptions import GCellSetError
from fecore.geometry import families

if TYPE_CHECKING:
    from fecore.analysis.finite_elements.gcellset import GCellSet

_REGISTRY: dict[str, type[GCellSet]] = {}

_REQUIRED_ATTRIBUTES = ("TYPE", "DIM", "CELL_SIZE", "FAMILY")


def register_gcellset(cls: type[GCellSet]) -> type[GCellSet]:
    """Class decorator to register a cell type by its TYPE."""
    for name in _REQUIRED_ATTRIBUTES:
        if getattr(cls, name, None) is None:
            raise TypeError(f"{cls.__name__} must define {name}")

    if cls.TYPE not in families.FAMILIES[cls.FAMILY]:
        raise TypeError(f"{cls.__name__}: type '{cls.TYPE}' is not a member of family '{cls.FAMILY}'")
    if families.cell_type(cls.FAMILY, cls.DIM) != cls.TYPE:
        raise TypeError(f"{cls.__name__}: type '{cls.TYPE}' is not the dimension-{cls.DIM} member of '{cls.FAMILY}'")
    if families.cell_size(cls.FAMILY, cls.DIM) != cls.CELL_SIZE:
        raise TypeError(f"{cls.__name__}: CELL_SIZE {cls.CELL_SIZE} does not match family '{cls.FAMILY}'")

    _REGISTRY[cls.TYPE] = cls
    return cls


def gcellset_class(type_name: str) -> type[GCellSet]:
    """Look up a registered cell-set class by its type name."""
    cls = _REGISTRY.get(type_name)
    if cls is None:
        raise GCellSetError(f"No cell set registered for type '{type_name}'")
    return cls


def list_types() -> list[str]:
    return list(_REGISTRY.keys())
