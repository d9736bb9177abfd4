from __future__ import annotations

import logging
import numbers
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np
import scipy as sp

from fecore.exceptions import AssemblyError

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


@dataclass
class ElementVector:
    """
    Local vector of a single cell together with its global equation numbers.

    Attributes:
        vector: Local entries.
        eqnums: 1-based global equation numbers, one per entry. ``0`` drops the entry
            (e.g. a prescribed degree of freedom).
    """
    vector: npt.NDArray[np.float64] = field(default_factory=lambda: np.empty(0, dtype=np.float64))
    eqnums: npt.NDArray[np.int64] = field(default_factory=lambda: np.empty(0, dtype=np.int64))

    def __post_init__(self) -> None:
        self.vector = np.asarray(self.vector, dtype=np.float64).ravel()
        eqnums = np.asarray(self.eqnums).ravel()
        if eqnums.size and not np.all(np.equal(np.mod(eqnums, 1), 0)):
            raise AssemblyError(f"Equation numbers must be integers, got {eqnums.tolist()}.")
        self.eqnums = eqnums.astype(np.int64)

        if self.vector.shape != self.eqnums.shape:
            raise AssemblyError(
                f"Element vector has {self.vector.size} entries but {self.eqnums.size} equation numbers."
            )
        if np.any(self.eqnums < 0):
            raise AssemblyError(f"Equation numbers must be non-negative, got {self.eqnums.tolist()}.")


class SparseSystemVector:
    """
    Global right-hand side vector assembled from element vectors.

    The element vectors are consumed once, on the first call to
    :meth:`sparse_vector`; the assembled vector is kept for later calls.
    """

    def __init__(self, dim: int, element_vectors: Iterable[ElementVector]) -> None:
        """
        Initialize the system vector.

        Args:
            dim: Number of global equations.
            element_vectors: Element vectors, a sequence or a one-shot iterator.

        Raises:
            TypeError: If `element_vectors` is not iterable.
            AssemblyError: If `dim` is negative or not an integer.
        """
        if not isinstance(element_vectors, Iterable):
            raise TypeError(
                f"element_vectors must be iterable, got {type(element_vectors).__name__}."
            )
        if not isinstance(dim, numbers.Real) or dim % 1 != 0:
            raise AssemblyError(f"System dimension must be an integer, got {dim!r}.")
        if dim < 0:
            raise AssemblyError(f"System dimension must be non-negative, got {dim}.")

        self.dim = int(dim)
        self._source = element_vectors
        self._vector: sp.sparse.csr_matrix | None = None

    def __repr__(self) -> str:
        state = "assembled" if self._vector is not None else "pending"
        return f"{self.__class__.__name__}(dim={self.dim}, {state})"

    def _assemble(self) -> sp.sparse.csr_matrix:
        rows: list[npt.NDArray[np.int64]] = []
        data: list[npt.NDArray[np.float64]] = []

        n_elements = 0
        for element_vector in self._source:
            n_elements += 1
            eqnums = element_vector.eqnums
            if np.any(eqnums > self.dim):
                raise AssemblyError(
                    f"Equation numbers {eqnums.tolist()} exceed the system dimension {self.dim}."
                )
            keep = eqnums != 0
            rows.append(eqnums[keep] - 1)
            data.append(element_vector.vector[keep])

        row = np.concatenate(rows) if rows else np.empty(0, dtype=np.int64)
        values = np.concatenate(data) if data else np.empty(0, dtype=np.float64)

        logger.debug("Assembling %d element vectors into a system vector of size %d.", n_elements, self.dim)

        # COO tolerates duplicates; .tocsr() sums them
        return sp.sparse.coo_matrix(
            (values, (row, np.zeros_like(row))),
            shape=(self.dim, 1)
        ).tocsr()

    def sparse_vector(self) -> sp.sparse.csr_matrix:
        """
        Assembled vector as a sparse (dim, 1) column.

        Raises:
            AssemblyError: If an equation number exceeds the system dimension.

        Returns:
            The assembled vector, computed on the first call.
        """
        if self._vector is None:
            self._vector = self._assemble()
            self._source = ()
        return self._vector

    def assemble(self) -> sp.sparse.csr_matrix:
        return self.sparse_vector()

    def to_full(self) -> npt.NDArray[np.float64]:
        """Assembled vector as a dense array of length dim."""
        return np.asarray(self.sparse_vector().toarray()).ravel()
