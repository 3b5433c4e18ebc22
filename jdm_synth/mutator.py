r"""
This module perturbs a dense Joint Degree Matrix with capacity-bounded disjoint double-edge swaps.

Each step moves a mass k from cells (i1, j1) and (i2, j2) to cells (i1, j2) and (i2, j1), mirrored on the
transposed cells. Every row sum, hence every degree class size, is unchanged, and the capacities of the receiving
cells are recomputed from the live matrix, so the matrix stays realizable after any number of steps.

Example
-------
.. code-block:: python
   :linenos:

    matrix = jdm_to_matrix(jdm)
    mutator = JDMMutator(seed=7)
    mutator.mutate(matrix, num_steps=1000)
    mutated = matrix_to_jdm(matrix)
"""

import logging
import numpy as np
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .exceptions import MutationError, RetryBudgetExceededError
from .jdm import class_size

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class SwapMove:
    """One applied swap: mass k moved from (i1, j1), (i2, j2) to (i1, j2), (i2, j1)."""
    i1: int
    j1: int
    i2: int
    j2: int
    k: int


def _class_size(matrix: np.ndarray, d: int) -> int:
    return class_size(d, int(matrix[d].sum()))


def _capacity(nk_a: int, nk_b: int, a: int, b: int) -> int:
    """Maximum number of edges between classes a and b."""
    if a != b:
        return nk_a * nk_b
    return nk_a * (nk_a - 1)


def _swappable_cells(matrix: np.ndarray) -> List[Tuple[int, int]]:
    """Upper-triangle cells (i < j) holding at least 2 edges."""
    rows, cols = np.nonzero(np.triu(matrix >= 2, k=1))
    return list(zip(rows.tolist(), cols.tolist()))


def _has_partner(cells: List[Tuple[int, int]], i: int, j: int) -> bool:
    return any(len({i, j, a, b}) == 4 for a, b in cells)


def has_disjoint_swap(matrix: np.ndarray) -> bool:
    """Returns True when two index-disjoint upper-triangle cells with value >= 2 exist."""
    cells = _swappable_cells(matrix)
    return any(_has_partner(cells, i, j) for i, j in cells)


class JDMMutator:
    """
    Markov chain over JDM matrices sharing one degree sequence.

    Only exact invariant preservation is guaranteed, not uniformity or speed of exploration.
    """
    def __init__(self, seed: Optional[int] = None, max_attempts: Optional[int] = None):
        """
        Args:
            seed: Seed of the random generator. A fresh one is drawn and recorded when None.
            max_attempts: Bound on the restarts of a single step. None keeps the loop unbounded.
        """
        if seed is None:
            seed = int(np.random.SeedSequence().entropy)
        self.seed = seed
        self.rng = np.random.default_rng(seed)
        self.max_attempts = max_attempts

    def _sample_cell(self, n: int) -> Tuple[int, int]:
        """Draws i uniformly in [0, n-2], then j uniformly in [i+1, n-1]."""
        i = int(self.rng.integers(0, n - 1))
        j = int(self.rng.integers(i + 1, n))
        return i, j

    def step(self, matrix: np.ndarray) -> SwapMove:
        """
        Applies one swap to the matrix in place.

        Args:
            matrix: Dense symmetric JDM matrix indexed by degree.

        Returns:
            The applied SwapMove.

        Raises:
            MutationError: If no pair of index-disjoint cells with value >= 2 exists.
            RetryBudgetExceededError: If max_attempts is set and no swap with positive headroom was found.
        """
        n = matrix.shape[0]
        cells = _swappable_cells(matrix)
        if not any(_has_partner(cells, i, j) for i, j in cells):
            raise MutationError("The matrix has no pair of disjoint cells with at least 2 edges to swap")

        attempts = 0
        while True:
            attempts += 1
            if self.max_attempts is not None and attempts > self.max_attempts:
                raise RetryBudgetExceededError(
                    f"No swap with positive headroom found after {self.max_attempts} attempts"
                )

            # (a) two cells (i < j) with J[i][j] >= 2, index-disjoint
            while True:
                i1, j1 = self._sample_cell(n)
                x1 = int(matrix[i1, j1])
                if x1 >= 2:
                    break
            if not _has_partner(cells, i1, j1):
                continue
            while True:
                i2, j2 = self._sample_cell(n)
                x2 = int(matrix[i2, j2])
                if x2 >= 2 and len({i1, j1, i2, j2}) == 4:
                    break

            # (b) class sizes of the four degrees involved
            nk_i1 = _class_size(matrix, i1)
            nk_j1 = _class_size(matrix, j1)
            nk_i2 = _class_size(matrix, i2)
            nk_j2 = _class_size(matrix, j2)

            # (c) headroom of the receiving cells
            avail12 = _capacity(nk_i1, nk_j2, i1, j2) - int(matrix[i1, j2])
            avail21 = _capacity(nk_i2, nk_j1, i2, j1) - int(matrix[i2, j1])

            # (d) largest admissible magnitude
            max_k = min(x1, x2, avail12, avail21)
            if max_k >= 1:
                break

        # (e) apply the swap
        k = int(self.rng.integers(1, max_k + 1))
        matrix[i1, j1] -= k
        matrix[j1, i1] -= k
        matrix[i2, j2] -= k
        matrix[j2, i2] -= k
        matrix[i1, j2] += k
        matrix[j2, i1] += k
        matrix[i2, j1] += k
        matrix[j1, i2] += k

        return SwapMove(i1, j1, i2, j2, k)

    def mutate(self, matrix: np.ndarray, num_steps: int) -> np.ndarray:
        """
        Applies num_steps swaps to the matrix in place and returns it.

        Raises:
            ValueError: If num_steps is negative.
        """
        if num_steps < 0:
            raise ValueError(f"num_steps must be non-negative, got {num_steps}")

        for _ in range(num_steps):
            move = self.step(matrix)
            log.debug("Swap (%d,%d),(%d,%d) by %d", move.i1, move.j1, move.i2, move.j2, move.k)

        log.info("Applied %d JDM swaps (seed=%d)", num_steps, self.seed)
        return matrix
