"""
Driving-point impedance extraction.

The diagonal of Z = Y^-1 is obtained without forming the inverse: Y is
factorized once, then Y z = e_i is solved for every node i and z[i] kept.
"""

import logging
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor

import numpy as np
from scipy import sparse
from scipy.sparse.linalg import splu

from ..core.errors import SingularSystemError

logger = logging.getLogger(__name__)


class FactorSolver(ABC):
    """
    Factor-once, solve-many interface over a sparse linear system.

    A handle returned by factor() is only read by solve(), so one handle
    may serve several threads.
    """

    @abstractmethod
    def factor(self, matrix: sparse.spmatrix):
        """Factorize a square matrix and return an opaque handle."""

    @abstractmethod
    def solve(self, handle, rhs: np.ndarray) -> None:
        """Solve for one right-hand side, overwriting rhs with the solution."""


class SuperLUSolver(FactorSolver):
    """
    FactorSolver backed by scipy.sparse.linalg.splu.

    Args:
        permc_spec: Column permutation passed to splu
    """

    def __init__(self, permc_spec: str = "COLAMD"):
        self.permc_spec = permc_spec

    def factor(self, matrix: sparse.spmatrix):
        try:
            return splu(sparse.csc_matrix(matrix), permc_spec=self.permc_spec)
        except RuntimeError as e:
            raise SingularSystemError(f"factorization failed: {e}") from e

    def solve(self, handle, rhs: np.ndarray) -> None:
        rhs[:] = handle.solve(rhs)


def _diagonal_entries(solver: FactorSolver, handle, n: int, nodes: np.ndarray) -> np.ndarray:
    """Solve Y z = e_i for the given nodes with a private buffer."""
    buffer = np.zeros(n, dtype=complex)
    out = np.empty(len(nodes), dtype=complex)
    for k, i in enumerate(nodes):
        buffer[:] = 0.0
        buffer[i] = 1.0
        solver.solve(handle, buffer)
        out[k] = buffer[i]
    return out


def impedance_diagonal(
    Y: sparse.spmatrix,
    solver: FactorSolver | None = None,
    workers: int = 1,
) -> np.ndarray:
    """
    Diagonal of the impedance matrix Z = Y^-1.

    Args:
        Y: Square complex admittance matrix
        solver: Factorization backend (SuperLUSolver when None)
        workers: Number of threads for the per-node solves

    Returns:
        Complex array with Z[i, i] for every node

    Raises:
        SingularSystemError: Y cannot be factorized or a diagonal entry is
            not finite
    """
    if solver is None:
        solver = SuperLUSolver()
    if workers < 1:
        raise ValueError(f"workers must be at least 1, got {workers}")

    n = Y.shape[0]
    if n == 0:
        return np.zeros(0, dtype=complex)

    handle = solver.factor(Y)
    nodes = np.arange(n)

    if workers == 1 or n == 1:
        diagonal = _diagonal_entries(solver, handle, n, nodes)
    else:
        chunks = [c for c in np.array_split(nodes, workers) if len(c)]
        with ThreadPoolExecutor(max_workers=len(chunks)) as pool:
            parts = list(pool.map(lambda c: _diagonal_entries(solver, handle, n, c), chunks))
        diagonal = np.concatenate(parts)

    bad = np.flatnonzero(~np.isfinite(diagonal))
    if len(bad):
        raise SingularSystemError(f"driving-point impedance is not finite at {len(bad)} node(s)")

    logger.debug(f"Solved {n} driving-point impedances with {workers} worker(s)")
    return diagonal
