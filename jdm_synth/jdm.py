r"""
This module holds the helpers shared by every stage working on a Joint Degree Matrix (JDM).

A JDM is stored as a plain dictionary keyed by the ordered degree pair ``(k, l)``.
Missing keys mean zero. Off-diagonal cells count edges between the two degree
classes (each edge appears once in ``(k, l)`` and once in ``(l, k)``), while a
diagonal cell ``(k, k)`` counts endpoints, i.e. twice the number of edges inside
the class.

Example
-------
.. code-block:: python

    jdm = {(1, 1): 2}                # two degree-1 vertices joined by one edge
    class_sizes(jdm)                 # {1: 2}
    jdm_to_matrix(jdm)               # array([[0, 0], [0, 2]])
"""

from collections import defaultdict
from typing import Dict, Iterable, Optional, Tuple, Union

import networkx as nx
import numpy as np

from .exceptions import AllocationError

JointDegreeMatrix = Dict[Tuple[int, int], int]


def row_sums(jdm: JointDegreeMatrix) -> Dict[int, int]:
    """Returns, for each degree k present as a row, the sum of JDM[k][l] over l."""
    sums: Dict[int, int] = defaultdict(int)
    for (k, _), value in jdm.items():
        sums[k] += value
    return dict(sums)


def class_size(degree: int, row_total: int) -> int:
    """
    Number of vertices of a degree class given the class row sum.

    Degree 0 is special-cased: the row sum itself is the class size, no division happens.
    """
    if degree == 0:
        return int(row_total)
    return int(row_total) // degree


def class_sizes(jdm: JointDegreeMatrix) -> Dict[int, int]:
    """
    Computes nk for every degree class of the JDM.

    The result is only meaningful once divisibility (condition 2) holds.
    """
    return {k: class_size(k, s) for k, s in row_sums(jdm).items()}


def jdm_to_matrix(jdm: Union[JointDegreeMatrix, Iterable[Tuple[Tuple[int, int], int]]],
                  size: Optional[int] = None) -> np.ndarray:
    """
    Builds the dense symmetric matrix used by the mutator.

    Each entry ``(d1, d2)`` is written to both ``[d1, d2]`` and ``[d2, d1]``; when the
    JDM lists both orientations the one visited last wins, as the line order of a file does.

    Args:
        jdm: Joint degree matrix, or a sequence of ((d1, d2), value) records such as the lines of a file.
        size: Matrix side. Defaults to max degree + 1.

    Returns:
        An int64 array of shape (size, size).

    Raises:
        AllocationError: If the matrix is too large to allocate.
    """
    items = list(jdm.items()) if isinstance(jdm, dict) else list(jdm)
    max_degree = max((max(k, l) for (k, l), _ in items), default=0)
    n = max_degree + 1 if size is None else size
    if n <= max_degree:
        raise ValueError(f"Matrix size {n} cannot hold degree {max_degree}")

    try:
        matrix = np.zeros((n, n), dtype=np.int64)
    except (MemoryError, ValueError) as exc:
        raise AllocationError(f"Cannot allocate a {n} x {n} JDM matrix") from exc
    for (d1, d2), value in items:
        matrix[d1, d2] = value
        matrix[d2, d1] = value
    return matrix


def matrix_to_jdm(matrix: np.ndarray) -> JointDegreeMatrix:
    """Converts a dense JDM matrix back to the dictionary form, keeping only nonzero cells."""
    rows, cols = np.nonzero(matrix)
    return {(int(k), int(l)): int(matrix[k, l]) for k, l in zip(rows, cols)}


def jdm_from_edges(edges: Iterable[Tuple[int, int]], n_nodes: Optional[int] = None) -> JointDegreeMatrix:
    """
    Computes the JDM of a simple undirected graph given as an edge list.

    Args:
        edges: Iterable of (u, v) pairs. Each undirected edge must appear once.
        n_nodes: Number of vertices. Defaults to max id + 1.

    Returns:
        The JDM of the graph (only nonzero cells).
    """
    edges = list(edges)
    if n_nodes is None:
        n_nodes = max((max(u, v) for u, v in edges), default=-1) + 1

    degree = np.zeros(n_nodes, dtype=np.int64)
    for u, v in edges:
        degree[u] += 1
        degree[v] += 1

    jdm: JointDegreeMatrix = defaultdict(int)
    for u, v in edges:
        k, l = int(degree[u]), int(degree[v])
        jdm[(k, l)] += 1
        jdm[(l, k)] += 1
    return dict(jdm)


def jdm_from_graph(G: nx.Graph) -> JointDegreeMatrix:
    """
    Computes the JDM of a NetworkX graph.

    Self-loops are ignored, both for the degrees and for the counted edges.
    """
    H = nx.Graph(G)
    H.remove_edges_from(list(nx.selfloop_edges(H)))

    jdm: JointDegreeMatrix = defaultdict(int)
    for u, v in H.edges():
        k, l = H.degree(u), H.degree(v)
        jdm[(k, l)] += 1
        jdm[(l, k)] += 1
    return dict(jdm)


def number_of_nodes(jdm: JointDegreeMatrix) -> int:
    """Total number of vertices a realization of the JDM has."""
    return sum(class_sizes(jdm).values())


def number_of_edges(jdm: JointDegreeMatrix) -> int:
    """Total number of edges a realization of the JDM has."""
    total = 0
    for (k, l), value in jdm.items():
        if k > l:
            total += value
        elif k == l:
            total += value // 2
    return total
