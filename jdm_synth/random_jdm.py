r"""
This module produces comparison JDMs from the Erdős–Rényi G(n, p) model: it samples a random graph and returns its
joint degree matrix, which is realizable by construction and can be fed to the realizer or the mutator.
"""

import networkx as nx
from typing import Optional

from .jdm import JointDegreeMatrix, jdm_from_graph


def random_graph_jdm(n: int, p: float, seed: Optional[int] = None) -> JointDegreeMatrix:
    """
    Samples an undirected G(n, p) graph without self-loops and returns its JDM.

    Args:
        n: Number of nodes.
        p: Edge probability in [0, 1].
        seed: Seed for the random graph.

    Returns:
        The JDM of the sampled graph. Isolated nodes do not appear in it.

    Raises:
        ValueError: If n is negative or p is outside [0, 1].
    """
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}")
    if not 0.0 <= p <= 1.0:
        raise ValueError(f"p must be in [0, 1], got {p}")

    G = nx.gnp_random_graph(n, p, seed=seed, directed=False)
    return jdm_from_graph(G)
