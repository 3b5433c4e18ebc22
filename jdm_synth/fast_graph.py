r"""
This module provides the graph store used during realization, a dense symmetric adjacency matrix with O(1) edge
updates, and a JointDegreeGraph class, inherited from nx.Graph, with a method to access the subgraph of one degree class.
"""

from typing import Iterable, List, Optional, Sequence, Tuple

import networkx as nx
import numpy as np

from .exceptions import AllocationError


class JointDegreeGraph(nx.Graph):
    """
    Custom NetworkX Graph for realized JDM graphs.
    Extends nx.Graph to support subgraph extraction by target degree class.
    """
    def degree_class(self, degree: int) -> nx.Graph:
        """
        Returns a subgraph view containing only nodes of the specified degree class.

        Args:
            degree (int): The target degree of the class.

        Returns:
            nx.Graph: A subgraph view of the graph.
        """
        nodes = [n for n, d in self.nodes(data=True) if d.get('degree_class') == degree]
        return self.subgraph(nodes)


class FastGraph:
    """
    Simple undirected graph over the fixed vertex set 0..n-1.

    Edge test, insertion and removal are O(1); listing the neighbors of a vertex is O(n).
    ``add_edge`` does not check for an existing edge, callers test with ``has_edge`` first.
    """

    def __init__(self, n_nodes: int):
        if n_nodes < 0:
            raise ValueError(f"Number of nodes must be non-negative, got {n_nodes}")
        try:
            self.adj = np.zeros((n_nodes, n_nodes), dtype=bool)
        except (MemoryError, ValueError) as exc:
            raise AllocationError(
                f"Cannot allocate the adjacency matrix for {n_nodes} nodes"
            ) from exc
        self.n_nodes = n_nodes

    def __len__(self) -> int:
        return self.n_nodes

    def has_edge(self, u: int, v: int) -> bool:
        return bool(self.adj[u, v])

    def add_edge(self, u: int, v: int) -> None:
        self.adj[u, v] = True
        self.adj[v, u] = True

    def remove_edge(self, u: int, v: int) -> None:
        self.adj[u, v] = False
        self.adj[v, u] = False

    def neighbors(self, u: int) -> np.ndarray:
        """Returns the neighbors of u in ascending id order."""
        return np.flatnonzero(self.adj[u])

    def degree(self, u: int) -> int:
        return int(np.count_nonzero(self.adj[u]))

    def degrees(self) -> np.ndarray:
        return self.adj.sum(axis=1).astype(np.int64)

    def number_of_edges(self) -> int:
        return int(np.count_nonzero(np.triu(self.adj, k=1)))

    def edges(self) -> List[Tuple[int, int]]:
        """Returns every edge once as (u, v) with u < v, in row-major order."""
        rows, cols = np.nonzero(np.triu(self.adj, k=1))
        return [(int(u), int(v)) for u, v in zip(rows, cols)]

    @classmethod
    def from_edges(cls, edges: Iterable[Tuple[int, int]], n_nodes: Optional[int] = None) -> "FastGraph":
        """
        Builds a graph store from an edge list.

        Args:
            edges: Iterable of (u, v) pairs. Self-loops are not allowed.
            n_nodes: Number of vertices. Defaults to max id + 1.
        """
        edges = list(edges)
        if n_nodes is None:
            n_nodes = max((max(u, v) for u, v in edges), default=-1) + 1

        graph = cls(n_nodes)
        for u, v in edges:
            if u == v:
                raise ValueError(f"Self-loop on vertex {u} is not allowed")
            graph.add_edge(u, v)
        return graph

    def to_networkx(self, target_degrees: Optional[Sequence[int]] = None) -> JointDegreeGraph:
        """
        Converts the store to a JointDegreeGraph.

        Args:
            target_degrees: Optional per-vertex target degree, stored as the 'degree_class' node attribute.
                            Defaults to the current degree of each vertex.
        """
        G = JointDegreeGraph()
        if target_degrees is None:
            target_degrees = self.degrees()
        # Ensure even isolated nodes are created with attrs
        for node_id in range(self.n_nodes):
            G.add_node(node_id, degree_class=int(target_degrees[node_id]))
        G.add_edges_from(self.edges())
        return G
