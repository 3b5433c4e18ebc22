import logging
import time
import numpy as np
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .exceptions import JDMError, RetryBudgetExceededError
from .fast_graph import FastGraph, JointDegreeGraph
from .feasibility import assert_feasible
from .jdm import JointDegreeMatrix
from .neighbor_switch import neighbor_switch
from .partition import DegreePartition, partition_degree_classes

log = logging.getLogger(__name__)


@dataclass
class RealizationResult:
    """Output of one realization run."""
    graph: FastGraph
    edges: List[Tuple[int, int]]
    partition: DegreePartition
    n_switches: int
    elapsed: float
    seed: int

    @property
    def n_nodes(self) -> int:
        return self.graph.n_nodes

    @property
    def n_edges(self) -> int:
        return len(self.edges)

    def to_networkx(self) -> JointDegreeGraph:
        return self.graph.to_networkx(self.partition.target_degree)


class JointDegreeGenerator:
    """
    Builds a random simple graph whose joint degree matrix matches a target exactly.

    Edges are placed cell by cell by drawing random endpoints from the two degree classes;
    when a drawn endpoint has no free stub left, a neighbor switch frees one first.
    """
    def __init__(self, seed: Optional[int] = None, max_attempts: Optional[int] = None, verbose: bool = False):
        """
        Args:
            seed: Seed of the run's random generator. A fresh one is drawn and recorded when None.
            max_attempts: Bound on consecutive rejected draws for a single edge. None keeps the loop unbounded.
            verbose: If True, prints progress and the run summary.
        """
        if seed is None:
            seed = int(np.random.SeedSequence().entropy)
        self.seed = seed
        self.rng = np.random.default_rng(seed)
        self.max_attempts = max_attempts
        self.verbose = verbose

    def _place_edges(self, graph: FastGraph, partition: DegreePartition,
                     k: int, l: int, n_edges_add: int) -> int:
        """Adds n_edges_add edges between classes k and l. Returns the number of neighbor switches."""
        k_nodes = partition.classes[k]
        l_nodes = partition.classes[l]
        residual = partition.residual
        n_switches = 0
        attempts = 0

        while n_edges_add > 0:
            v = int(k_nodes[self.rng.integers(len(k_nodes))])
            w = int(l_nodes[self.rng.integers(len(l_nodes))])

            if v == w or graph.has_edge(v, w):
                attempts += 1
                if self.max_attempts is not None and attempts >= self.max_attempts:
                    raise RetryBudgetExceededError(
                        f"No free ({k},{l}) vertex pair found after {attempts} draws "
                        f"({n_edges_add} edges still to place)"
                    )
                continue
            attempts = 0

            if residual[v] == 0:
                neighbor_switch(graph, v, k_nodes, residual)
                n_switches += 1
            if residual[w] == 0:
                if k != l:
                    neighbor_switch(graph, w, l_nodes, residual)
                else:
                    neighbor_switch(graph, w, k_nodes, residual, avoid=v)
                n_switches += 1

            graph.add_edge(v, w)
            residual[v] -= 1
            residual[w] -= 1
            n_edges_add -= 1

        return n_switches

    def generate(self, jdm: JointDegreeMatrix) -> RealizationResult:
        """
        Realizes the JDM as a simple graph.

        Args:
            jdm: Target joint degree matrix.

        Returns:
            RealizationResult with the graph store and its final edge list.

        Raises:
            InfeasibleModelError: If the JDM fails the feasibility check. No graph is built.
            RepairExhaustionError: If a neighbor switch finds no valid rewiring.
            RetryBudgetExceededError: If max_attempts is set and runs out.
            AllocationError: If the adjacency matrix cannot be allocated.
        """
        start = time.perf_counter()
        assert_feasible(jdm)

        partition = partition_degree_classes(jdm)
        graph = FastGraph(partition.n_nodes)

        if self.verbose:
            print(f"--- Realizing JDM: {len(partition.classes)} degree classes, {partition.n_nodes} nodes ---")

        n_switches = 0

        # Each unordered degree pair once; diagonal cells count both endpoints of an edge
        for (k, l) in sorted(jdm):
            n_edges_add = jdm[(k, l)]
            if n_edges_add <= 0 or k < l:
                continue
            if k == l:
                n_edges_add //= 2
            n_switches += self._place_edges(graph, partition, k, l, n_edges_add)

            if self.verbose:
                print(f"  -> Cell ({k},{l}) complete. Edges: {graph.number_of_edges()}, Switches: {n_switches}")

        leftover = np.flatnonzero(partition.residual)
        if len(leftover) > 0:
            # Unreachable for a JDM that passed every condition
            raise JDMError(
                f"{len(leftover)} vertices still have free stubs after placing every edge; "
                f"the JDM rows are inconsistent"
            )

        # Neighbor switches rewire earlier placements, so the final edges come from the store
        edges = graph.edges()
        elapsed = time.perf_counter() - start
        log.info("Realized JDM: nodes=%d, edges=%d, switches=%d in %.3fs",
                 partition.n_nodes, len(edges), n_switches, elapsed)
        if self.verbose:
            print(f"#Switches: {n_switches}")
            print(f"#Edges: {len(edges)}")
            print(f"#Nodes: {partition.n_nodes}")

        return RealizationResult(
            graph=graph,
            edges=edges,
            partition=partition,
            n_switches=n_switches,
            elapsed=elapsed,
            seed=self.seed,
        )

    def generate_graph(self, jdm: JointDegreeMatrix) -> JointDegreeGraph:
        """Realizes the JDM and returns it as a JointDegreeGraph with a 'degree_class' node attribute."""
        return self.generate(jdm).to_networkx()
