r"""
This module frees one stub on a saturated vertex by rewiring a single existing edge (neighbor switch).
"""

import logging
import numpy as np
from typing import Optional, Sequence, Tuple

from .exceptions import RepairExhaustionError
from .fast_graph import FastGraph

log = logging.getLogger(__name__)


def _pick_partner(node_list: Sequence[int], residual: np.ndarray, avoid: Optional[int]) -> Optional[int]:
    """Returns the first vertex of node_list that can take over a stub, honoring the avoided vertex."""
    if avoid is None:
        for cand in node_list:
            if residual[cand] > 0:
                return int(cand)
        return None

    # avoid is about to spend one stub on the pending edge, so it may only donate a spare one
    fallback = None
    for cand in node_list:
        if residual[cand] <= 0:
            continue
        if cand == avoid:
            if residual[avoid] > 1:
                fallback = int(cand)
            continue
        return int(cand)
    return fallback


def neighbor_switch(graph: FastGraph,
                    w: int,
                    node_list: Sequence[int],
                    residual: np.ndarray,
                    avoid: Optional[int] = None) -> Tuple[int, int]:
    """
    Restores one free stub on w without changing any vertex degree.

    Picks w' in node_list with a free stub and a neighbor t of w not adjacent to w',
    then replaces edge (w, t) with (w', t).

    Args:
        graph: The graph store, modified in place.
        w: Saturated vertex that needs a free stub.
        node_list: Degree class of w itself; w' is drawn from it so every degree stays fixed.
        residual: Free stubs per vertex, modified in place.
        avoid: Vertex to keep as partner only if it has more than one free stub.

    Returns:
        The (w', t) pair used for the switch.

    Raises:
        RepairExhaustionError: If no w' or no t qualifies. The graph is left untouched.
    """
    # Step 1: choose w' with residual > 0
    w_prime = _pick_partner(node_list, residual, avoid)
    if w_prime is None:
        raise RepairExhaustionError(f"neighbor_switch: no partner w' found for node {w}", vertex=w)

    # Step 2: choose a neighbor t of w that is not adjacent to w'
    t = None
    for cand in graph.neighbors(w):
        if cand == w_prime:
            continue
        if not graph.has_edge(w_prime, cand):
            t = int(cand)
            break
    if t is None:
        raise RepairExhaustionError(f"neighbor_switch: no valid neighbor t found for node {w}", vertex=w)

    # Step 3: rewire (w, t) -> (w', t)
    graph.remove_edge(w, t)
    graph.add_edge(w_prime, t)

    # Step 4: update the free stubs
    residual[w] += 1
    residual[w_prime] -= 1

    log.debug("Neighbor switch: moved edge (%d, %d) to (%d, %d)", w, t, w_prime, t)
    return w_prime, t
