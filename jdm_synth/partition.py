import numpy as np
from dataclasses import dataclass
from typing import Dict

from .jdm import JointDegreeMatrix, class_sizes


@dataclass
class DegreePartition:
    """
    Vertex classes of a realization run.

    Attributes:
        classes: Maps each degree k to the ids of its class (a contiguous block).
        target_degree: Target degree of every vertex, indexed by id.
        residual: Free stubs of every vertex, indexed by id. Starts equal to target_degree.
    """
    classes: Dict[int, np.ndarray]
    target_degree: np.ndarray
    residual: np.ndarray

    @property
    def n_nodes(self) -> int:
        return len(self.target_degree)

    def class_of(self, vertex: int) -> int:
        return int(self.target_degree[vertex])


def partition_degree_classes(jdm: JointDegreeMatrix) -> DegreePartition:
    """
    Assigns a disjoint block of vertex ids to every degree class of a feasible JDM.

    Blocks are laid out in ascending degree order, so the same JDM always yields the same partition.

    Args:
        jdm: A JDM that passed the feasibility check.

    Returns:
        DegreePartition with residual[v] == k for every v in class k.
    """
    sizes = class_sizes(jdm)
    n_total = sum(sizes.values())

    classes = {}
    target_degree = np.zeros(n_total, dtype=np.int64)

    offset = 0
    for degree in sorted(sizes):
        count = sizes[degree]
        members = np.arange(offset, offset + count, dtype=np.int64)
        classes[degree] = members
        target_degree[members] = degree
        offset += count

    return DegreePartition(
        classes=classes,
        target_degree=target_degree,
        residual=target_degree.copy(),
    )
