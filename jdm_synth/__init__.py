from .generator import JointDegreeGenerator, RealizationResult
from .feasibility import FeasibilityResult, check_feasibility, is_valid_joint_degree, assert_feasible
from .partition import DegreePartition, partition_degree_classes
from .fast_graph import FastGraph, JointDegreeGraph
from .neighbor_switch import neighbor_switch
from .mutator import JDMMutator, SwapMove
from .comparison import JDMComparator, compare_jdms
from .analysis import JDMAnalyzer
from .random_jdm import random_graph_jdm
from .jdm import jdm_from_edges, jdm_from_graph, jdm_to_matrix, matrix_to_jdm
from .file_io import read_jdm, read_edge_list, write_jdm, write_edge_list
from .exceptions import (
    JDMError,
    InputFormatError,
    FileAccessError,
    InfeasibleModelError,
    RepairExhaustionError,
    AllocationError,
    RetryBudgetExceededError,
    MutationError,
)

__all__ = [
    "JointDegreeGenerator",
    "RealizationResult",
    "FeasibilityResult",
    "check_feasibility",
    "is_valid_joint_degree",
    "assert_feasible",
    "DegreePartition",
    "partition_degree_classes",
    "FastGraph",
    "JointDegreeGraph",
    "neighbor_switch",
    "JDMMutator",
    "SwapMove",
    "JDMComparator",
    "compare_jdms",
    "JDMAnalyzer",
    "random_graph_jdm",
    "jdm_from_edges",
    "jdm_from_graph",
    "jdm_to_matrix",
    "matrix_to_jdm",
    "read_jdm",
    "read_edge_list",
    "write_jdm",
    "write_edge_list",
    "JDMError",
    "InputFormatError",
    "FileAccessError",
    "InfeasibleModelError",
    "RepairExhaustionError",
    "AllocationError",
    "RetryBudgetExceededError",
    "MutationError",
]

__version__ = "0.1.0"
