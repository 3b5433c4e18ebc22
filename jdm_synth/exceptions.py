r"""
This module collects the errors raised while loading, checking, realizing and mutating joint degree matrices.
"""

from typing import Optional, Tuple


class JDMError(Exception):
    """Base class for every error raised by jdm_synth."""


class InputFormatError(JDMError):
    """Raised when a line of a JDM or edge-list file cannot be parsed."""

    def __init__(self, message: str, line_number: Optional[int] = None, line: Optional[str] = None):
        super().__init__(message)
        self.line_number = line_number
        self.line = line


class FileAccessError(JDMError):
    """Raised when an input or output file cannot be opened."""


class InfeasibleModelError(JDMError):
    """
    Raised when a JDM violates one of the realizability conditions.

    Attributes:
        condition: Number of the violated condition (1-5).
        cell: The (k, l) cell that triggered the violation, or (k, k) for a row condition.
    """

    def __init__(self, message: str, condition: int, cell: Optional[Tuple[int, int]] = None):
        super().__init__(message)
        self.condition = condition
        self.cell = cell


class RepairExhaustionError(JDMError):
    """Raised when a neighbor switch finds no partner w' or no neighbor t to rewire."""

    def __init__(self, message: str, vertex: int):
        super().__init__(message)
        self.vertex = vertex


class AllocationError(JDMError):
    """Raised when the adjacency matrix cannot be allocated."""


class RetryBudgetExceededError(JDMError):
    """Raised when an explicit max_attempts budget runs out in a rejection-sampling loop."""


class MutationError(JDMError):
    """Raised when a JDM matrix admits no index-disjoint swap."""
