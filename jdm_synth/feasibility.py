r"""
This module checks whether a Joint Degree Matrix can be realized as a simple undirected graph.

The numbered conditions follow the usual statement of JDM realizability:

- condition 1: entries are non-negative integers at non-negative degrees, and JDM[k][l] == JDM[l][k];
- condition 2: for every degree k, the row sum is divisible by k (degree 0 takes the row sum as its class size);
- condition 3: for k != l, JDM[k][l] <= nk * nl;
- condition 4: JDM[k][k] <= nk * (nk - 1);
- condition 5: JDM[k][k] is even.

The integer part of condition 1 is checked first, symmetry last, so numeric violations of 2-5 are always reported
before an asymmetry.
"""

import logging
from dataclasses import dataclass
from numbers import Integral
from typing import Dict, Optional, Tuple

from .exceptions import InfeasibleModelError
from .jdm import JointDegreeMatrix, class_size, row_sums

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class FeasibilityResult:
    """Outcome of a feasibility check. ``condition`` and ``cell`` are None when the JDM is feasible."""
    is_feasible: bool
    condition: Optional[int] = None
    message: str = ""
    cell: Optional[Tuple[int, int]] = None

    def __bool__(self) -> bool:
        return self.is_feasible


def _violation(condition: int, message: str, cell: Tuple[int, int]) -> FeasibilityResult:
    log.info("Violation of condition %d: %s", condition, message)
    return FeasibilityResult(False, condition, message, cell)


def check_feasibility(jdm: JointDegreeMatrix) -> FeasibilityResult:
    """
    Validates a JDM against the realizability conditions.

    Args:
        jdm: Joint degree matrix keyed by (k, l).

    Returns:
        FeasibilityResult citing the first violated condition, or a feasible result.
    """
    cells = sorted(jdm)

    # Condition 1 (well-formed entries)
    for k, l in cells:
        value = jdm[(k, l)]
        if not isinstance(value, Integral) or not isinstance(k, Integral) or not isinstance(l, Integral):
            return _violation(1, f"JDM[{k}][{l}] = {value!r} is not an integer cell", (k, l))
        if k < 0 or l < 0 or value < 0:
            return _violation(1, f"JDM[{k}][{l}] = {value} has a negative degree or count", (k, l))

    # Condition 2: every degree class has an integer size
    nk: Dict[int, int] = {}
    for k, total in sorted(row_sums(jdm).items()):
        if k != 0 and total % k != 0:
            return _violation(
                2, f"row sum {total} of degree {k} is not divisible by {k}", (k, k)
            )
        nk[k] = class_size(k, total)

    # Conditions 3, 4, 5
    for k, l in cells:
        value = jdm[(k, l)]
        nk_k = nk.get(k, 0)
        nk_l = nk.get(l, 0)
        if k != l:
            if value > nk_k * nk_l:
                return _violation(
                    3, f"JDM[{k}][{l}] = {value} exceeds n{k} * n{l} = {nk_k * nk_l}", (k, l)
                )
        else:
            if value > nk_k * (nk_k - 1):
                return _violation(
                    4, f"JDM[{k}][{k}] = {value} exceeds n{k} * (n{k} - 1) = {nk_k * (nk_k - 1)}", (k, l)
                )
            if value % 2 != 0:
                return _violation(5, f"JDM[{k}][{k}] = {value} is odd", (k, l))

    # Condition 1 (symmetry)
    for k, l in cells:
        if k < l and jdm[(k, l)] != jdm.get((l, k), 0):
            return _violation(
                1, f"JDM[{k}][{l}] = {jdm[(k, l)]} differs from JDM[{l}][{k}] = {jdm.get((l, k), 0)}", (k, l)
            )
        if k > l and (l, k) not in jdm and jdm[(k, l)] != 0:
            return _violation(
                1, f"JDM[{k}][{l}] = {jdm[(k, l)]} differs from JDM[{l}][{k}] = 0", (k, l)
            )

    return FeasibilityResult(True)


def is_valid_joint_degree(jdm: JointDegreeMatrix) -> bool:
    """Returns True when the JDM passes every realizability condition."""
    return check_feasibility(jdm).is_feasible


def assert_feasible(jdm: JointDegreeMatrix) -> None:
    """
    Raises InfeasibleModelError when the JDM is not realizable.

    Raises:
        InfeasibleModelError: carrying the violated condition and cell.
    """
    result = check_feasibility(jdm)
    if not result:
        raise InfeasibleModelError(
            f"JDM is not realizable as a simple graph (condition {result.condition}): {result.message}",
            condition=result.condition,
            cell=result.cell,
        )
