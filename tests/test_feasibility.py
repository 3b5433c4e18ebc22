import pytest
import networkx as nx

from jdm_synth.exceptions import InfeasibleModelError
from jdm_synth.feasibility import assert_feasible, check_feasibility, is_valid_joint_degree
from jdm_synth.jdm import jdm_from_graph


class TestFeasibilityChecker:

    def test_row_sum_not_divisible(self):
        """Condition 2: a single degree-3 endpoint cannot form a whole vertex."""
        jdm = {(3, 1): 1, (1, 3): 1}
        result = check_feasibility(jdm)
        assert not result.is_feasible
        assert result.condition == 2
        assert result.cell == (3, 3)

    def test_off_diagonal_over_capacity(self):
        """Condition 3: one degree-4 vertex cannot reach 4 edges into a class of two vertices."""
        jdm = {(4, 2): 4, (2, 4): 4}
        result = check_feasibility(jdm)
        assert result.condition == 3
        assert result.cell == (2, 4)

    def test_diagonal_over_capacity(self):
        """Condition 4: line `2,2,2` gives n2 = 1, which allows no intra-class edge."""
        result = check_feasibility({(2, 2): 2})
        assert not result
        assert result.condition == 4

    def test_odd_diagonal(self):
        """Condition 5: diagonal cells count both endpoints of an edge."""
        result = check_feasibility({(1, 1): 3})
        assert result.condition == 5

    def test_degree_zero_special_case(self):
        """Degree 0 uses the row sum as class size instead of dividing by zero."""
        jdm = {(0, 1): 2, (1, 1): 0, (1, 0): 2}
        assert is_valid_joint_degree(jdm)

    def test_single_edge_is_feasible(self):
        assert is_valid_joint_degree({(1, 1): 2})

    def test_empty_jdm_is_feasible(self):
        assert is_valid_joint_degree({})

    def test_negative_entry(self):
        result = check_feasibility({(1, 1): -2})
        assert result.condition == 1

    def test_non_integer_entry(self):
        result = check_feasibility({(1, 1): 2.5})
        assert result.condition == 1

    def test_asymmetric_jdm(self):
        """Numeric conditions hold, but (1,2) and (2,1) disagree."""
        jdm = {(1, 2): 2, (2, 1): 0, (1, 1): 0, (2, 2): 6}
        result = check_feasibility(jdm)
        assert result.condition == 1
        assert result.cell == (1, 2)

    def test_numeric_condition_reported_before_asymmetry(self):
        jdm = {(2, 2): 2, (1, 2): 1}
        assert check_feasibility(jdm).condition == 4

    def test_jdm_of_real_graph_is_feasible(self, karate_jdm):
        assert is_valid_joint_degree(karate_jdm)

    def test_agrees_with_networkx(self):
        """Cross-check against networkx for JDMs without degree-0 rows."""
        cases = [
            jdm_from_graph(nx.petersen_graph()),
            {(1, 1): 2},
            {(2, 2): 2},
            {(1, 1): 3},
            {(4, 2): 4, (2, 4): 4},
        ]
        for jdm in cases:
            nested = {}
            for (k, l), value in jdm.items():
                nested.setdefault(k, {})[l] = value
            assert is_valid_joint_degree(jdm) == nx.is_valid_joint_degree(nested)

    def test_assert_feasible_raises_with_condition(self):
        with pytest.raises(InfeasibleModelError) as exc_info:
            assert_feasible({(2, 2): 2})
        assert exc_info.value.condition == 4
        assert exc_info.value.cell == (2, 2)

    def test_assert_feasible_passes(self, path_jdm):
        assert_feasible(path_jdm)
