import pytest
import numpy as np

from jdm_synth.exceptions import AllocationError, MutationError
from jdm_synth.feasibility import is_valid_joint_degree
from jdm_synth.jdm import class_sizes, jdm_to_matrix, matrix_to_jdm
from jdm_synth.mutator import JDMMutator, has_disjoint_swap


class TestJDMMutator:

    def test_step_moves_mass_between_disjoint_cells(self, four_class_jdm):
        matrix = jdm_to_matrix(four_class_jdm)
        before = matrix.copy()

        move = JDMMutator(seed=1).step(matrix)

        assert len({move.i1, move.j1, move.i2, move.j2}) == 4
        assert move.i1 < move.j1 and move.i2 < move.j2
        assert move.k >= 1
        assert matrix[move.i1, move.j1] == before[move.i1, move.j1] - move.k
        assert matrix[move.i2, move.j2] == before[move.i2, move.j2] - move.k
        assert matrix[move.i1, move.j2] == before[move.i1, move.j2] + move.k
        assert matrix[move.i2, move.j1] == before[move.i2, move.j1] + move.k

    def test_invariants_hold_after_many_steps(self, four_class_jdm):
        matrix = jdm_to_matrix(four_class_jdm)
        row_sums = matrix.sum(axis=1).copy()

        JDMMutator(seed=8).mutate(matrix, 300)

        np.testing.assert_array_equal(matrix.sum(axis=1), row_sums)
        np.testing.assert_array_equal(matrix, matrix.T)
        assert (matrix >= 0).all()
        mutated = matrix_to_jdm(matrix)
        assert is_valid_joint_degree(mutated)
        assert class_sizes(mutated) == class_sizes(four_class_jdm)

    def test_zero_steps_is_identity(self, four_class_jdm):
        matrix = jdm_to_matrix(four_class_jdm)
        JDMMutator(seed=0).mutate(matrix, 0)
        np.testing.assert_array_equal(matrix, jdm_to_matrix(four_class_jdm))

    def test_same_seed_same_chain(self, four_class_jdm):
        first = JDMMutator(seed=21).mutate(jdm_to_matrix(four_class_jdm), 50)
        second = JDMMutator(seed=21).mutate(jdm_to_matrix(four_class_jdm), 50)
        np.testing.assert_array_equal(first, second)

    def test_no_disjoint_swap(self):
        matrix = jdm_to_matrix({(1, 1): 2})

        assert not has_disjoint_swap(matrix)
        with pytest.raises(MutationError):
            JDMMutator(seed=0).step(matrix)

    def test_cells_sharing_an_index_do_not_swap(self):
        """Both cells with value >= 2 touch degree 2."""
        matrix = jdm_to_matrix({(1, 2): 2, (2, 1): 2, (2, 3): 3, (3, 2): 3, (2, 2): 2})

        assert not has_disjoint_swap(matrix)
        with pytest.raises(MutationError):
            JDMMutator(seed=0).mutate(matrix, 1)

    def test_negative_steps(self, four_class_jdm):
        with pytest.raises(ValueError):
            JDMMutator(seed=0).mutate(jdm_to_matrix(four_class_jdm), -1)

    def test_karate_matrix_keeps_row_sums(self, karate_jdm):
        matrix = jdm_to_matrix(karate_jdm)
        if not has_disjoint_swap(matrix):
            pytest.skip("no disjoint swap in this JDM")
        row_sums = matrix.sum(axis=1).copy()

        JDMMutator(seed=2).mutate(matrix, 100)

        np.testing.assert_array_equal(matrix.sum(axis=1), row_sums)
        assert is_valid_joint_degree(matrix_to_jdm(matrix))

    def test_matrix_too_large(self):
        with pytest.raises(AllocationError):
            jdm_to_matrix({(10 ** 12, 10 ** 12): 2})
