import math

import pytest
import networkx as nx
import matplotlib.pyplot as plt
from unittest.mock import patch

from jdm_synth.analysis import JDMAnalyzer


class TestJDMAnalyzer:

    def test_basic_stats(self):
        stats = JDMAnalyzer(nx.path_graph(4)).get_basic_stats()

        assert stats["num_nodes"] == 4
        assert stats["num_edges"] == 3
        assert stats["max_degree"] == 2
        assert stats["avg_degree"] == pytest.approx(1.5)
        assert stats["density"] == pytest.approx(0.5)

    def test_joint_degree_matrix(self, path_jdm):
        assert JDMAnalyzer(nx.path_graph(4)).get_joint_degree_matrix() == path_jdm

    def test_average_neighbor_degree(self):
        knn = JDMAnalyzer(nx.path_graph(4)).get_average_neighbor_degree()
        assert knn == {1: pytest.approx(2.0), 2: pytest.approx(1.5)}

    def test_assortativity(self):
        assert JDMAnalyzer(nx.path_graph(4)).get_assortativity() < 0
        assert math.isnan(JDMAnalyzer(nx.cycle_graph(5)).get_assortativity())
        assert math.isnan(JDMAnalyzer(nx.empty_graph(3)).get_assortativity())

    def test_class_sizes_include_isolated_nodes(self):
        G = nx.path_graph(4)
        G.add_node(9)

        assert JDMAnalyzer(G).get_class_sizes() == {0: 1, 1: 2, 2: 2}

    def test_analyze_prints_summary(self, capsys):
        JDMAnalyzer(nx.karate_club_graph()).analyze()
        out = capsys.readouterr().out

        assert "=== Joint Degree Analysis ===" in out
        assert "Nodes: 34" in out
        assert "Edges: 78" in out

    @patch('matplotlib.pyplot.show')
    def test_plots_create_figures(self, mock_show):
        analyzer = JDMAnalyzer(nx.karate_club_graph())

        analyzer.plot_joint_degree_matrix()
        analyzer.plot_degree_distribution(log_scale=False)

        assert mock_show.call_count == 2

    def test_plots_on_given_axes(self):
        analyzer = JDMAnalyzer(nx.karate_club_graph())
        fig, (ax1, ax2) = plt.subplots(1, 2)

        analyzer.plot_joint_degree_matrix(ax=ax1)
        analyzer.plot_degree_distribution(ax=ax2)

        assert ax1.get_title() == "Joint Degree Matrix"
        assert ax2.get_title() == "Degree Class Sizes"
        assert [t.get_text() for t in ax2.get_xticklabels()][:3] == ["1", "2", "3"]

    def test_plot_empty_graph(self, capsys):
        JDMAnalyzer(nx.empty_graph(3)).plot_joint_degree_matrix()
        assert "no edges" in capsys.readouterr().out
