import networkx as nx
import numpy as np
import matplotlib.pyplot as plt
from typing import Dict, Any, Optional

from .jdm import JointDegreeMatrix, class_sizes, jdm_from_graph, jdm_to_matrix


class JDMAnalyzer:
    """
    A class to perform degree-correlation analysis on graphs.
    Can be used for both realized and real-world graphs.
    """
    def __init__(self, graph: nx.Graph):
        self.graph = graph

    def get_basic_stats(self) -> Dict[str, Any]:
        """Returns fundamental counts."""
        degrees = [d for n, d in self.graph.degree()]
        return {
            "num_nodes": self.graph.number_of_nodes(),
            "num_edges": self.graph.number_of_edges(),
            "density": nx.density(self.graph),
            "max_degree": max(degrees, default=0),
            "avg_degree": float(np.mean(degrees)) if degrees else 0.0,
        }

    def get_joint_degree_matrix(self) -> JointDegreeMatrix:
        return jdm_from_graph(self.graph)

    def get_assortativity(self) -> float:
        """
        Degree assortativity coefficient (Pearson correlation of the degrees at both ends of an edge).
        Returns nan for graphs where it is undefined (no edges, or a single degree value).
        """
        if self.graph.number_of_edges() == 0:
            return float('nan')
        degrees = {d for n, d in self.graph.degree()}
        if len(degrees) < 2:
            return float('nan')
        return nx.degree_assortativity_coefficient(self.graph)

    def get_average_neighbor_degree(self) -> Dict[int, float]:
        """Average nearest-neighbor degree k_nn(k) for each degree k, derived from the JDM."""
        jdm = self.get_joint_degree_matrix()
        weighted: Dict[int, float] = {}
        totals: Dict[int, int] = {}
        for (k, l), value in jdm.items():
            weighted[k] = weighted.get(k, 0.0) + l * value
            totals[k] = totals.get(k, 0) + value
        return {k: weighted[k] / totals[k] for k in sorted(totals) if totals[k] > 0}

    def analyze(self):
        """Prints a comprehensive text summary of the graph."""
        stats = self.get_basic_stats()
        assortativity = self.get_assortativity()
        knn = self.get_average_neighbor_degree()

        print("\n=== Joint Degree Analysis ===")
        print(f"Nodes: {stats['num_nodes']}")
        print(f"Edges: {stats['num_edges']}")
        print(f"Density: {stats['density']:.6f}")
        print(f"Max Degree: {stats['max_degree']}")
        print(f"Avg Degree: {stats['avg_degree']:.4f}")
        print(f"Degree Assortativity: {assortativity:.4f}")
        print("Average Neighbor Degree k_nn(k):")
        for k, value in knn.items():
            print(f"  k={k}: {value:.4f}")
        print("=============================\n")

    def plot_joint_degree_matrix(self, ax: Optional[plt.Axes] = None,
                                 log_scale: bool = True,
                                 figsize: tuple = (6, 5),
                                 title: str = "Joint Degree Matrix"):
        """
        Plots the JDM as a heatmap.

        Args:
            ax: Matplotlib axes to plot on. If None, creates a new figure.
            log_scale: If True, colors show log(1 + count).
            figsize: Size of figure if creating a new one.
            title: Title of the plot.
        """
        jdm = self.get_joint_degree_matrix()

        if not jdm:
            print("Graph has no edges to plot.")
            return

        created_figure = False
        if ax is None:
            fig, ax = plt.subplots(figsize=figsize)
            created_figure = True

        matrix = jdm_to_matrix(jdm)
        values = np.log1p(matrix) if log_scale else matrix
        im = ax.imshow(values, origin='lower', cmap='viridis')
        ax.figure.colorbar(im, ax=ax, label="log(1 + count)" if log_scale else "count")
        ax.set_xlabel("Degree l")
        ax.set_ylabel("Degree k")
        ax.set_title(title)

        if created_figure:
            plt.tight_layout()
            plt.show()

    def get_class_sizes(self) -> Dict[int, int]:
        """Number of vertices n_k of every degree class, isolated vertices included as class 0."""
        sizes = class_sizes(self.get_joint_degree_matrix())
        isolated = sum(1 for _, d in self.graph.degree() if d == 0)
        if isolated:
            sizes[0] = isolated
        return dict(sorted(sizes.items()))

    def plot_degree_distribution(self, ax: Optional[plt.Axes] = None,
                                 log_scale: bool = True,
                                 figsize: tuple = (6, 4),
                                 title: str = "Degree Class Sizes"):
        """
        Plots the size n_k of every degree class as one bar per class, labeled with n_k.

        Args:
            ax: Matplotlib axes to plot on. If None, creates a new figure.
            log_scale: If True, the count axis is logarithmic.
            figsize: Size of figure if creating a new one.
            title: Title of the plot.
        """
        sizes = self.get_class_sizes()

        if not sizes:
            print("Graph has no nodes/degrees to plot.")
            return

        created_figure = False
        if ax is None:
            fig, ax = plt.subplots(figsize=figsize)
            created_figure = True

        degrees = list(sizes)
        counts = [sizes[k] for k in degrees]
        positions = np.arange(len(degrees))
        bars = ax.bar(positions, counts, color='skyblue', edgecolor='black')
        ax.bar_label(bars, labels=[str(c) for c in counts], fontsize=8)
        ax.set_xticks(positions)
        ax.set_xticklabels([str(k) for k in degrees])
        if log_scale:
            ax.set_yscale('log')
        ax.set_xlabel("Degree class k")
        ax.set_ylabel("n_k (log)" if log_scale else "n_k")
        ax.set_title(title)
        ax.grid(True, axis='y', ls="--", alpha=0.5)

        if created_figure:
            plt.tight_layout()
            plt.show()
