import networkx as nx
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from typing import List, Optional, Tuple

from .jdm import JointDegreeMatrix, jdm_from_edges, jdm_from_graph, jdm_to_matrix


def compare_jdms(reference: JointDegreeMatrix, observed: JointDegreeMatrix) -> pd.DataFrame:
    """
    Lists every cell where two JDMs disagree. Missing cells count as zero.

    Args:
        reference: Target JDM.
        observed: JDM recomputed from a graph.

    Returns:
        DataFrame with columns k, l, reference, observed, difference (observed - reference),
        one row per differing cell, sorted by (k, l).
    """
    rows = []
    for k, l in sorted(set(reference) | set(observed)):
        ref_val = reference.get((k, l), 0)
        obs_val = observed.get((k, l), 0)
        if ref_val != obs_val:
            rows.append((k, l, ref_val, obs_val, obs_val - ref_val))
    return pd.DataFrame(rows, columns=["k", "l", "reference", "observed", "difference"])


class JDMComparator:
    """
    Verifies a realized graph against a reference JDM.
    Provides a tabular list of differing cells and a side-by-side heatmap of both matrices.
    """
    def __init__(self, reference: JointDegreeMatrix, observed: JointDegreeMatrix,
                 ref_label: str = "Reference", obs_label: str = "Observed"):
        self.reference = reference
        self.observed = observed
        self.ref_label = ref_label
        self.obs_label = obs_label

    @classmethod
    def from_graph(cls, reference: JointDegreeMatrix, graph: nx.Graph, **kwargs) -> "JDMComparator":
        return cls(reference, jdm_from_graph(graph), **kwargs)

    @classmethod
    def from_edges(cls, reference: JointDegreeMatrix, edges: List[Tuple[int, int]], **kwargs) -> "JDMComparator":
        return cls(reference, jdm_from_edges(edges), **kwargs)

    def differences(self) -> pd.DataFrame:
        return compare_jdms(self.reference, self.observed)

    def count_differences(self) -> int:
        return len(self.differences())

    def is_match(self) -> bool:
        return self.count_differences() == 0

    def print_report(self, title: str = "JDM VERIFICATION REPORT") -> int:
        """Prints the differing cells and returns their number."""
        df = self.differences()

        print("\n" + "=" * 60)
        print(title)
        print("=" * 60)
        if df.empty:
            print(f"[OK] {self.obs_label} JDM matches the {self.ref_label.lower()} JDM.")
        else:
            print(df.to_string(index=False))
            print(f"[WARNING] Found {len(df)} differences between the {self.ref_label.lower()} "
                  f"and the {self.obs_label.lower()} JDM.")
        print("=" * 60 + "\n")
        return len(df)

    def plot_comparison(self, log_scale: bool = True, title: str = "JDM Comparison"):
        """
        Plots both matrices side by side as heatmaps.

        Args:
            log_scale: If True, colors show log(1 + count).
            title: Title of the figure.
        """
        size = 1 + max((max(k, l) for k, l in list(self.reference) + list(self.observed)), default=0)
        matrices = [jdm_to_matrix(self.reference, size), jdm_to_matrix(self.observed, size)]
        labels = [self.ref_label, self.obs_label]

        fig, axes = plt.subplots(1, 2, figsize=(10, 4.5))
        for ax, matrix, label in zip(axes, matrices, labels):
            values = np.log1p(matrix) if log_scale else matrix
            im = ax.imshow(values, origin='lower', cmap='viridis')
            ax.set_title(label)
            ax.set_xlabel("Degree l")
            ax.set_ylabel("Degree k")
            fig.colorbar(im, ax=ax, label="log(1 + count)" if log_scale else "count")

        fig.suptitle(title)
        plt.tight_layout()
        plt.show()
