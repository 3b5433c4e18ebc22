import networkx as nx

from jdm_synth.generator import JointDegreeGenerator
from jdm_synth.mutator import JDMMutator
from jdm_synth.comparison import JDMComparator
from jdm_synth.analysis import JDMAnalyzer
from jdm_synth.jdm import jdm_from_graph, jdm_to_matrix, matrix_to_jdm


def main():
    print("--- 1. Target: JDM of Zachary's karate club ---")
    target = jdm_from_graph(nx.karate_club_graph())
    print(f"Target JDM has {len(target)} nonzero cells")

    print("--- 2. Realizing the target JDM ---")
    gen = JointDegreeGenerator(seed=100, verbose=True)
    result = gen.generate(target)
    print(f"Graph Generated: {result.n_nodes} nodes, {result.n_edges} edges, {result.n_switches} switches")

    comparator = JDMComparator.from_edges(target, result.edges, obs_label="Realized")
    comparator.print_report()

    print("--- 3. Mutating the JDM (200 swaps) ---")
    matrix = jdm_to_matrix(target)
    JDMMutator(seed=100).mutate(matrix, 200)
    mutated = matrix_to_jdm(matrix)

    print("--- 4. Realizing the mutated JDM ---")
    mutated_graph = JointDegreeGenerator(seed=100).generate_graph(mutated)
    JDMComparator.from_graph(mutated, mutated_graph, obs_label="Realized").print_report()

    print("\n--- 5. Running Analysis ---")
    print("This will print degree-correlation metrics and plot both JDMs.")
    original = JDMAnalyzer(result.to_networkx())
    original.analyze()
    perturbed = JDMAnalyzer(mutated_graph)
    perturbed.analyze()

    JDMComparator(target, mutated, ref_label="Original", obs_label="Mutated").plot_comparison()
    perturbed.plot_degree_distribution(log_scale=False)

    print("Analysis Complete.")

if __name__ == "__main__":
    main()
