r"""
Batch command line entry points.

- ``jdm-realize <jdm-file>``: realizes a JDM and writes the edge list (``generated.graph`` by default).
- ``jdm-mutate <input.jdm> <num_steps> <output.jdm>``: applies JDM-preserving swaps.
- ``jdm-compare <jdm-file> <edge-list-file>``: recomputes the JDM of an edge list and diffs it against a reference.
- ``jdm-random <n> <p>``: prints the JDM of a G(n, p) random graph.

Every tool exits with status 1 and a diagnostic on stderr when an input cannot be read or the model is rejected,
without creating its output file.
"""

import argparse
import logging
import sys
import time
from typing import List, Optional

from .comparison import JDMComparator
from .exceptions import JDMError
from .feasibility import assert_feasible
from .file_io import read_edge_list, read_jdm, read_jdm_entries, write_edge_list, write_jdm
from .generator import JointDegreeGenerator
from .jdm import jdm_to_matrix, matrix_to_jdm
from .mutator import JDMMutator
from .random_jdm import random_graph_jdm

log = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _fail(prog: str, exc: Exception) -> int:
    print(f"{prog}: error: {exc}", file=sys.stderr)
    return 1


def _non_negative_int(text: str) -> int:
    value = int(text)
    if value < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {text}")
    return value


def _positive_int(text: str) -> int:
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {text}")
    return value


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--seed", type=int, default=None, help="Seed of the random generator (drawn when omitted)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable INFO-level logging")


def realize_main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="jdm-realize",
        description="Build a random simple graph matching a joint degree matrix exactly",
    )
    parser.add_argument("jdm_file", help="JDM file with k,l,value lines")
    parser.add_argument("--output", "-o", default="generated.graph", help="Edge-list output file")
    parser.add_argument("--max-attempts", type=_positive_int, default=None,
                        help="Bound on consecutive rejected draws for one edge (unbounded by default)")
    _add_common_arguments(parser)
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        print(f"Loading file {args.jdm_file}")
        jdm = read_jdm(args.jdm_file)

        print("Running construction")
        generator = JointDegreeGenerator(seed=args.seed, max_attempts=args.max_attempts)
        result = generator.generate(jdm)

        print(f"#Switches: {result.n_switches}")
        print(f"#Edges: {result.n_edges}")
        print(f"#Nodes: {result.n_nodes}")
        print(f"Time: {result.elapsed:.3f} seconds")
        print(f"Seed: {result.seed}")

        count = write_edge_list(args.output, result.edges)
    except JDMError as exc:
        return _fail(parser.prog, exc)

    print(f"Wrote {count} edges to '{args.output}'")
    return 0


def mutate_main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="jdm-mutate",
        description="Perturb a joint degree matrix with degree-preserving disjoint swaps",
    )
    parser.add_argument("input", help="Input JDM file")
    parser.add_argument("num_steps", type=_non_negative_int, help="Number of swaps to apply")
    parser.add_argument("output", help="Output JDM file")
    parser.add_argument("--max-attempts", type=_positive_int, default=None,
                        help="Bound on the restarts of one swap (unbounded by default)")
    _add_common_arguments(parser)
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        entries = read_jdm_entries(args.input)
        matrix = jdm_to_matrix(entries)
        assert_feasible(matrix_to_jdm(matrix))

        mutator = JDMMutator(seed=args.seed, max_attempts=args.max_attempts)
        start = time.perf_counter()
        mutator.mutate(matrix, args.num_steps)
        elapsed = time.perf_counter() - start

        # Input line order first; a cell that became nonzero is appended unless its mirror is already listed
        order = [key for key, _ in entries]
        listed = set(order)
        mutated = {
            (k, l): value for (k, l), value in matrix_to_jdm(matrix).items()
            if (k, l) in listed or (l, k) not in listed
        }
        write_jdm(args.output, mutated, order=order)
    except JDMError as exc:
        return _fail(parser.prog, exc)

    log.info("Mutated %s in %.3fs (seed=%d)", args.input, elapsed, mutator.seed)
    print(f"Applied {args.num_steps} swaps in {elapsed:.3f} seconds (seed {mutator.seed}); wrote '{args.output}'")
    return 0


def compare_main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="jdm-compare",
        description="Recompute the JDM of an edge list and compare it with a reference JDM",
    )
    parser.add_argument("jdm_file", help="Reference JDM file")
    parser.add_argument("graph_file", help="Edge-list file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable INFO-level logging")
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        reference = read_jdm(args.jdm_file)
        print(f"Loaded reference JDM from '{args.jdm_file}'")
        edges = read_edge_list(args.graph_file)
    except JDMError as exc:
        return _fail(parser.prog, exc)

    n_nodes = max((max(u, v) for u, v in edges), default=-1) + 1
    print(f"Loaded graph from '{args.graph_file}' with {n_nodes} nodes and {len(edges)} edges")

    comparator = JDMComparator.from_edges(reference, edges)
    differences = comparator.print_report()
    return 0 if differences == 0 else 1


def random_main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="jdm-random",
        description="Print the JDM of an Erdos-Renyi G(n, p) random graph",
    )
    parser.add_argument("n", type=_non_negative_int, help="Number of nodes")
    parser.add_argument("p", type=float, help="Edge probability")
    parser.add_argument("--output", "-o", default=None, help="Write to this file instead of stdout")
    _add_common_arguments(parser)
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        jdm = random_graph_jdm(args.n, args.p, seed=args.seed)
    except ValueError as exc:
        parser.error(str(exc))

    if args.output is None:
        for (k, l), value in sorted(jdm.items()):
            print(f"{k},{l},{value}")
        return 0

    try:
        write_jdm(args.output, jdm)
    except JDMError as exc:
        return _fail(parser.prog, exc)
    return 0


if __name__ == "__main__":
    sys.exit(realize_main())
