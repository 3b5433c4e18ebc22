import matplotlib
matplotlib.use("Agg")

import pytest
import numpy as np
import networkx as nx
import matplotlib.pyplot as plt

from jdm_synth.jdm import jdm_from_graph


@pytest.fixture(autouse=True)
def close_figures():
    """
    Automatically closes every matplotlib figure after each test function,
    so plotting tests do not accumulate open figures.
    """
    yield
    plt.close("all")


@pytest.fixture
def rng():
    return np.random.default_rng(42)


@pytest.fixture
def path_jdm():
    """JDM of the path 1-2-2-1: two leaves, two degree-2 inner nodes."""
    return {(1, 2): 2, (2, 1): 2, (2, 2): 2}


@pytest.fixture
def karate_jdm():
    return jdm_from_graph(nx.karate_club_graph())


@pytest.fixture
def random_jdm():
    return jdm_from_graph(nx.gnp_random_graph(80, 0.08, seed=3))


@pytest.fixture
def four_class_jdm():
    """
    Four degree classes of 4 vertices each, with mass on (1,2) and (3,4) so that
    disjoint swaps always exist.
    """
    return {
        (1, 2): 4, (2, 1): 4,
        (2, 2): 4,
        (3, 4): 12, (4, 3): 12,
        (4, 4): 4,
    }


@pytest.fixture
def write_file(tmp_path):
    """Returns a helper writing the given lines to a file under tmp_path."""
    def _write(name, lines):
        path = tmp_path / name
        path.write_text("".join(line + "\n" for line in lines))
        return path
    return _write
