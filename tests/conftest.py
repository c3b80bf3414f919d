"""
Pytest configuration and shared fixtures.
"""

import pytest
import networkx as nx


@pytest.fixture
def ring4():
    """The 4-cycle: node i port 0 → i-1, port 1 → i+1."""
    from pnsim.core import ring
    return ring(4)


@pytest.fixture
def triangle():
    """K3, the smallest network that is not two-colorable."""
    from pnsim.core import complete
    return complete(3)


@pytest.fixture
def path5():
    """Path of 5 nodes."""
    from pnsim.core import path
    return path(5)


@pytest.fixture
def petersen():
    """Petersen graph: 3-regular, non-bipartite, 10 nodes."""
    from pnsim.core import Topology
    return Topology.from_networkx(nx.petersen_graph())
