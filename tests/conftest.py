"""Shared residual-network fixtures.

Each fixture returns a fresh ``ResidualNetwork``; node 0 is the source and
the highest node id is the sink unless stated otherwise.
"""

from __future__ import annotations

import pytest

from flowmatch.graph.residual import NodeRole, ResidualNetwork


@pytest.fixture
def line1():
    # Capacity:
    #     [5]      [1,3,7]
    #  0 ───────► 1 ═══════► 2
    #
    net = ResidualNetwork(3)
    net.add_edge(0, 1, 5)
    net.add_edge(1, 2, 1)
    net.add_edge(1, 2, 3)
    net.add_edge(1, 2, 7)
    return net


@pytest.fixture
def diamond():
    # Capacity:
    #        [3]       [2]
    #   0 ───────► 1 ───────► 3
    #   │          │ [1]      ▲
    #   │          ▼          │
    #   └────────► 2 ─────────┘
    #      [2]         [3]
    #
    # Max flow 0 -> 3 is 5; the first phase alone only finds 4 because
    # 1 -> 2 joins two level-1 nodes.
    net = ResidualNetwork(4)
    net.add_edge(0, 1, 3)
    net.add_edge(0, 2, 2)
    net.add_edge(1, 3, 2)
    net.add_edge(2, 3, 3)
    net.add_edge(1, 2, 1)
    return net


@pytest.fixture
def clrs6():
    # Classic six-node textbook network, max flow 0 -> 5 is 23.
    net = ResidualNetwork()
    net.add_node(NodeRole.SOURCE, "s")
    net.add_nodes(4, labels=["v1", "v2", "v3", "v4"])
    net.add_node(NodeRole.SINK, "t")
    for u, v, cap in [
        (0, 1, 16),
        (0, 2, 13),
        (1, 3, 12),
        (2, 1, 4),
        (2, 4, 14),
        (3, 2, 9),
        (3, 5, 20),
        (4, 3, 7),
        (4, 5, 4),
    ]:
        net.add_edge(u, v, cap)
    return net


@pytest.fixture
def disconnected():
    # 0 -> 1 and 2 -> 3, no path from 0 to 3.
    net = ResidualNetwork(4)
    net.add_edge(0, 1, 4)
    net.add_edge(2, 3, 4)
    return net
