"""Maximum bipartite matching on top of the max-flow engine.

A super source feeds every left node with one unit, every right node drains
one unit into a super sink, and each admissible (left, right) pair is a unit
edge. After max flow, a left node is matched to the right node across its
saturated edge.
"""

from __future__ import annotations

from typing import AbstractSet, Dict, Hashable, List, Optional

from flowmatch.algorithms.max_flow import calc_max_flow
from flowmatch.graph.residual import EdgeIndex, NodeID, NodeRole, ResidualNetwork
from flowmatch.logging import get_logger

logger = get_logger(__name__)


class BipartiteMatcher:
    """Builds a unit-capacity flow network for one matching instance.

    The instance is single-use: after ``solve`` the network carries the
    matching and further edges must not be added.

    Example:
        >>> m = BipartiteMatcher()
        >>> a, b = m.add_left("a"), m.add_left("b")
        >>> x = m.add_right("x")
        >>> _ = m.connect(a, x); _ = m.connect(b, x)
        >>> m.solve()
        1
    """

    def __init__(self) -> None:
        self.network = ResidualNetwork()
        self.source = self.network.add_node(NodeRole.SOURCE, "source")
        self.sink = self.network.add_node(NodeRole.SINK, "sink")
        self.left: List[NodeID] = []
        self.right: List[NodeID] = []
        self._pair_edges: Dict[NodeID, List[EdgeIndex]] = {}
        self._solved = False

    def add_left(self, label: Optional[Hashable] = None) -> NodeID:
        self._check_open()
        node = self.network.add_node(NodeRole.LEFT, label)
        self.network.add_edge(self.source, node, 1)
        self.left.append(node)
        self._pair_edges[node] = []
        return node

    def add_right(self, label: Optional[Hashable] = None) -> NodeID:
        self._check_open()
        node = self.network.add_node(NodeRole.RIGHT, label)
        self.network.add_edge(node, self.sink, 1)
        self.right.append(node)
        return node

    def connect(self, left: NodeID, right: NodeID) -> EdgeIndex:
        """Allow ``left`` to be matched with ``right``; returns the pair edge.

        Raises:
            ValueError: If the nodes are not a left and a right node of this
                matcher.
        """
        self._check_open()
        if left not in self._pair_edges:
            raise ValueError(f"Node {left!r} is not a left node.")
        if right not in self.network or self.network.role(right) != NodeRole.RIGHT:
            raise ValueError(f"Node {right!r} is not a right node.")
        edge = self.network.add_edge(left, right, 1)
        self._pair_edges[left].append(edge)
        return edge

    def solve(self, excluded: Optional[AbstractSet[NodeID]] = None) -> int:
        """Compute the maximum matching and return its size.

        Args:
            excluded: Left or right nodes left out of this computation.
        """
        self._check_open()
        size = calc_max_flow(
            self.network, self.source, self.sink, excluded_nodes=excluded
        )
        self._solved = True
        logger.debug(
            "Matched %d of %d left node(s) against %d right node(s)",
            size,
            len(self.left),
            len(self.right),
        )
        return size

    def matching(self) -> Dict[NodeID, EdgeIndex]:
        """Map each matched left node to its saturated pair edge."""
        arena = self.network.arena
        result: Dict[NodeID, EdgeIndex] = {}
        for node, edges in self._pair_edges.items():
            for idx in edges:
                if arena[idx].flow == arena[idx].capacity:
                    result[node] = idx
                    break
        return result

    def matched_right(self, left: NodeID) -> Optional[NodeID]:
        edge = self.matching().get(left)
        return None if edge is None else self.network.arena[edge].dst

    def unmatched_left(self) -> List[NodeID]:
        matched = self.matching()
        return [node for node in self.left if node not in matched]

    def _check_open(self) -> None:
        if self._solved:
            raise ValueError("Matcher has already been solved.")
