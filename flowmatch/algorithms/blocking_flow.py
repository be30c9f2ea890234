"""Blocking-flow search for one Dinic phase.

The search keeps, for every node, a pointer into its adjacency list. Pointers
only move forward during a phase, so each arc is discarded at most once per
phase and the phase costs O(V * E) in total. The walk uses an explicit stack
instead of recursion; augmenting paths may be as long as the node count.
"""

from __future__ import annotations

from typing import AbstractSet, List, Tuple

from flowmatch.graph.residual import EdgeIndex, NodeID, ResidualNetwork
from flowmatch.logging import get_logger

logger = get_logger(__name__)

#: Budget carried by the search before its first arc.
UNBOUNDED = float("inf")


class BlockingFlow:
    """Augmenting-path search restricted to one level graph.

    Args:
        network: Residual network to augment in place.
        levels: Levels produced by ``assign_levels`` for this phase.
        src_node: Phase source.
        dst_node: Phase sink.
        excluded: Nodes treated as absent for this phase.

    Raises:
        ValueError: If an endpoint does not exist or source equals sink.
    """

    def __init__(
        self,
        network: ResidualNetwork,
        levels: List[int],
        src_node: NodeID,
        dst_node: NodeID,
        excluded: AbstractSet[NodeID] = frozenset(),
    ) -> None:
        for node in (src_node, dst_node):
            if node not in network:
                raise ValueError(f"Node {node!r} does not exist.")
        if src_node == dst_node:
            raise ValueError("Source and sink must differ.")
        self.network = network
        self.levels = levels
        self.src_node = src_node
        self.dst_node = dst_node
        self.excluded = excluded
        self.pointers: List[int] = [0] * network.num_nodes

    def augment(self) -> int:
        """Find one augmenting path in the level graph and saturate its bottleneck.

        Returns:
            Units pushed along the path, or 0 once the level graph is blocked.
        """
        arena = self.network.arena
        adj = self.network.adjacency
        levels = self.levels
        pointers = self.pointers
        excluded = self.excluded
        sink = self.dst_node

        path: List[EdgeIndex] = []
        budgets: List[float] = [UNBOUNDED]
        node = self.src_node

        while True:
            if node == sink:
                pushed = int(budgets[-1])
                for idx in path:
                    self.network.push_flow(idx, pushed)
                return pushed

            out = adj[node]
            pos = pointers[node]
            want = levels[node] + 1
            while pos < len(out):
                edge = arena[out[pos]]
                if (
                    levels[edge.dst] == want
                    and edge.capacity > edge.flow
                    and edge.dst not in excluded
                ):
                    break
                pos += 1
            pointers[node] = pos

            if pos < len(out):
                idx = out[pos]
                edge = arena[idx]
                path.append(idx)
                budgets.append(min(budgets[-1], edge.capacity - edge.flow))
                node = edge.dst
                continue

            # dead end for the rest of the phase
            if not path:
                return 0
            idx = path.pop()
            budgets.pop()
            node = arena[idx].src
            pointers[node] += 1

    def run(self) -> Tuple[int, int]:
        """Augment until the level graph is blocked.

        Returns:
            ``(total_pushed, augmentations)`` for the phase.
        """
        total = 0
        augmentations = 0
        while True:
            pushed = self.augment()
            if pushed == 0:
                break
            total += pushed
            augmentations += 1
        logger.debug(
            "Blocking flow at sink level %d: %d unit(s) over %d path(s)",
            self.levels[self.dst_node],
            total,
            augmentations,
        )
        return total, augmentations
