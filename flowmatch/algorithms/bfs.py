"""Level assignment for Dinic phases."""

from __future__ import annotations

from collections import deque
from typing import AbstractSet, List, Tuple

from flowmatch.graph.residual import NodeID, ResidualNetwork


def assign_levels(
    network: ResidualNetwork,
    src_node: NodeID,
    dst_node: NodeID,
    excluded: AbstractSet[NodeID] = frozenset(),
) -> Tuple[List[int], bool]:
    """Breadth-first distances from ``src_node`` over arcs with spare capacity.

    Args:
        network: Residual network to scan.
        src_node: Node that receives level 0.
        dst_node: Node whose reachability is reported.
        excluded: Nodes treated as absent for this call only.

    Returns:
        ``(levels, reached)`` where ``levels[v]`` is the hop distance of ``v``
        or -1 when unreached, and ``reached`` tells whether ``dst_node`` got a
        level.

    Raises:
        ValueError: If either endpoint does not exist.
    """
    for node in (src_node, dst_node):
        if node not in network:
            raise ValueError(f"Node {node!r} does not exist.")
    arena = network.arena
    adj = network.adjacency
    levels = [-1] * network.num_nodes
    levels[src_node] = 0
    queue = deque([src_node])
    while queue:
        node = queue.popleft()
        next_level = levels[node] + 1
        for idx in adj[node]:
            edge = arena[idx]
            if (
                levels[edge.dst] < 0
                and edge.capacity > edge.flow
                and edge.dst not in excluded
            ):
                levels[edge.dst] = next_level
                queue.append(edge.dst)
    return levels, levels[dst_node] >= 0
