"""Maximum-flow computation via Dinic's algorithm.

Each phase builds a level graph with BFS and saturates it with a blocking
flow; the loop stops once the sink is unreachable in the residual network.
Provides helpers for saturated-edge detection and min-cut extraction.
"""

from __future__ import annotations

from collections import deque
from typing import AbstractSet, FrozenSet, List, Literal, Optional, Union, overload

from flowmatch.algorithms.bfs import assign_levels
from flowmatch.algorithms.blocking_flow import BlockingFlow
from flowmatch.algorithms.types import FlowSummary
from flowmatch.algorithms.validation import validate_flow
from flowmatch.config import SOLVER_CONFIG
from flowmatch.graph.residual import EdgeIndex, NodeID, ResidualNetwork
from flowmatch.logging import get_logger

logger = get_logger(__name__)


@overload
def calc_max_flow(
    network: ResidualNetwork,
    src_node: NodeID,
    dst_node: NodeID,
    *,
    return_summary: Literal[False] = False,
    excluded_nodes: Optional[AbstractSet[NodeID]] = None,
    verify: Optional[bool] = None,
) -> int: ...


@overload
def calc_max_flow(
    network: ResidualNetwork,
    src_node: NodeID,
    dst_node: NodeID,
    *,
    return_summary: Literal[True],
    excluded_nodes: Optional[AbstractSet[NodeID]] = None,
    verify: Optional[bool] = None,
) -> tuple[int, FlowSummary]: ...


def calc_max_flow(
    network: ResidualNetwork,
    src_node: NodeID,
    dst_node: NodeID,
    *,
    return_summary: bool = False,
    excluded_nodes: Optional[AbstractSet[NodeID]] = None,
    verify: Optional[bool] = None,
) -> Union[int, tuple[int, FlowSummary]]:
    """Compute max flow between two nodes, augmenting ``network`` in place.

    The network keeps the flow it carries on entry, so the return value is
    the flow added by this call. A second call on a saturated network
    returns 0.

    Args:
        network: Residual network to augment.
        src_node: Source node.
        dst_node: Sink node.
        return_summary: If True, also return a ``FlowSummary``.
        excluded_nodes: Nodes treated as absent for this call. The set is
            handed to every phase and never stored on the network.
        verify: Run ``validate_flow`` afterwards. Defaults to
            ``SOLVER_CONFIG.verify_flow``.

    Returns:
        Union[int, tuple[int, FlowSummary]]: the flow pushed, with the
        summary when ``return_summary`` is set.

    Raises:
        ValueError: If the source or sink does not exist or is excluded.

    Examples:
        >>> net = ResidualNetwork(3)
        >>> _ = net.add_edge(0, 1, 10)
        >>> _ = net.add_edge(1, 2, 5)
        >>> calc_max_flow(net, 0, 2)
        5
        >>> calc_max_flow(net, 0, 2)
        0
    """
    for node in (src_node, dst_node):
        if node not in network:
            raise ValueError(f"Node {node!r} does not exist.")
    excluded: FrozenSet[NodeID] = frozenset(excluded_nodes or ())
    if src_node in excluded or dst_node in excluded:
        raise ValueError("Source and sink cannot be excluded.")
    if verify is None:
        verify = SOLVER_CONFIG.verify_flow

    total = 0
    phases = 0
    augmentations = 0

    # Degenerate case (s == t): conservation leaves no surplus to push.
    if src_node != dst_node:
        while True:
            levels, reached = assign_levels(network, src_node, dst_node, excluded)
            if not reached:
                break
            phases += 1
            pushed, paths = BlockingFlow(
                network, levels, src_node, dst_node, excluded
            ).run()
            total += pushed
            augmentations += paths

    logger.debug(
        "Max flow %s->%s: %d unit(s) in %d phase(s), %d augmentation(s)",
        src_node,
        dst_node,
        total,
        phases,
        augmentations,
    )

    if verify:
        validate_flow(network, src_node, dst_node)

    if not return_summary:
        return total
    return total, _build_flow_summary(
        network, src_node, total, phases, augmentations, excluded
    )


def _build_flow_summary(
    network: ResidualNetwork,
    src_node: NodeID,
    total_flow: int,
    phases: int,
    augmentations: int,
    excluded: FrozenSet[NodeID],
) -> FlowSummary:
    """Construct a ``FlowSummary`` from the network state."""
    arena = network.arena
    edge_flow = {}
    residual_cap = {}
    for idx in network.forward_edges():
        edge = arena[idx]
        edge_flow[idx] = edge.flow
        residual_cap[idx] = edge.capacity - edge.flow

    reachable = residual_reachable(network, src_node, excluded)
    return FlowSummary(
        total_flow=total_flow,
        phases=phases,
        augmentations=augmentations,
        edge_flow=edge_flow,
        residual_cap=residual_cap,
        reachable=reachable,
        min_cut=_cut_edges(network, reachable, excluded),
    )


def residual_reachable(
    network: ResidualNetwork,
    src_node: NodeID,
    excluded: AbstractSet[NodeID] = frozenset(),
) -> FrozenSet[NodeID]:
    """Nodes reachable from ``src_node`` over arcs with residual capacity.

    Reverse halves are part of the arena, so arcs carrying flow are
    traversable backwards without a separate in-edge scan.
    """
    arena = network.arena
    adj = network.adjacency
    seen = {src_node}
    queue = deque([src_node])
    while queue:
        node = queue.popleft()
        for idx in adj[node]:
            edge = arena[idx]
            if (
                edge.capacity > edge.flow
                and edge.dst not in seen
                and edge.dst not in excluded
            ):
                seen.add(edge.dst)
                queue.append(edge.dst)
    return frozenset(seen)


def _cut_edges(
    network: ResidualNetwork,
    reachable: FrozenSet[NodeID],
    excluded: AbstractSet[NodeID] = frozenset(),
) -> List[EdgeIndex]:
    arena = network.arena
    return [
        idx
        for idx in network.forward_edges()
        if arena[idx].src in reachable
        and arena[idx].dst not in reachable
        and arena[idx].dst not in excluded
    ]


def min_cut(
    network: ResidualNetwork,
    src_node: NodeID,
    excluded_nodes: Optional[AbstractSet[NodeID]] = None,
) -> List[EdgeIndex]:
    """Forward edges crossing the source side of the residual network.

    Meaningful after ``calc_max_flow``; the capacities of the returned edges
    then sum to the maximum flow value.
    """
    excluded = frozenset(excluded_nodes or ())
    reachable = residual_reachable(network, src_node, excluded)
    return _cut_edges(network, reachable, excluded)


def saturated_edges(network: ResidualNetwork) -> List[EdgeIndex]:
    """Forward edges with positive capacity whose flow equals the capacity."""
    arena = network.arena
    return [
        idx
        for idx in network.forward_edges()
        if arena[idx].capacity > 0 and arena[idx].flow == arena[idx].capacity
    ]
