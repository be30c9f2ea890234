"""Consistency checks for a flow carried by a residual network."""

from __future__ import annotations

from typing import List

from flowmatch.graph.residual import FlowInvariantError, NodeID, ResidualNetwork


def net_outflow(network: ResidualNetwork, node: NodeID) -> int:
    """Flow leaving ``node`` minus flow entering it, over forward edges."""
    arena = network.arena
    # reverse halves of incoming edges carry the negated flow
    return sum(arena[idx].flow for idx in network.out_edges(node))


def node_balances(network: ResidualNetwork) -> List[int]:
    """``net_outflow`` for every node, computed in one pass over the arena."""
    balances = [0] * network.num_nodes
    for edge in network.arena:
        if edge.forward:
            balances[edge.src] += edge.flow
            balances[edge.dst] -= edge.flow
    return balances


def validate_flow(network: ResidualNetwork, src_node: NodeID, dst_node: NodeID) -> None:
    """Check capacity bounds, mirror symmetry and conservation.

    Args:
        network: Network whose current flow is checked.
        src_node: Source of the flow.
        dst_node: Sink of the flow.

    Raises:
        FlowInvariantError: On the first violated invariant.
    """
    arena = network.arena
    for idx, edge in enumerate(arena):
        if edge.flow > edge.capacity:
            raise FlowInvariantError(
                f"Edge {idx} ({edge.src}->{edge.dst}) carries {edge.flow} "
                f"over capacity {edge.capacity}."
            )
        if arena[edge.mirror].flow != -edge.flow:
            raise FlowInvariantError(
                f"Edge {idx} and its mirror {edge.mirror} disagree on flow."
            )
        if edge.forward and edge.flow < 0:
            raise FlowInvariantError(f"Edge {idx} carries negative flow {edge.flow}.")

    balances = node_balances(network)
    for node, balance in enumerate(balances):
        if node in (src_node, dst_node):
            continue
        if balance != 0:
            raise FlowInvariantError(
                f"Flow is not conserved at node {node}: net outflow {balance}."
            )
    if src_node != dst_node and balances[src_node] != -balances[dst_node]:
        raise FlowInvariantError(
            f"Source outflow {balances[src_node]} does not match sink inflow "
            f"{-balances[dst_node]}."
        )
