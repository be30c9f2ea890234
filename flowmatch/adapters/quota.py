"""Quota assignment: hand items to requesters under per-group quotas.

Network layout::

    source -1-> requester -1-> item -1-> group -quota-> sink
                                    \\-------1--------> sink   (ungrouped item)

Every requester receives at most one item and every item goes to at most
one requester. The answer is the max flow.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

from flowmatch.algorithms.max_flow import calc_max_flow
from flowmatch.config import SOLVER_CONFIG
from flowmatch.graph.residual import EdgeIndex, NodeID, NodeRole, ResidualNetwork
from flowmatch.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class QuotaGroup:
    """A set of items of which at most ``quota`` can be handed out."""

    items: Tuple[int, ...]
    quota: int


@dataclass
class QuotaInstance:
    """Input of a quota assignment problem.

    Attributes:
        item_count: Number of items ``m``; items are numbered ``1..m``.
        requests: Acceptable item ids for each requester.
        groups: Quota groups; items outside every group have quota 1.
    """

    item_count: int
    requests: List[Sequence[int]] = field(default_factory=list)
    groups: List[QuotaGroup] = field(default_factory=list)

    def validate(self) -> None:
        """Check item ids, quotas and group membership.

        Raises:
            ValueError: On out-of-range item ids, negative quotas, or an item
                listed in more than one group or twice in the same group.
        """
        if self.item_count < 0:
            raise ValueError(f"Item count must be non-negative, got {self.item_count}.")
        for requester, items in enumerate(self.requests, start=1):
            for item in items:
                self._check_item(item, f"requester {requester}")
        owner: Dict[int, int] = {}
        for number, group in enumerate(self.groups, start=1):
            if group.quota < 0:
                raise ValueError(
                    f"Group {number} has negative quota {group.quota}."
                )
            for item in group.items:
                self._check_item(item, f"group {number}")
                previous = owner.setdefault(item, number)
                if previous != number:
                    raise ValueError(
                        f"Item {item} belongs to groups {previous} and {number}."
                    )
            # one unit edge per item into its group
            if len(set(group.items)) != len(group.items):
                repeated = sorted({i for i in group.items if group.items.count(i) > 1})
                raise ValueError(
                    f"Group {number} lists item(s) {repeated} more than once."
                )

    def _check_item(self, item: int, where: str) -> None:
        if not 1 <= item <= self.item_count:
            raise ValueError(
                f"Item {item} in {where} is outside 1..{self.item_count}."
            )


@dataclass
class QuotaResult:
    """Answer of a quota instance.

    Attributes:
        total: Number of requesters that receive an item.
        assignments: ``(requester, item)`` pairs, 1-based, sorted by requester.
    """

    total: int
    assignments: List[Tuple[int, int]] = field(default_factory=list)


@dataclass
class QuotaNetwork:
    network: ResidualNetwork
    source: NodeID
    sink: NodeID
    requesters: List[NodeID]
    items: List[NodeID]
    groups: List[NodeID]
    request_edges: Dict[EdgeIndex, Tuple[int, int]]


def build_quota_network(instance: QuotaInstance) -> QuotaNetwork:
    """Lay out the flow network for ``instance`` after validating it."""
    instance.validate()

    net = ResidualNetwork()
    source = net.add_node(NodeRole.SOURCE, "source")
    requesters = net.add_nodes(
        len(instance.requests),
        NodeRole.LEFT,
        labels=[f"requester:{i}" for i in range(1, len(instance.requests) + 1)],
    )
    items = net.add_nodes(
        instance.item_count,
        NodeRole.RIGHT,
        labels=[f"item:{i}" for i in range(1, instance.item_count + 1)],
    )
    groups = net.add_nodes(
        len(instance.groups),
        NodeRole.GROUP,
        labels=[f"group:{i}" for i in range(1, len(instance.groups) + 1)],
    )
    sink = net.add_node(NodeRole.SINK, "sink")

    request_edges: Dict[EdgeIndex, Tuple[int, int]] = {}
    for number, (node, wanted) in enumerate(zip(requesters, instance.requests), start=1):
        net.add_edge(source, node, SOLVER_CONFIG.requester_capacity)
        for item in wanted:
            edge = net.add_edge(node, items[item - 1], 1)
            request_edges[edge] = (number, item)

    grouped = set()
    for node, group in zip(groups, instance.groups):
        for item in group.items:
            net.add_edge(items[item - 1], node, 1)
            grouped.add(item)
        net.add_edge(node, sink, group.quota)

    for item in range(1, instance.item_count + 1):
        if item not in grouped:
            net.add_edge(items[item - 1], sink, SOLVER_CONFIG.ungrouped_item_quota)

    logger.debug(
        "Quota network: %d requester(s), %d item(s), %d group(s), %d arc(s)",
        len(requesters),
        len(items),
        len(groups),
        net.num_edges,
    )
    return QuotaNetwork(net, source, sink, requesters, items, groups, request_edges)


def solve_quota(instance: QuotaInstance) -> QuotaResult:
    """Maximum number of requesters that can be served.

    Example:
        >>> solve_quota(QuotaInstance(item_count=1, requests=[[1], [1]])).total
        1
    """
    layout = build_quota_network(instance)
    total = calc_max_flow(layout.network, layout.source, layout.sink)

    arena = layout.network.arena
    assignments = sorted(
        pair
        for edge, pair in layout.request_edges.items()
        if arena[edge].flow > 0
    )
    return QuotaResult(total=total, assignments=assignments)
