"""Residual network with an index-addressed edge arena.

`ResidualNetwork` owns every edge of a flow instance in one contiguous list.
Each logical edge is stored as a forward/reverse pair; both halves carry the
arena index of their partner (``mirror``), so a flow update touches the pair
in O(1) without object cycles. Node identifiers are dense integers handed out
by the network itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Hashable, Iterator, List, Optional, Sequence

NodeID = int
EdgeIndex = int


class InvalidCapacityError(ValueError):
    """Raised when an edge is given a negative or non-integer capacity."""


class FlowInvariantError(RuntimeError):
    """Raised when an operation would break a residual-network invariant.

    Covers pushing more than the residual capacity, negative pushes, and
    references to edges that do not exist. Correct callers never trigger it.
    """


class NodeRole(IntEnum):
    """Role tag attached to every node of a network."""

    INTERNAL = 0
    SOURCE = 1
    SINK = 2
    LEFT = 3
    RIGHT = 4
    GROUP = 5


@dataclass(slots=True)
class Edge:
    """One directed arc of the residual network.

    Attributes:
        src: Tail node.
        dst: Head node.
        capacity: Capacity of the arc; 0 for the reverse half of a pair.
        flow: Current flow. Reverse halves carry the negated forward flow.
        mirror: Arena index of the partner arc.
        forward: True for the half created with the caller's capacity.
    """

    src: NodeID
    dst: NodeID
    capacity: int
    flow: int
    mirror: EdgeIndex
    forward: bool

    @property
    def residual(self) -> int:
        return self.capacity - self.flow


class ResidualNetwork:
    """Adjacency-list residual network.

    The network is append-only: nodes and edges can be added, never removed.
    Flow changes only through ``push_flow``.

    Example:
        >>> net = ResidualNetwork()
        >>> s, t = net.add_node(NodeRole.SOURCE), net.add_node(NodeRole.SINK)
        >>> e = net.add_edge(s, t, 3)
        >>> net.push_flow(e, 2)
        >>> net.residual_capacity(e)
        1
    """

    def __init__(self, num_nodes: int = 0) -> None:
        self._edges: List[Edge] = []
        self._adj: List[List[EdgeIndex]] = []
        self._roles: List[NodeRole] = []
        self._labels: List[Optional[Hashable]] = []
        if num_nodes:
            self.add_nodes(num_nodes)

    #
    # Node management
    #
    def add_node(
        self, role: NodeRole = NodeRole.INTERNAL, label: Optional[Hashable] = None
    ) -> NodeID:
        """Allocate a new node and return its identifier."""
        node = len(self._adj)
        self._adj.append([])
        self._roles.append(NodeRole(role))
        self._labels.append(label)
        return node

    def add_nodes(
        self,
        count: int,
        role: NodeRole = NodeRole.INTERNAL,
        labels: Optional[Sequence[Hashable]] = None,
    ) -> List[NodeID]:
        """Allocate ``count`` nodes sharing one role.

        Args:
            count: Number of nodes to add.
            role: Role tag for every new node.
            labels: Optional per-node labels; must have ``count`` entries.

        Returns:
            Identifiers of the new nodes in allocation order.

        Raises:
            ValueError: If ``count`` is negative or labels have the wrong length.
        """
        if count < 0:
            raise ValueError(f"Node count must be non-negative, got {count}.")
        if labels is not None and len(labels) != count:
            raise ValueError(
                f"Expected {count} labels, got {len(labels)}."
            )
        return [
            self.add_node(role, labels[i] if labels is not None else None)
            for i in range(count)
        ]

    @property
    def num_nodes(self) -> int:
        return len(self._adj)

    def __len__(self) -> int:
        return len(self._adj)

    def __contains__(self, node: object) -> bool:
        return isinstance(node, int) and 0 <= node < len(self._adj)

    def role(self, node: NodeID) -> NodeRole:
        self._check_node(node)
        return self._roles[node]

    def label(self, node: NodeID) -> Optional[Hashable]:
        self._check_node(node)
        return self._labels[node]

    def nodes_with_role(self, role: NodeRole) -> List[NodeID]:
        return [n for n, r in enumerate(self._roles) if r == role]

    #
    # Edge management
    #
    def add_edge(self, src: NodeID, dst: NodeID, capacity: int) -> EdgeIndex:
        """Add a directed edge and its zero-capacity reverse partner.

        Args:
            src: Tail node.
            dst: Head node.
            capacity: Non-negative integer capacity.

        Returns:
            Arena index of the forward edge. The reverse edge sits at
            ``mirror(index)``.

        Raises:
            InvalidCapacityError: If capacity is negative or not an integer.
            ValueError: If either endpoint does not exist.
        """
        if isinstance(capacity, bool) or not isinstance(capacity, int):
            raise InvalidCapacityError(
                f"Capacity must be an integer, got {capacity!r}."
            )
        if capacity < 0:
            raise InvalidCapacityError(
                f"Capacity must be non-negative, got {capacity} on edge {src}->{dst}."
            )
        self._check_node(src)
        self._check_node(dst)

        fwd = len(self._edges)
        rev = fwd + 1
        self._edges.append(Edge(src, dst, capacity, 0, rev, True))
        self._edges.append(Edge(dst, src, 0, 0, fwd, False))
        self._adj[src].append(fwd)
        self._adj[dst].append(rev)
        return fwd

    @property
    def num_edges(self) -> int:
        """Number of arcs in the arena, reverse halves included."""
        return len(self._edges)

    def edge(self, index: EdgeIndex) -> Edge:
        self._check_edge(index)
        return self._edges[index]

    def mirror(self, index: EdgeIndex) -> EdgeIndex:
        self._check_edge(index)
        return self._edges[index].mirror

    def out_edges(self, node: NodeID) -> List[EdgeIndex]:
        """Arena indices of all arcs leaving ``node``, reverse halves included."""
        self._check_node(node)
        return self._adj[node]

    def forward_edges(self) -> Iterator[EdgeIndex]:
        """Iterate arena indices of forward edges in insertion order."""
        return (i for i, e in enumerate(self._edges) if e.forward)

    def residual_capacity(self, index: EdgeIndex) -> int:
        self._check_edge(index)
        return self._edges[index].residual

    def push_flow(self, index: EdgeIndex, amount: int) -> None:
        """Push ``amount`` units along an arc and cancel them on its mirror.

        Raises:
            FlowInvariantError: If the arc does not exist, ``amount`` is
                negative, or ``amount`` exceeds the residual capacity.
        """
        self._check_edge(index)
        edge = self._edges[index]
        if amount < 0:
            raise FlowInvariantError(
                f"Cannot push negative flow {amount} on edge {index}."
            )
        if amount > edge.capacity - edge.flow:
            raise FlowInvariantError(
                f"Push of {amount} exceeds residual capacity "
                f"{edge.capacity - edge.flow} on edge {index} ({edge.src}->{edge.dst})."
            )
        edge.flow += amount
        self._edges[edge.mirror].flow -= amount

    #
    # Internal accessors used by the algorithms
    #
    @property
    def arena(self) -> List[Edge]:
        """The edge arena itself; algorithms read it without bounds checks."""
        return self._edges

    @property
    def adjacency(self) -> List[List[EdgeIndex]]:
        return self._adj

    def _check_node(self, node: NodeID) -> None:
        if node not in self:
            raise ValueError(f"Node {node!r} does not exist.")

    def _check_edge(self, index: EdgeIndex) -> None:
        if (
            isinstance(index, bool)
            or not isinstance(index, int)
            or not 0 <= index < len(self._edges)
        ):
            raise FlowInvariantError(f"Edge index {index!r} does not exist.")
