"""NetworkX graph conversion utilities.

This module converts between NetworkX graphs and the residual network used
by the flowmatch algorithms.

Example:
    >>> import networkx as nx
    >>> from flowmatch.lib.nx import from_networkx, to_networkx
    >>>
    >>> G = nx.DiGraph()
    >>> G.add_edge("A", "B", capacity=100)
    >>> G.add_edge("B", "C", capacity=50)
    >>>
    >>> network, node_map, edge_map = from_networkx(G)
    >>> # ... run calc_max_flow(network, node_map.to_index["A"], ...) ...
    >>> G_out = to_networkx(network, node_map)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Hashable, List, Optional, Tuple, Union

from flowmatch.graph.residual import InvalidCapacityError, ResidualNetwork

if TYPE_CHECKING:
    import networkx as nx

    NxGraph = Union[nx.DiGraph, nx.MultiDiGraph, nx.Graph, nx.MultiGraph]
else:
    NxGraph = Any


@dataclass
class NodeMap:
    """Bidirectional mapping between node names and network node ids.

    Attributes:
        to_index: Maps original node names to node ids
        to_name: Maps node ids back to original node names

    Example:
        >>> node_map = NodeMap.from_names(["A", "B", "C"])
        >>> node_map.to_index["A"]
        0
        >>> node_map.to_name[1]
        'B'
    """

    to_index: Dict[Hashable, int] = field(default_factory=dict)
    to_name: Dict[int, Hashable] = field(default_factory=dict)

    @classmethod
    def from_names(cls, names: List[Hashable]) -> "NodeMap":
        to_index = {name: i for i, name in enumerate(names)}
        to_name = {i: name for i, name in enumerate(names)}
        return cls(to_index=to_index, to_name=to_name)

    def __len__(self) -> int:
        return len(self.to_index)


# Type alias for edge references: (source_node, target_node, edge_key)
EdgeRef = Tuple[Hashable, Hashable, Any]


@dataclass
class EdgeMap:
    """Mapping between forward edge indices and original edge references.

    Attributes:
        to_ref: Maps forward arena index to the original (source, target, key)
        from_ref: Maps original (source, target, key) to forward arena indices
            (two indices for undirected input graphs)
    """

    to_ref: Dict[int, EdgeRef] = field(default_factory=dict)
    from_ref: Dict[EdgeRef, List[int]] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.to_ref)


def _as_capacity(value: Any, ref: EdgeRef) -> int:
    try:
        as_int = int(value)
    except (TypeError, ValueError, OverflowError) as exc:
        raise InvalidCapacityError(
            f"Edge {ref} has non-integer capacity {value!r}."
        ) from exc
    if as_int != value:
        raise InvalidCapacityError(f"Edge {ref} has non-integer capacity {value!r}.")
    return as_int


def from_networkx(
    G: NxGraph,
    *,
    capacity_attr: str = "capacity",
    default_capacity: int = 1,
) -> Tuple[ResidualNetwork, NodeMap, EdgeMap]:
    """Convert a NetworkX graph to a residual network.

    Undirected graphs (Graph, MultiGraph) get one forward edge per direction.
    Node labels are kept as network labels.

    Args:
        G: NetworkX graph (DiGraph, MultiDiGraph, Graph, or MultiGraph)
        capacity_attr: Edge attribute name for capacity (default: "capacity")
        default_capacity: Capacity when the attribute is missing (default: 1)

    Returns:
        Tuple of (network, node_map, edge_map).

    Raises:
        TypeError: If G is not a NetworkX graph
        ValueError: If graph has no nodes
        InvalidCapacityError: If a capacity is negative or not integral
    """
    import networkx as nx

    if not isinstance(G, (nx.DiGraph, nx.MultiDiGraph, nx.Graph, nx.MultiGraph)):
        raise TypeError(
            f"Expected NetworkX graph (DiGraph, MultiDiGraph, Graph, MultiGraph), "
            f"got {type(G).__name__}"
        )

    if G.number_of_nodes() == 0:
        raise ValueError("Graph has no nodes")

    # Sorted for deterministic ordering
    node_names = sorted(G.nodes(), key=str)
    node_map = NodeMap.from_names(node_names)
    network = ResidualNetwork()
    network.add_nodes(len(node_names), labels=node_names)

    edge_map = EdgeMap()
    is_multigraph = isinstance(G, (nx.MultiDiGraph, nx.MultiGraph))
    if is_multigraph:
        edges_iter = G.edges(keys=True, data=True)
    else:
        edges_iter = ((u, v, 0, d) for u, v, d in G.edges(data=True))

    for u, v, key, data in edges_iter:
        edge_ref: EdgeRef = (u, v, key)
        cap = _as_capacity(data.get(capacity_attr, default_capacity), edge_ref)
        src_idx = node_map.to_index[u]
        dst_idx = node_map.to_index[v]

        directions = [(src_idx, dst_idx)]
        if not G.is_directed() and src_idx != dst_idx:
            directions.append((dst_idx, src_idx))
        for a, b in directions:
            idx = network.add_edge(a, b, cap)
            edge_map.to_ref[idx] = edge_ref
            edge_map.from_ref.setdefault(edge_ref, []).append(idx)

    return network, node_map, edge_map


def to_networkx(
    network: ResidualNetwork,
    node_map: Optional[NodeMap] = None,
    *,
    capacity_attr: str = "capacity",
    flow_attr: str = "flow",
) -> "nx.MultiDiGraph":
    """Convert a residual network back to a NetworkX MultiDiGraph.

    Only forward edges are exported; each carries its capacity and current
    flow. Edge keys are the forward arena indices.

    Args:
        network: Network to convert
        node_map: Optional NodeMap to restore original node names.
            If None, nodes are labeled 0, 1, 2, ...
        capacity_attr: Edge attribute name for capacity (default: "capacity")
        flow_attr: Edge attribute name for flow (default: "flow")

    Returns:
        nx.MultiDiGraph with one edge per forward edge of the network
    """
    import networkx as nx

    def name(idx: int) -> Hashable:
        if node_map is None:
            return idx
        return node_map.to_name.get(idx, idx)

    G = nx.MultiDiGraph()
    G.add_nodes_from(name(i) for i in range(network.num_nodes))

    arena = network.arena
    for idx in network.forward_edges():
        edge = arena[idx]
        G.add_edge(
            name(edge.src),
            name(edge.dst),
            key=idx,
            **{capacity_attr: edge.capacity, flow_attr: edge.flow},
        )
    return G


def read_edgelist(path: Any, *, capacity_attr: str = "capacity") -> "nx.MultiDiGraph":
    """Read a whitespace-separated ``u v capacity`` edge list.

    Blank lines and ``#`` comments are ignored. Node names stay strings and
    parallel edges are kept.
    """
    import networkx as nx

    return nx.read_edgelist(
        path,
        comments="#",
        create_using=nx.MultiDiGraph,
        nodetype=str,
        data=[(capacity_attr, int)],
    )
