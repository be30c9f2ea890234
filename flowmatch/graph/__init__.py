from flowmatch.graph.residual import (
    Edge,
    EdgeIndex,
    FlowInvariantError,
    InvalidCapacityError,
    NodeID,
    NodeRole,
    ResidualNetwork,
)

__all__ = [
    "Edge",
    "EdgeIndex",
    "FlowInvariantError",
    "InvalidCapacityError",
    "NodeID",
    "NodeRole",
    "ResidualNetwork",
]
