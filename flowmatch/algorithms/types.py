"""Types and data structures for max-flow results.

Defines immutable summary containers for algorithm outputs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, List

from flowmatch.graph.residual import EdgeIndex, NodeID


@dataclass(frozen=True)
class FlowSummary:
    """Summary of a max-flow computation.

    Attributes:
        total_flow: Flow pushed by the computation.
        phases: Number of BFS phases that reached the sink.
        augmentations: Number of augmenting paths applied.
        edge_flow: Flow per forward edge, keyed by arena index.
        residual_cap: Remaining capacity per forward edge.
        reachable: Nodes reachable from the source in the final residual network.
        min_cut: Forward edges leaving the reachable set; all are saturated.
    """

    total_flow: int
    phases: int
    augmentations: int
    edge_flow: Dict[EdgeIndex, int]
    residual_cap: Dict[EdgeIndex, int]
    reachable: FrozenSet[NodeID]
    min_cut: List[EdgeIndex]

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-friendly representation."""
        return {
            "total_flow": self.total_flow,
            "phases": self.phases,
            "augmentations": self.augmentations,
            "edge_flow": {str(k): v for k, v in self.edge_flow.items()},
            "residual_cap": {str(k): v for k, v in self.residual_cap.items()},
            "reachable": sorted(self.reachable),
            "min_cut": list(self.min_cut),
        }
