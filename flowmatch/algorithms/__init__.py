from flowmatch.algorithms.bfs import assign_levels
from flowmatch.algorithms.blocking_flow import BlockingFlow
from flowmatch.algorithms.max_flow import (
    calc_max_flow,
    min_cut,
    residual_reachable,
    saturated_edges,
)
from flowmatch.algorithms.types import FlowSummary
from flowmatch.algorithms.validation import net_outflow, node_balances, validate_flow

__all__ = [
    "assign_levels",
    "BlockingFlow",
    "calc_max_flow",
    "min_cut",
    "residual_reachable",
    "saturated_edges",
    "FlowSummary",
    "net_outflow",
    "node_balances",
    "validate_flow",
]
