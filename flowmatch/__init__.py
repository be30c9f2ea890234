"""flowmatch: maximum flow for matching and quota assignment problems.

flowmatch computes maximum flow with Dinic's algorithm over an integer
residual network and reads assignments back from saturated edges.

Primary API:
    ResidualNetwork - Edge arena with forward/reverse pairs
    calc_max_flow() - Dinic's max flow, optionally with a FlowSummary
    BipartiteMatcher - Unit-capacity bipartite matching
    solve_expression_matching() - Pick + - * per pair with unique results
    solve_quota() - Serve requesters under per-group item quotas

Example:
    from flowmatch import ResidualNetwork, calc_max_flow

    net = ResidualNetwork(4)
    net.add_edge(0, 1, 3)
    net.add_edge(0, 2, 2)
    net.add_edge(1, 3, 2)
    net.add_edge(2, 3, 3)
    calc_max_flow(net, 0, 3)  # 4
"""

from __future__ import annotations

from flowmatch import cli, logging
from flowmatch._version import __version__
from flowmatch.adapters.bipartite import BipartiteMatcher
from flowmatch.adapters.matching import MatchingResult, solve_expression_matching
from flowmatch.adapters.quota import QuotaGroup, QuotaInstance, QuotaResult, solve_quota
from flowmatch.algorithms.max_flow import calc_max_flow, min_cut, saturated_edges
from flowmatch.algorithms.types import FlowSummary
from flowmatch.algorithms.validation import validate_flow
from flowmatch.config import SOLVER_CONFIG, SolverConfig
from flowmatch.graph.residual import (
    FlowInvariantError,
    InvalidCapacityError,
    NodeRole,
    ResidualNetwork,
)
from flowmatch.io import InputFormatError
from flowmatch.lib.nx import EdgeMap, NodeMap, from_networkx, to_networkx
from flowmatch.model.expressions import Assignment, ExpressionPair, Operation

__all__ = [
    # Version
    "__version__",
    # Network
    "ResidualNetwork",
    "NodeRole",
    # Algorithms
    "calc_max_flow",
    "min_cut",
    "saturated_edges",
    "validate_flow",
    "FlowSummary",
    # Problems
    "BipartiteMatcher",
    "ExpressionPair",
    "Operation",
    "Assignment",
    "MatchingResult",
    "solve_expression_matching",
    "QuotaGroup",
    "QuotaInstance",
    "QuotaResult",
    "solve_quota",
    # Errors
    "FlowInvariantError",
    "InvalidCapacityError",
    "InputFormatError",
    # Configuration
    "SolverConfig",
    "SOLVER_CONFIG",
    # Library integrations (NetworkX)
    "EdgeMap",
    "NodeMap",
    "from_networkx",
    "to_networkx",
    # Utilities
    "cli",
    "logging",
]
