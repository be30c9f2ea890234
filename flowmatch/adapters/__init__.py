from flowmatch.adapters.bipartite import BipartiteMatcher
from flowmatch.adapters.matching import (
    ExpressionGraph,
    MatchingResult,
    build_expression_graph,
    extract_assignments,
    solve_expression_matching,
)
from flowmatch.adapters.quota import (
    QuotaGroup,
    QuotaInstance,
    QuotaNetwork,
    QuotaResult,
    build_quota_network,
    solve_quota,
)

__all__ = [
    "BipartiteMatcher",
    "ExpressionGraph",
    "MatchingResult",
    "build_expression_graph",
    "extract_assignments",
    "solve_expression_matching",
    "QuotaGroup",
    "QuotaInstance",
    "QuotaNetwork",
    "QuotaResult",
    "build_quota_network",
    "solve_quota",
]
