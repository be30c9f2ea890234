"""Expression matching: give every pair an operation with a unique result.

Left nodes are the input pairs (duplicates stay separate), right nodes are
the distinct results across all pairs. A perfect matching is an answer; any
pair left without a saturated edge makes the whole instance impossible.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import AbstractSet, Dict, Iterable, List, Optional, Tuple

from flowmatch.adapters.bipartite import BipartiteMatcher
from flowmatch.graph.residual import EdgeIndex, NodeID
from flowmatch.logging import get_logger
from flowmatch.model.expressions import (
    DEFAULT_OPERATIONS,
    Assignment,
    ExpressionPair,
    Operation,
)

logger = get_logger(__name__)


@dataclass
class MatchingResult:
    """Outcome of an expression matching instance.

    Attributes:
        feasible: False when some pair cannot receive a unique result.
        assignments: One entry per input pair in input order; empty when
            infeasible.
        unmatched: Input positions of pairs left without a result.
    """

    feasible: bool
    assignments: List[Assignment] = field(default_factory=list)
    unmatched: List[int] = field(default_factory=list)

    def lines(self) -> List[str]:
        if not self.feasible:
            return ["impossible"]
        return [str(assignment) for assignment in self.assignments]


@dataclass
class ExpressionGraph:
    """Matching network for a list of pairs plus the lookup tables to read it."""

    pairs: List[ExpressionPair]
    matcher: BipartiteMatcher
    pair_nodes: List[NodeID]
    result_nodes: Dict[int, NodeID]
    edge_labels: Dict[EdgeIndex, Tuple[Operation, int]]


def build_expression_graph(
    pairs: Iterable[ExpressionPair | Tuple[int, int]],
    operations: Tuple[Operation, ...] = DEFAULT_OPERATIONS,
) -> ExpressionGraph:
    """Build the bipartite network for ``pairs``.

    Args:
        pairs: Input pairs; plain ``(a, b)`` tuples are accepted.
        operations: Operations to consider, in tie-break order.

    Returns:
        ExpressionGraph ready to be solved.
    """
    if not operations:
        raise ValueError("At least one operation is required.")
    normalized = [
        p if isinstance(p, ExpressionPair) else ExpressionPair(*p) for p in pairs
    ]

    matcher = BipartiteMatcher()
    pair_nodes: List[NodeID] = []
    result_nodes: Dict[int, NodeID] = {}
    edge_labels: Dict[EdgeIndex, Tuple[Operation, int]] = {}

    for position, pair in enumerate(normalized):
        left = matcher.add_left(position)
        pair_nodes.append(left)
        for value, op in pair.results(operations).items():
            right = result_nodes.get(value)
            if right is None:
                right = matcher.add_right(value)
                result_nodes[value] = right
            edge_labels[matcher.connect(left, right)] = (op, value)

    logger.debug(
        "Expression graph: %d pair(s), %d distinct result(s), %d edge(s)",
        len(pair_nodes),
        len(result_nodes),
        len(edge_labels),
    )
    return ExpressionGraph(normalized, matcher, pair_nodes, result_nodes, edge_labels)


def extract_assignments(graph: ExpressionGraph) -> MatchingResult:
    """Read the chosen operation of every pair off the saturated edges."""
    matching = graph.matcher.matching()
    unmatched = [
        position
        for position, node in enumerate(graph.pair_nodes)
        if node not in matching
    ]
    if unmatched:
        logger.info(
            "Expression matching impossible: %d of %d pair(s) without a result",
            len(unmatched),
            len(graph.pair_nodes),
        )
        return MatchingResult(feasible=False, unmatched=unmatched)

    assignments = []
    for pair, node in zip(graph.pairs, graph.pair_nodes):
        op, value = graph.edge_labels[matching[node]]
        assignments.append(Assignment(pair, op, value))
    return MatchingResult(feasible=True, assignments=assignments)


def solve_expression_matching(
    pairs: Iterable[ExpressionPair | Tuple[int, int]],
    operations: Tuple[Operation, ...] = DEFAULT_OPERATIONS,
    excluded_results: Optional[AbstractSet[int]] = None,
) -> MatchingResult:
    """Assign an operation to every pair so that all results differ.

    Args:
        pairs: Input pairs in output order.
        operations: Operations to consider, in tie-break order.
        excluded_results: Result values that may not be used in this run.

    Returns:
        MatchingResult; ``feasible`` is False when no full assignment exists.

    Example:
        >>> result = solve_expression_matching([(1, 2), (1, 2), (2, 3)])
        >>> result.feasible
        True
    """
    graph = build_expression_graph(pairs, operations)
    excluded = {
        graph.result_nodes[value]
        for value in (excluded_results or ())
        if value in graph.result_nodes
    }
    graph.matcher.solve(excluded=excluded)
    return extract_assignments(graph)
