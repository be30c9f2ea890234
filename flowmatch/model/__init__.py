from flowmatch.model.expressions import (
    DEFAULT_OPERATIONS,
    Assignment,
    ExpressionPair,
    Operation,
)

__all__ = ["DEFAULT_OPERATIONS", "Assignment", "ExpressionPair", "Operation"]
