"""Arithmetic expression model for the expression matching problem."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple


class Operation(Enum):
    """Binary operations a pair may be combined with."""

    ADD = "+"
    SUB = "-"
    MUL = "*"

    def apply(self, a: int, b: int) -> int:
        if self is Operation.ADD:
            return a + b
        if self is Operation.SUB:
            return a - b
        return a * b

    def __str__(self) -> str:
        return self.value


#: Operations tried for every pair, in tie-break order.
DEFAULT_OPERATIONS: Tuple[Operation, ...] = (
    Operation.ADD,
    Operation.SUB,
    Operation.MUL,
)


@dataclass(frozen=True)
class ExpressionPair:
    """Operands of one input line."""

    a: int
    b: int

    def results(
        self, operations: Tuple[Operation, ...] = DEFAULT_OPERATIONS
    ) -> Dict[int, Operation]:
        """Distinct results reachable from this pair.

        When several operations give the same value, the first one in
        ``operations`` is kept.
        """
        found: Dict[int, Operation] = {}
        for op in operations:
            found.setdefault(op.apply(self.a, self.b), op)
        return found


@dataclass(frozen=True)
class Assignment:
    """A pair together with the operation chosen for it."""

    pair: ExpressionPair
    operation: Operation
    result: int

    def __str__(self) -> str:
        return f"{self.pair.a} {self.operation} {self.pair.b} = {self.result}"
