"""Line-oriented text formats for the matching and quota problems.

Matching input::

    3
    1 2
    1 2
    2 3

Quota input (``n m p``, then ``n`` requester lines ``k t1..tk``, then ``p``
group lines ``k t1..tk quota``)::

    2 1 0
    1 1
    1 1
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator, List, Tuple, Union

from flowmatch.adapters.matching import MatchingResult
from flowmatch.adapters.quota import QuotaGroup, QuotaInstance, QuotaResult
from flowmatch.graph.residual import ResidualNetwork
from flowmatch.lib.nx import EdgeMap, NodeMap, from_networkx, read_edgelist
from flowmatch.model.expressions import ExpressionPair


class InputFormatError(ValueError):
    """Raised when problem input does not follow its text format."""

    def __init__(self, message: str, line: int | None = None) -> None:
        self.line = line
        prefix = f"line {line}: " if line is not None else ""
        super().__init__(prefix + message)


class _Lines:
    """Iterator over non-blank lines that remembers 1-based line numbers."""

    def __init__(self, text: str) -> None:
        self._lines: Iterator[Tuple[int, str]] = (
            (number, line)
            for number, line in enumerate(text.splitlines(), start=1)
            if line.strip()
        )
        self.last = 0

    def ints(self, what: str) -> List[int]:
        try:
            number, line = next(self._lines)
        except StopIteration:
            raise InputFormatError(
                f"unexpected end of input, expected {what}", self.last + 1
            ) from None
        self.last = number
        try:
            return [int(token) for token in line.split()]
        except ValueError:
            raise InputFormatError(
                f"expected integers for {what}, got {line.strip()!r}", number
            ) from None

    def ensure_exhausted(self) -> None:
        for number, line in self._lines:
            raise InputFormatError(f"unexpected trailing input {line.strip()!r}", number)


def _count(value: int, what: str, line: int) -> int:
    if value < 0:
        raise InputFormatError(f"{what} must be non-negative, got {value}", line)
    return value


def parse_matching_input(text: str) -> List[ExpressionPair]:
    """Parse a pair count followed by one ``a b`` line per pair."""
    lines = _Lines(text)
    header = lines.ints("pair count")
    if len(header) != 1:
        raise InputFormatError("expected a single pair count", lines.last)
    count = _count(header[0], "pair count", lines.last)

    pairs = []
    for _ in range(count):
        values = lines.ints("a pair")
        if len(values) != 2:
            raise InputFormatError(
                f"expected two integers, got {len(values)}", lines.last
            )
        pairs.append(ExpressionPair(values[0], values[1]))
    lines.ensure_exhausted()
    return pairs


def format_matching_result(result: MatchingResult) -> str:
    return "\n".join(result.lines())


def parse_quota_input(text: str) -> QuotaInstance:
    """Parse a quota instance; item ids are checked against ``m``."""
    lines = _Lines(text)
    header = lines.ints("'n m p' header")
    if len(header) != 3:
        raise InputFormatError(
            f"expected 'n m p' header, got {len(header)} value(s)", lines.last
        )
    n, m, p = (_count(v, name, lines.last) for v, name in zip(header, "nmp"))

    requests = []
    for _ in range(n):
        values = lines.ints("a requester line")
        k = _count(values[0], "item count", lines.last) if values else -1
        if k < 0 or len(values) != k + 1:
            raise InputFormatError(
                "requester line must be a count followed by that many item ids",
                lines.last,
            )
        requests.append(values[1:])

    groups = []
    for _ in range(p):
        values = lines.ints("a group line")
        k = _count(values[0], "item count", lines.last) if values else -1
        if k < 0 or len(values) != k + 2:
            raise InputFormatError(
                "group line must be a count, that many item ids, and a quota",
                lines.last,
            )
        groups.append(QuotaGroup(items=tuple(values[1 : k + 1]), quota=values[-1]))
    lines.ensure_exhausted()

    instance = QuotaInstance(item_count=m, requests=requests, groups=groups)
    try:
        instance.validate()
    except ValueError as exc:
        raise InputFormatError(str(exc)) from exc
    return instance


def format_quota_result(result: QuotaResult, assignments: bool = False) -> str:
    lines = [str(result.total)]
    if assignments:
        lines.extend(f"{requester} {item}" for requester, item in result.assignments)
    return "\n".join(lines)


def load_edge_list(
    path: Union[str, Path],
) -> Tuple[ResidualNetwork, NodeMap, EdgeMap]:
    """Read a ``u v capacity`` edge list file into a residual network.

    A bare ``u v`` line is an edge of capacity 1.

    Raises:
        InputFormatError: If a line is not ``u v capacity`` with an integer
            capacity, or the file has no edges.
    """
    try:
        graph = read_edgelist(path)
    except (TypeError, IndexError) as exc:
        raise InputFormatError(f"{path}: {exc}") from exc
    if graph.number_of_nodes() == 0:
        raise InputFormatError(f"{path}: no edges found")
    return from_networkx(graph)
