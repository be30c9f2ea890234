import pytest

from flowmatch.adapters.matching import solve_expression_matching
from flowmatch.adapters.quota import QuotaResult, solve_quota
from flowmatch.algorithms.max_flow import calc_max_flow
from flowmatch.io import (
    InputFormatError,
    format_matching_result,
    format_quota_result,
    load_edge_list,
    parse_matching_input,
    parse_quota_input,
)
from flowmatch.model.expressions import ExpressionPair

QUOTA_SAMPLE = """\
4 3 1
2 1 2
2 1 2
1 3
1 3
2 1 2 1
"""


class TestMatchingInput:
    def test_parse(self):
        pairs = parse_matching_input("3\n1 2\n1 2\n2 3\n")
        assert pairs == [ExpressionPair(1, 2), ExpressionPair(1, 2), ExpressionPair(2, 3)]

    def test_blank_lines_skipped(self):
        assert parse_matching_input("\n2\n\n1 2\n  \n-3 4\n\n") == [
            ExpressionPair(1, 2),
            ExpressionPair(-3, 4),
        ]

    def test_zero_pairs(self):
        assert parse_matching_input("0\n") == []

    @pytest.mark.parametrize(
        "text, line, message",
        [
            ("", 1, "expected pair count"),
            ("2\n1 2\n", 3, "unexpected end of input"),
            ("1\n1 x\n", 2, "expected integers"),
            ("1\n1 2 3\n", 2, "expected two integers, got 3"),
            ("1\n1 2\n5 5\n", 3, "trailing input"),
            ("-1\n", 1, "must be non-negative"),
            ("1 2\n", 1, "single pair count"),
        ],
    )
    def test_errors_carry_line_numbers(self, text, line, message):
        with pytest.raises(InputFormatError, match=message) as exc_info:
            parse_matching_input(text)
        assert exc_info.value.line == line
        assert str(exc_info.value).startswith(f"line {line}: ")

    def test_format_result(self):
        result = solve_expression_matching(parse_matching_input("1\n2 2\n"))
        assert format_matching_result(result) == "2 + 2 = 4"

    def test_format_impossible(self):
        result = solve_expression_matching(parse_matching_input("3\n0 0\n0 0\n0 0\n"))
        assert format_matching_result(result) == "impossible"


class TestQuotaInput:
    def test_parse_sample(self):
        instance = parse_quota_input(QUOTA_SAMPLE)
        assert instance.item_count == 3
        assert instance.requests == [[1, 2], [1, 2], [3], [3]]
        assert len(instance.groups) == 1
        assert instance.groups[0].items == (1, 2)
        assert instance.groups[0].quota == 1
        assert solve_quota(instance).total == 2

    def test_requester_with_no_items(self):
        instance = parse_quota_input("1 1 0\n0\n")
        assert instance.requests == [[]]

    @pytest.mark.parametrize(
        "text, line, message",
        [
            ("4 3\n", 1, "'n m p' header"),
            ("1 1 0\n2 1\n", 2, "requester line"),
            ("1 2 1\n1 1\n2 1 2\n", 3, "group line"),
            ("1 1 0\n", 2, "requester line"),
            ("1 -1 0\n", 1, "m must be non-negative"),
            ("0 1 0\n7\n", 2, "trailing input"),
        ],
    )
    def test_format_errors(self, text, line, message):
        with pytest.raises(InputFormatError, match=message) as exc_info:
            parse_quota_input(text)
        assert exc_info.value.line == line

    def test_item_out_of_range(self):
        with pytest.raises(InputFormatError, match="outside 1..1") as exc_info:
            parse_quota_input("1 1 0\n1 2\n")
        assert exc_info.value.line is None

    def test_item_in_two_groups(self):
        with pytest.raises(InputFormatError, match="belongs to groups"):
            parse_quota_input("0 2 2\n1 1 1\n2 1 2 1\n")

    def test_item_repeated_in_one_group(self):
        # A repeat would give the item two edges into its group.
        with pytest.raises(InputFormatError, match="more than once") as exc_info:
            parse_quota_input("2 1 1\n1 1\n1 1\n2 1 1 5\n")
        assert exc_info.value.line is None

    def test_input_format_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_quota_input("nonsense\n")

    def test_format_result(self):
        result = QuotaResult(total=2, assignments=[(1, 1), (3, 3)])
        assert format_quota_result(result) == "2"
        assert format_quota_result(result, assignments=True) == "2\n1 1\n3 3"


class TestEdgeListInput:
    def test_load(self, tmp_path):
        path = tmp_path / "net.txt"
        path.write_text("s a 3\ns b 2\na t 2\nb t 3\na b 1\n")
        network, node_map, edge_map = load_edge_list(path)
        assert network.num_nodes == 4
        assert len(edge_map) == 5
        assert calc_max_flow(network, node_map.to_index["s"], node_map.to_index["t"]) == 5

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.txt"
        path.write_text("# nothing here\n")
        with pytest.raises(InputFormatError, match="no edges found"):
            load_edge_list(path)

    @pytest.mark.parametrize("content", ["s t many\n", "s t 1 2\n"])
    def test_bad_lines(self, tmp_path, content):
        path = tmp_path / "bad.txt"
        path.write_text(content)
        with pytest.raises(InputFormatError):
            load_edge_list(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_edge_list(tmp_path / "missing.txt")
