import pytest

from flowmatch.adapters.quota import (
    QuotaGroup,
    QuotaInstance,
    build_quota_network,
    solve_quota,
)
from flowmatch.algorithms.max_flow import calc_max_flow
from flowmatch.algorithms.validation import validate_flow
from flowmatch.config import SOLVER_CONFIG
from flowmatch.graph.residual import NodeRole


def _assert_consistent(instance, result):
    requesters = [r for r, _ in result.assignments]
    items = [i for _, i in result.assignments]
    assert len(result.assignments) == result.total
    assert len(set(requesters)) == len(requesters)
    assert len(set(items)) == len(items)
    for requester, item in result.assignments:
        assert item in instance.requests[requester - 1]
    for group in instance.groups:
        assert sum(1 for i in items if i in group.items) <= group.quota


class TestSolveQuota:
    def test_two_requesters_one_item(self):
        instance = QuotaInstance(item_count=1, requests=[[1], [1]])
        result = solve_quota(instance)
        assert result.total == 1
        _assert_consistent(instance, result)

    def test_group_quota_limits_total(self):
        instance = QuotaInstance(
            item_count=3,
            requests=[[1, 2], [1, 2], [3], [3]],
            groups=[QuotaGroup(items=(1, 2), quota=1)],
        )
        result = solve_quota(instance)
        assert result.total == 2
        _assert_consistent(instance, result)

    def test_quota_zero_group_blocks_items(self):
        instance = QuotaInstance(
            item_count=2,
            requests=[[1], [1, 2]],
            groups=[QuotaGroup(items=(1,), quota=0)],
        )
        result = solve_quota(instance)
        assert result.total == 1
        assert result.assignments == [(2, 2)]

    def test_everyone_served(self):
        instance = QuotaInstance(
            item_count=3,
            requests=[[1, 2, 3], [1], [2]],
            groups=[QuotaGroup(items=(1, 2, 3), quota=3)],
        )
        result = solve_quota(instance)
        assert result.total == 3
        assert result.assignments == [(1, 3), (2, 1), (3, 2)]

    def test_requester_without_requests(self):
        instance = QuotaInstance(item_count=1, requests=[[], [1]])
        assert solve_quota(instance).assignments == [(2, 1)]

    def test_empty_instance(self):
        result = solve_quota(QuotaInstance(item_count=0))
        assert result.total == 0
        assert result.assignments == []

    def test_requester_capacity_from_config(self, monkeypatch):
        monkeypatch.setattr(SOLVER_CONFIG, "requester_capacity", 2)
        result = solve_quota(QuotaInstance(item_count=2, requests=[[1, 2]]))
        assert result.total == 2
        assert result.assignments == [(1, 1), (1, 2)]

    def test_ungrouped_item_quota_from_config(self, monkeypatch):
        monkeypatch.setattr(SOLVER_CONFIG, "ungrouped_item_quota", 2)
        result = solve_quota(QuotaInstance(item_count=1, requests=[[1], [1]]))
        # Item 1 may now go to both requesters.
        assert result.total == 2
        assert result.assignments == [(1, 1), (2, 1)]


class TestQuotaNetwork:
    def test_layout(self):
        instance = QuotaInstance(
            item_count=3,
            requests=[[1], [2, 3]],
            groups=[QuotaGroup(items=(1, 2), quota=1)],
        )
        layout = build_quota_network(instance)
        net = layout.network
        assert net.role(layout.source) == NodeRole.SOURCE
        assert net.role(layout.sink) == NodeRole.SINK
        assert [net.role(n) for n in layout.requesters] == [NodeRole.LEFT] * 2
        assert [net.label(n) for n in layout.items] == ["item:1", "item:2", "item:3"]
        assert len(layout.groups) == 1
        # 2 source edges, 3 request edges, 2 item->group, 1 group->sink,
        # 1 ungrouped item->sink.
        assert net.num_edges == 2 * 9
        assert sorted(layout.request_edges.values()) == [(1, 1), (2, 2), (2, 3)]

    def test_flow_is_valid(self):
        instance = QuotaInstance(
            item_count=3,
            requests=[[1, 2], [1, 2], [3], [3]],
            groups=[QuotaGroup(items=(1, 2), quota=1)],
        )
        layout = build_quota_network(instance)
        assert calc_max_flow(layout.network, layout.source, layout.sink) == 2
        validate_flow(layout.network, layout.source, layout.sink)


class TestQuotaValidation:
    def test_item_out_of_range(self):
        with pytest.raises(ValueError, match="outside 1..2"):
            solve_quota(QuotaInstance(item_count=2, requests=[[3]]))
        with pytest.raises(ValueError, match="requester 1"):
            solve_quota(QuotaInstance(item_count=2, requests=[[0]]))

    def test_group_item_out_of_range(self):
        instance = QuotaInstance(
            item_count=1, groups=[QuotaGroup(items=(2,), quota=1)]
        )
        with pytest.raises(ValueError, match="group 1"):
            instance.validate()

    def test_negative_quota(self):
        instance = QuotaInstance(
            item_count=1, groups=[QuotaGroup(items=(1,), quota=-1)]
        )
        with pytest.raises(ValueError, match="negative quota"):
            instance.validate()

    def test_item_in_two_groups(self):
        instance = QuotaInstance(
            item_count=2,
            groups=[QuotaGroup(items=(1, 2), quota=1), QuotaGroup(items=(2,), quota=1)],
        )
        with pytest.raises(ValueError, match="belongs to groups 1 and 2"):
            instance.validate()

    def test_negative_item_count(self):
        with pytest.raises(ValueError, match="non-negative"):
            QuotaInstance(item_count=-1).validate()

    def test_item_repeated_in_one_group(self):
        instance = QuotaInstance(
            item_count=1,
            requests=[[1], [1]],
            groups=[QuotaGroup(items=(1, 1), quota=5)],
        )
        with pytest.raises(
            ValueError, match=r"Group 1 lists item\(s\) \[1\] more than once"
        ):
            solve_quota(instance)
