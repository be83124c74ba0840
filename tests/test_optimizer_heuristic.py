from __future__ import annotations

from processes.optimizer.heuristic import heuristic_search
from processes.optimizer.types import MSG_HEURISTIC, MSG_INFEASIBLE, Item


def _ids(result) -> list[str]:
    return [it.id for it in result.selected_items]


def test_greedy_stops_once_floor_reached():
    items = [Item("c", 10, 10), Item("b", 1, 5), Item("a", 1, 10)]

    result = heuristic_search(12, 20, items)

    assert result.success
    assert _ids(result) == ["a", "b"]
    assert result.total_weight == 2
    assert result.total_value == 15
    assert result.message == MSG_HEURISTIC


def test_backward_pass_drops_redundant_items():
    # Greedy picks p, t, then q; q alone already meets the floor
    items = [Item("q", 10, 20), Item("t", 1, 2.5), Item("p", 1, 3)]

    result = heuristic_search(20, 100, items)

    assert _ids(result) == ["q"]
    assert result.total_weight == 10
    assert result.total_value == 20


def test_items_over_remaining_capacity_skipped():
    items = [Item("big", 50, 100), Item("small", 1, 1), Item("mid", 4, 6)]

    result = heuristic_search(7, 10, items)

    assert result.success
    assert "big" not in _ids(result)
    assert result.total_weight <= 10
    assert result.total_value >= 7


def test_infeasible_when_floor_not_reached():
    items = [Item("a", 1, 1), Item("b", 1, 1)]

    result = heuristic_search(5, 10, items)

    assert not result.success
    assert result.message == MSG_INFEASIBLE
    assert result.selected_items == ()
    assert result.total_weight == 0
    assert result.total_value == 0


def test_equal_ratios_keep_input_order():
    u = Item("u", 1, 2)
    v = Item("v", 2, 4)
    w = Item("w", 1, 1)

    assert _ids(heuristic_search(2, 10, [u, v, w])) == ["u"]
    assert _ids(heuristic_search(2, 10, [v, u, w])) == ["v"]


def test_result_is_feasible_on_larger_input():
    items = [Item(f"S{i}", 1 + (i % 5), 2 + (i % 7)) for i in range(40)]

    result = heuristic_search(30, 25, items)

    assert result.success
    assert result.total_value >= 30
    assert result.total_weight <= 25
