"""Ratio-greedy selection with a single backward pruning pass.

Used for candidate sets too large to enumerate. The result is feasible but
only locally minimal in weight.
"""

from __future__ import annotations

from collections.abc import Sequence

from .types import MSG_HEURISTIC, MSG_INFEASIBLE, Item, SolutionResult, round2


def _greedy_fill(
    min_value: float, max_weight: float, items: Sequence[Item]
) -> tuple[list[Item], float, float]:
    # sorted() is stable, also with reverse=True: equal ratios keep input order
    ranked = sorted(items, key=lambda it: it.ratio, reverse=True)
    selected: list[Item] = []
    weight = 0.0
    value = 0.0
    for item in ranked:
        if weight + item.weight <= max_weight:
            selected.append(item)
            weight += item.weight
            value += item.value
            if value >= min_value:
                break
    return selected, weight, value


def _prune_backward(
    selected: list[Item], weight: float, value: float, min_value: float
) -> tuple[list[Item], float, float]:
    kept = list(selected)
    # One pass from the last pick back to the first; kept items are not revisited
    for i in range(len(kept) - 1, -1, -1):
        item = kept[i]
        if value - item.value >= min_value:
            del kept[i]
            weight -= item.weight
            value -= item.value
    return kept, weight, value


def heuristic_search(
    min_value: float, max_weight: float, items: Sequence[Item]
) -> SolutionResult:
    selected, weight, value = _greedy_fill(min_value, max_weight, items)
    if value < min_value:
        return SolutionResult.failure(MSG_INFEASIBLE)

    kept, weight, value = _prune_backward(selected, weight, value, min_value)
    return SolutionResult(
        success=True,
        selected_items=tuple(kept),
        total_weight=round2(weight),
        total_value=value,
        message=MSG_HEURISTIC,
    )
