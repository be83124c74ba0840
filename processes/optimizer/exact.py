"""Exhaustive subset search for small candidate sets."""

from __future__ import annotations

from collections.abc import Sequence

from .types import MSG_INFEASIBLE, MSG_OPTIMAL, Item, SolutionResult, round2


def exact_search(
    min_value: float, max_weight: float, items: Sequence[Item]
) -> SolutionResult:
    """Return the lightest subset reaching `min_value` within `max_weight`.

    Every mask in 0..2**n-1 is visited in increasing order, bit i standing for
    items[i]. Among feasible masks of equal minimal weight the first one seen
    (the smallest mask) wins, so results are deterministic. Callers keep
    n <= EXACT_SEARCH_LIMIT.
    """
    n = len(items)
    best_mask: int | None = None
    best_weight = float("inf")
    best_value = 0.0

    for mask in range(1 << n):
        weight = 0.0
        value = 0.0
        for i in range(n):
            if mask & (1 << i):
                item = items[i]
                weight += item.weight
                value += item.value
                # Overweight prefixes can only grow heavier
                if weight > max_weight:
                    break

        if weight <= max_weight and value >= min_value and weight < best_weight:
            best_mask = mask
            best_weight = weight
            best_value = value

    if best_mask is None:
        return SolutionResult.failure(MSG_INFEASIBLE)

    selected = tuple(items[i] for i in range(n) if best_mask & (1 << i))
    return SolutionResult(
        success=True,
        selected_items=selected,
        total_weight=round2(best_weight),
        total_value=best_value,
        message=MSG_OPTIMAL,
    )
