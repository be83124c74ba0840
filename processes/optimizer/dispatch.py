from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from typing import Any

from validators import validate_inputs

from .exact import exact_search
from .heuristic import heuristic_search
from .types import EXACT_SEARCH_LIMIT, MSG_NO_ITEMS, Item, SolutionResult

logger = logging.getLogger("processes.optimizer")


def choose_strategy(n_items: int) -> str:
    return "exact" if n_items <= EXACT_SEARCH_LIMIT else "heuristic"


def optimize(min_value: Any, max_weight: Any, items: Sequence[Item]) -> SolutionResult:
    """Pick the lightest item subset meeting the value floor and weight ceiling.

    Never raises for bad inputs: rejected calls come back as a failure result
    with zeroed totals and the rejection reason as message.
    """
    check = validate_inputs(min_value, max_weight, items)
    if not check.valid:
        return SolutionResult.failure(check.message)

    if len(items) == 0:
        return SolutionResult.failure(MSG_NO_ITEMS)

    strategy = choose_strategy(len(items))
    logger.debug(
        json.dumps(
            {"event": "optimize_dispatch", "strategy": strategy, "n_items": len(items)}
        )
    )
    if strategy == "exact":
        return exact_search(min_value, max_weight, items)
    return heuristic_search(min_value, max_weight, items)
