"""Seed data for a fresh catalog."""

from __future__ import annotations

from typing import Any

from processes.optimizer.types import Item

DEFAULT_ITEMS: tuple[Item, ...] = (
    Item("E1", 5, 3),
    Item("E2", 3, 5),
    Item("E3", 5, 2),
    Item("E4", 1, 8),
    Item("E5", 2, 3),
)

DEFAULT_CONFIG: dict[str, Any] = {"min_value": 15, "max_weight": 10}

# Most recent runs kept in history.json
HISTORY_LIMIT = 50

BUNDLE_VERSION = "1.0"
