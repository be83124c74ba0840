from __future__ import annotations

from processes.optimizer.stats import compute_statistics
from processes.optimizer.types import Item, Stats


def test_statistics_default_catalog(sample_items):
    stats = compute_statistics(sample_items)

    assert stats.count == 5
    assert stats.mean_weight == 3.2
    assert stats.mean_value == 4.2
    assert stats.mean_ratio == 2.43
    assert stats.min_weight == 1
    assert stats.max_weight == 5
    assert stats.min_value == 2
    assert stats.max_value == 8


def test_statistics_empty_is_all_zero():
    assert compute_statistics([]) == Stats()
    assert compute_statistics([]).to_dict() == {
        "count": 0,
        "mean_weight": 0.0,
        "mean_value": 0.0,
        "mean_ratio": 0.0,
        "min_weight": 0.0,
        "max_weight": 0.0,
        "min_value": 0.0,
        "max_value": 0.0,
    }


def test_statistics_single_item():
    stats = compute_statistics([Item("A", 2, 5)])

    assert stats.count == 1
    assert stats.mean_ratio == 2.5
    assert stats.min_weight == stats.max_weight == 2
