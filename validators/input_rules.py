"""Input rules checked before any optimizer search runs."""

from __future__ import annotations

import numbers
from collections.abc import Sequence
from typing import Any

from processes.optimizer.types import Item

from .types import InvalidReason, ValidationResult


def _is_positive_real(x: Any) -> bool:
    if isinstance(x, bool) or not isinstance(x, numbers.Real):
        return False
    # NaN compares false here, so it is rejected too
    return bool(x > 0)


def _is_item_sequence(items: Any) -> bool:
    if not isinstance(items, Sequence) or isinstance(items, str | bytes):
        return False
    return all(isinstance(it, Item) for it in items)


def validate_inputs(
    min_value: Any,
    max_weight: Any,
    items: Any,
) -> ValidationResult:
    """Validate optimizer inputs; the first failing rule wins.

    Pure function with no I/O dependencies.

    Args:
        min_value: Value floor, must be a positive real
        max_weight: Weight ceiling, must be a positive real
        items: List or tuple of Item records

    Returns:
        ValidationResult with the first InvalidReason hit, if any
    """
    if not _is_positive_real(min_value):
        return ValidationResult(False, InvalidReason.VALUE_FLOOR_NOT_POSITIVE)

    if not _is_positive_real(max_weight):
        return ValidationResult(False, InvalidReason.WEIGHT_CEILING_NOT_POSITIVE)

    if not _is_item_sequence(items):
        return ValidationResult(False, InvalidReason.INVALID_ITEM_LIST)

    # An empty list is left to the dispatcher, which reports it separately
    if items and not any(it.weight <= max_weight for it in items):
        return ValidationResult(False, InvalidReason.NO_ITEM_FITS)

    return ValidationResult(True)
