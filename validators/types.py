"""Types for optimizer input validation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class InvalidReason(Enum):
    """Enumerated reasons an optimization call is rejected before search."""

    VALUE_FLOOR_NOT_POSITIVE = "value_floor_not_positive"
    WEIGHT_CEILING_NOT_POSITIVE = "weight_ceiling_not_positive"
    INVALID_ITEM_LIST = "invalid_item_list"
    NO_ITEM_FITS = "no_item_fits"


# Human-readable message carried into failure results
REASON_MESSAGES: dict[InvalidReason, str] = {
    InvalidReason.VALUE_FLOOR_NOT_POSITIVE: "value floor must be positive",
    InvalidReason.WEIGHT_CEILING_NOT_POSITIVE: "weight ceiling must be positive",
    InvalidReason.INVALID_ITEM_LIST: "invalid item list",
    InvalidReason.NO_ITEM_FITS: "no item fits within the weight ceiling",
}


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of input validation; `reason` is set only when invalid."""

    valid: bool
    reason: InvalidReason | None = None

    @property
    def message(self) -> str:
        if self.reason is None:
            return ""
        return REASON_MESSAGES[self.reason]
