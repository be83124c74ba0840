from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any

# Candidate count up to which every subset is enumerated.
EXACT_SEARCH_LIMIT = 20

MSG_NO_ITEMS = "no candidate items available"
MSG_INFEASIBLE = (
    "no solution satisfies the constraints; "
    "widen the weight ceiling or lower the value floor"
)
MSG_OPTIMAL = "optimal solution found"
MSG_HEURISTIC = "solution found (heuristic)"


class ErrorCodes(str, Enum):
    NOT_FOUND = "NOT_FOUND"
    DUPLICATE_ID = "DUPLICATE_ID"
    INVALID_BUNDLE = "INVALID_BUNDLE"


class ItemError(ValueError):
    """Raised when an item record violates its own invariants."""


class CatalogError(Exception):
    def __init__(
        self,
        code: ErrorCodes,
        message: str,
        user_message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.user_message = user_message or message
        self.details = details or {}


def round2(x: float) -> float:
    # Half rounds up, matching Math.round(x * 100) / 100 for the UI totals
    return math.floor(x * 100 + 0.5) / 100


@dataclass(frozen=True)
class Item:
    id: str
    weight: float
    value: float

    def __post_init__(self) -> None:
        if not isinstance(self.id, str) or not self.id.strip():
            raise ItemError("Item.id must be a non-empty string.")
        object.__setattr__(self, "id", self.id.strip())
        for name in ("weight", "value"):
            v = getattr(self, name)
            if isinstance(v, bool) or not isinstance(v, int | float):
                raise ItemError(f"Item[{self.id}] {name} must be a number.")
            if not math.isfinite(v) or v <= 0:
                raise ItemError(f"Item[{self.id}] {name} must be > 0.")

    @property
    def ratio(self) -> float:
        return self.value / self.weight

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "weight": self.weight, "value": self.value}

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Item:
        return cls(id=str(d["id"]), weight=d["weight"], value=d["value"])


@dataclass(frozen=True)
class Constraints:
    min_value: float
    max_weight: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Constraints:
        return cls(min_value=d["min_value"], max_weight=d["max_weight"])


@dataclass(frozen=True)
class SolutionResult:
    success: bool
    selected_items: tuple[Item, ...] = field(default_factory=tuple)
    total_weight: float = 0.0
    total_value: float = 0.0
    message: str = ""

    @classmethod
    def failure(cls, message: str) -> SolutionResult:
        return cls(
            success=False,
            selected_items=(),
            total_weight=0.0,
            total_value=0.0,
            message=message,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "selected_items": [it.to_dict() for it in self.selected_items],
            "total_weight": self.total_weight,
            "total_value": self.total_value,
            "message": self.message,
        }


@dataclass(frozen=True)
class Stats:
    count: int = 0
    mean_weight: float = 0.0
    mean_value: float = 0.0
    mean_ratio: float = 0.0
    min_weight: float = 0.0
    max_weight: float = 0.0
    min_value: float = 0.0
    max_value: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
