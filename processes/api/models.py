from __future__ import annotations

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    error: str
    detail: str | None = None


class ItemModel(BaseModel):
    id: str = Field(min_length=1, pattern=r"^\s*\S")
    weight: float = Field(gt=0)
    value: float = Field(gt=0)


class ConfigModel(BaseModel):
    min_value: float
    max_weight: float


class OptimizeRequest(BaseModel):
    # Omitted fields fall back to the stored catalog
    min_value: float | None = None
    max_weight: float | None = None
    items: list[ItemModel] | None = None
    record_history: bool = True


class SolutionModel(BaseModel):
    success: bool
    selected_items: list[ItemModel]
    total_weight: float
    total_value: float
    message: str


class OptimizeResponse(BaseModel):
    strategy: str
    min_value: float
    max_weight: float
    result: SolutionModel


class StatsModel(BaseModel):
    count: int
    mean_weight: float
    mean_value: float
    mean_ratio: float
    min_weight: float
    max_weight: float
    min_value: float
    max_value: float


class HistoryRecord(BaseModel):
    timestamp: str
    min_value: float | None = None
    max_weight: float | None = None
    result: SolutionModel


class HistoryResponse(BaseModel):
    history: list[HistoryRecord]

