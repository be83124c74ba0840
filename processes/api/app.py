from __future__ import annotations

import json
import logging
import os
import time
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from fastapi import Body, FastAPI, Response

from processes.api.models import (
    ConfigModel,
    ErrorResponse,
    HistoryResponse,
    ItemModel,
    OptimizeRequest,
    OptimizeResponse,
    StatsModel,
)
from processes.catalog.store import CatalogStore
from processes.optimizer.dispatch import choose_strategy, optimize
from processes.optimizer.stats import compute_statistics
from processes.optimizer.types import CatalogError, ErrorCodes, Item

app = FastAPI()

logger = logging.getLogger("processes.api")

DATA_ROOT_ENV = "PACK_DATA_ROOT"

_STATUS_BY_CODE: dict[ErrorCodes, int] = {
    ErrorCodes.NOT_FOUND: 404,
    ErrorCodes.DUPLICATE_ID: 409,
}


def _store() -> CatalogStore:
    return CatalogStore(Path(os.environ.get(DATA_ROOT_ENV, "data")))


def _enter(endpoint: str, **fields: Any) -> float:
    logger.info(json.dumps({"event": "api_enter", "endpoint": endpoint, **fields}))
    return time.time()


def _exit(endpoint: str, t0: float, **fields: Any) -> None:
    dt = time.time() - t0
    logger.info(
        json.dumps(
            {"event": "api_exit", "endpoint": endpoint, "dt_s": round(dt, 6), **fields}
        )
    )


def _error(response: Response, e: CatalogError) -> ErrorResponse:
    response.status_code = _STATUS_BY_CODE.get(e.code, 400)
    logger.error(
        json.dumps({"event": "api_error", "code": e.code.value, "message": e.message})
    )
    return ErrorResponse(error=e.code.value.lower(), detail=e.user_message)


def _item_models(items: list[Item]) -> list[ItemModel]:
    return [ItemModel(**it.to_dict()) for it in items]


@app.get("/health")  # type: ignore[misc]
def health() -> dict[str, Any]:
    t0 = _enter("/health")
    out = {
        "ok": True,
        "version": "0.1.0",
        "time": datetime.now(UTC).isoformat(),
    }
    _exit("/health", t0)
    return out


@app.get("/items", response_model=list[ItemModel])  # type: ignore[misc]
def list_items() -> list[ItemModel]:
    t0 = _enter("/items")
    out = _item_models(_store().get_items())
    _exit("/items", t0, count=len(out))
    return out


@app.post(
    "/items", response_model=ItemModel | ErrorResponse, status_code=201
)  # type: ignore[misc]
def add_item(req: ItemModel, response: Response) -> ItemModel | ErrorResponse:
    t0 = _enter("/items", method="POST", item_id=req.id)
    item = Item(**req.model_dump())
    try:
        _store().add_item(item)
    except CatalogError as e:
        return _error(response, e)
    _exit("/items", t0, method="POST")
    return ItemModel(**item.to_dict())


@app.put(
    "/items/{item_id}", response_model=ItemModel | ErrorResponse
)  # type: ignore[misc]
def update_item(
    item_id: str, req: ItemModel, response: Response
) -> ItemModel | ErrorResponse:
    t0 = _enter("/items/{item_id}", method="PUT", item_id=item_id)
    item = Item(**req.model_dump())
    try:
        _store().update_item(item_id, item)
    except CatalogError as e:
        return _error(response, e)
    _exit("/items/{item_id}", t0, method="PUT")
    return ItemModel(**item.to_dict())


@app.delete(
    "/items/{item_id}", response_model=dict[str, Any] | ErrorResponse
)  # type: ignore[misc]
def delete_item(item_id: str, response: Response) -> dict[str, Any] | ErrorResponse:
    t0 = _enter("/items/{item_id}", method="DELETE", item_id=item_id)
    try:
        _store().delete_item(item_id)
    except CatalogError as e:
        return _error(response, e)
    _exit("/items/{item_id}", t0, method="DELETE")
    return {"deleted": item_id}


@app.get("/config", response_model=ConfigModel)  # type: ignore[misc]
def get_config() -> ConfigModel:
    t0 = _enter("/config")
    out = ConfigModel(**_store().get_config())
    _exit("/config", t0)
    return out


@app.put("/config", response_model=ConfigModel)  # type: ignore[misc]
def put_config(req: ConfigModel) -> ConfigModel:
    t0 = _enter("/config", method="PUT")
    _store().save_config(req.model_dump())
    _exit("/config", t0, method="PUT")
    return req


@app.post("/optimize", response_model=OptimizeResponse)  # type: ignore[misc]
def run_optimize(req: OptimizeRequest) -> OptimizeResponse:
    t0 = _enter("/optimize")
    store = _store()
    cfg = store.get_config()
    min_value = req.min_value if req.min_value is not None else cfg["min_value"]
    max_weight = req.max_weight if req.max_weight is not None else cfg["max_weight"]
    if req.items is not None:
        items = [Item(**m.model_dump()) for m in req.items]
    else:
        items = store.get_items()

    result = optimize(min_value, max_weight, items)
    if result.success and req.record_history:
        store.append_history(min_value, max_weight, result)

    out = OptimizeResponse.model_validate(
        {
            "strategy": choose_strategy(len(items)),
            "min_value": min_value,
            "max_weight": max_weight,
            "result": result.to_dict(),
        }
    )
    _exit("/optimize", t0, success=result.success, n_items=len(items))
    return out


@app.get("/stats", response_model=StatsModel)  # type: ignore[misc]
def get_stats() -> StatsModel:
    t0 = _enter("/stats")
    out = StatsModel(**compute_statistics(_store().get_items()).to_dict())
    _exit("/stats", t0)
    return out


@app.get("/history", response_model=HistoryResponse)  # type: ignore[misc]
def get_history(limit: int = 50) -> HistoryResponse:
    t0 = _enter("/history", limit=limit)
    out = HistoryResponse.model_validate({"history": _store().get_history()[:limit]})
    _exit("/history", t0, count=len(out.history))
    return out


@app.delete("/history")  # type: ignore[misc]
def clear_history() -> dict[str, Any]:
    t0 = _enter("/history", method="DELETE")
    _store().clear_history()
    _exit("/history", t0, method="DELETE")
    return {"cleared": True}


@app.get("/export")  # type: ignore[misc]
def export_bundle() -> dict[str, Any]:
    t0 = _enter("/export")
    out = _store().export_bundle()
    _exit("/export", t0)
    return out


@app.post(
    "/import", response_model=dict[str, Any] | ErrorResponse
)  # type: ignore[misc]
def import_bundle(
    response: Response, bundle: dict[str, Any] = Body(...)
) -> dict[str, Any] | ErrorResponse:
    t0 = _enter("/import")
    try:
        _store().import_bundle(bundle)
    except CatalogError as e:
        return _error(response, e)
    _exit("/import", t0)
    return {"imported": True}


@app.post("/reset")  # type: ignore[misc]
def reset() -> dict[str, Any]:
    t0 = _enter("/reset")
    _store().reset_defaults()
    _exit("/reset", t0)
    return {"reset": True}
