from __future__ import annotations

import json
from collections.abc import Sequence
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import pandas as pd
from pydantic import BaseModel, Field, ValidationError

from pipeline.io.files import ensure_dir
from processes.optimizer.types import Item

ITEM_COLUMNS = ["id", "weight", "value"]


class ItemRow(BaseModel):
    id: str = Field(min_length=1, pattern=r"^\s*\S")
    weight: float = Field(gt=0)
    value: float = Field(gt=0)


def read_items_csv(path: Path) -> list[Item]:
    df = pd.read_csv(path, dtype={"id": str})
    missing = [c for c in ITEM_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns in {path.name}: {missing}")
    items: list[Item] = []
    for n, rec in enumerate(df[ITEM_COLUMNS].to_dict(orient="records"), start=2):
        try:
            row = ItemRow(**rec)
        except ValidationError as e:
            raise ValueError(f"Invalid item row at {path.name}:{n}: {e}") from e
        items.append(Item(id=row.id, weight=row.weight, value=row.value))
    return items


def write_items_csv(items: Sequence[Item], path: Path) -> None:
    ensure_dir(path.parent)
    df = pd.DataFrame([it.to_dict() for it in items], columns=ITEM_COLUMNS)
    df.to_csv(path, index=False)


def read_bundle(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Failed to parse JSON in {path}: {e}") from e


def write_bundle(bundle: dict[str, Any], path: Path) -> None:
    ensure_dir(path.parent)
    path.write_text(json.dumps(bundle, indent=2, ensure_ascii=False), encoding="utf-8")


def bundle_filename(dt: datetime | None = None) -> str:
    now = dt or datetime.now(timezone.utc)
    return f"pack-optimizer-{now.strftime('%Y-%m-%d')}.json"
