from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from pipeline.io.files import write_json_atomic
from pipeline.io.validate import iter_errors, load_schema, schema_path
from processes.optimizer.types import (
    CatalogError,
    Constraints,
    ErrorCodes,
    Item,
    ItemError,
    SolutionResult,
)

from .defaults import BUNDLE_VERSION, DEFAULT_CONFIG, DEFAULT_ITEMS, HISTORY_LIMIT

logger = logging.getLogger("processes.catalog")

KEY_ITEMS = "items"
KEY_CONFIG = "config"
KEY_HISTORY = "history"


def _utc_now_iso() -> str:
    # Millisecond precision, Z suffix
    now = datetime.now(timezone.utc)
    ms = int(now.microsecond / 1000)
    return f"{now.strftime('%Y-%m-%dT%H:%M:%S')}.{ms:03d}Z"


class CatalogStore:
    """Key-value persistence for items, thresholds and run history.

    Each key lives in `<root>/<key>.json` and is rewritten atomically on save.
    Missing items or config are seeded from the defaults on first read.
    """

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root)

    # ---- raw key access ----

    def _path(self, key: str) -> Path:
        return self.root / f"{key}.json"

    def _read(self, key: str, default: Any = None) -> Any:
        path = self._path(key)
        if not path.exists():
            return default
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            logger.warning(
                json.dumps({"event": "store_read_error", "key": key, "error": str(e)})
            )
            return default

    def _write(self, key: str, data: Any) -> None:
        write_json_atomic(self._path(key), data)
        logger.info(json.dumps({"event": "store_write", "key": key}))

    # ---- items ----

    def get_items(self) -> list[Item]:
        raw = self._read(KEY_ITEMS)
        if not raw:
            self.save_items(DEFAULT_ITEMS)
            return list(DEFAULT_ITEMS)
        return [Item.from_dict(d) for d in raw]

    def save_items(self, items: Iterable[Item]) -> None:
        self._write(KEY_ITEMS, [it.to_dict() for it in items])

    def get_item(self, item_id: str) -> Item:
        for it in self.get_items():
            if it.id == item_id:
                return it
        raise CatalogError(ErrorCodes.NOT_FOUND, f"Item '{item_id}' not found")

    def add_item(self, item: Item) -> None:
        items = self.get_items()
        if any(it.id == item.id for it in items):
            raise CatalogError(
                ErrorCodes.DUPLICATE_ID, f"Item '{item.id}' already exists"
            )
        items.append(item)
        self.save_items(items)

    def update_item(self, old_id: str, item: Item) -> None:
        items = self.get_items()
        idx = next((i for i, it in enumerate(items) if it.id == old_id), None)
        if idx is None:
            raise CatalogError(ErrorCodes.NOT_FOUND, f"Item '{old_id}' not found")
        if item.id != old_id and any(it.id == item.id for it in items):
            raise CatalogError(
                ErrorCodes.DUPLICATE_ID, f"Item id '{item.id}' is already in use"
            )
        items[idx] = item
        self.save_items(items)

    def delete_item(self, item_id: str) -> None:
        items = self.get_items()
        kept = [it for it in items if it.id != item_id]
        if len(kept) == len(items):
            raise CatalogError(ErrorCodes.NOT_FOUND, f"Item '{item_id}' not found")
        self.save_items(kept)

    # ---- config ----

    def get_config(self) -> dict[str, Any]:
        cfg = self._read(KEY_CONFIG)
        if cfg is None:
            self.save_config(DEFAULT_CONFIG)
            return dict(DEFAULT_CONFIG)
        return dict(cfg)

    def save_config(self, config: Mapping[str, Any]) -> None:
        self._write(KEY_CONFIG, Constraints.from_dict(dict(config)).to_dict())

    # ---- history ----

    def get_history(self) -> list[dict[str, Any]]:
        return list(self._read(KEY_HISTORY, []))

    def append_history(
        self, min_value: float, max_weight: float, result: SolutionResult
    ) -> dict[str, Any]:
        record = {
            "timestamp": _utc_now_iso(),
            "min_value": min_value,
            "max_weight": max_weight,
            "result": result.to_dict(),
        }
        history = [record, *self.get_history()][:HISTORY_LIMIT]
        self._write(KEY_HISTORY, history)
        return record

    def clear_history(self) -> None:
        self._write(KEY_HISTORY, [])

    # ---- bundle import/export ----

    def export_bundle(self) -> dict[str, Any]:
        return {
            "version": BUNDLE_VERSION,
            "exported_at": _utc_now_iso(),
            "items": [it.to_dict() for it in self.get_items()],
            "config": self.get_config(),
            "history": self.get_history(),
        }

    def import_bundle(self, data: Any) -> None:
        """Replace whichever of items/config/history the bundle carries."""
        if not isinstance(data, Mapping):
            raise CatalogError(ErrorCodes.INVALID_BUNDLE, "Bundle must be a JSON object")
        errors = iter_errors(load_schema(schema_path("catalog_bundle")), dict(data))
        if errors:
            raise CatalogError(
                ErrorCodes.INVALID_BUNDLE,
                f"Invalid bundle: {errors[0]}",
                details={"errors": errors},
            )
        if KEY_ITEMS in data:
            try:
                items = [Item.from_dict(d) for d in data[KEY_ITEMS]]
            except ItemError as e:
                raise CatalogError(ErrorCodes.INVALID_BUNDLE, f"Invalid bundle: {e}") from e
            ids = [it.id for it in items]
            dupes = sorted({i for i in ids if ids.count(i) > 1})
            if dupes:
                raise CatalogError(
                    ErrorCodes.INVALID_BUNDLE,
                    f"Invalid bundle: duplicate item ids {', '.join(dupes)}",
                )
            self.save_items(items)
        if KEY_CONFIG in data:
            self.save_config(data[KEY_CONFIG])
        if KEY_HISTORY in data:
            self._write(KEY_HISTORY, list(data[KEY_HISTORY])[:HISTORY_LIMIT])
        logger.info(
            json.dumps(
                {
                    "event": "bundle_imported",
                    "keys": [k for k in (KEY_ITEMS, KEY_CONFIG, KEY_HISTORY) if k in data],
                }
            )
        )

    # ---- maintenance ----

    def reset_defaults(self) -> None:
        self.save_items(DEFAULT_ITEMS)
        self.save_config(DEFAULT_CONFIG)
        self.clear_history()

    def clear_all(self) -> None:
        for key in (KEY_ITEMS, KEY_CONFIG, KEY_HISTORY):
            self._path(key).unlink(missing_ok=True)
