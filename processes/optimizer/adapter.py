from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from processes.catalog.io import read_items_csv
from processes.catalog.store import CatalogStore
from processes.report.render import render_result_panel

from .dispatch import choose_strategy, optimize

KNOWN_CONFIG_KEYS = ("min_value", "max_weight")


def _coerce_scalar(val: str) -> int | float | bool | str:
    lower = val.lower()
    if lower in ("true", "false"):
        return lower == "true"
    try:
        if "." in val or "e" in lower:
            return float(val)
        return int(val)
    except ValueError:
        return val


def load_config(
    config_path: Path | None, inline_kv: Sequence[str] | None = None
) -> dict[str, Any]:
    cfg: dict[str, Any] = {}
    if config_path:
        text = config_path.read_text(encoding="utf-8")
        if config_path.suffix.lower() in (".yaml", ".yml"):
            import yaml  # lazy

            try:
                cfg = dict(yaml.safe_load(text) or {})
            except yaml.YAMLError as e:
                msg = f"Failed to parse YAML config {config_path}: {e}"
                raise ValueError(msg) from e
        else:
            try:
                cfg = dict(json.loads(text))
            except json.JSONDecodeError as e:
                msg = f"Failed to parse JSON config {config_path}: {e}"
                raise ValueError(msg) from e
    if inline_kv:
        for item in inline_kv:
            if "=" not in item:
                continue
            k, v = item.split("=", 1)
            cfg[k.strip()] = _coerce_scalar(v.strip())
    return cfg


def resolve_thresholds(
    stored: Mapping[str, Any], overrides: Mapping[str, Any]
) -> dict[str, Any]:
    """Stored catalog config, overridden key by key by the run config."""
    out = {k: stored.get(k) for k in KNOWN_CONFIG_KEYS}
    for k in KNOWN_CONFIG_KEYS:
        if k in overrides:
            out[k] = overrides[k]
    return out


def _is_number(x: Any) -> bool:
    return isinstance(x, int | float) and not isinstance(x, bool)


def run_adapter(
    *,
    data_root: Path,
    config_path: Path | None = None,
    config_kv: Sequence[str] | None = None,
    input_path: Path | None = None,
    record_history: bool = True,
) -> dict[str, Any]:
    store = CatalogStore(data_root)
    items = read_items_csv(input_path) if input_path else store.get_items()

    cfg = load_config(config_path, config_kv)
    thresholds = resolve_thresholds(store.get_config(), cfg)
    min_value = thresholds["min_value"]
    max_weight = thresholds["max_weight"]

    if _is_number(min_value) and _is_number(max_weight):
        store.save_config(thresholds)

    result = optimize(min_value, max_weight, items)

    recorded = False
    if result.success and record_history:
        store.append_history(min_value, max_weight, result)
        recorded = True

    return {
        "result": result,
        "strategy": choose_strategy(len(items)),
        "min_value": min_value,
        "max_weight": max_weight,
        "item_count": len(items),
        "history_recorded": recorded,
        "unknown_config_keys": sorted(set(cfg) - set(KNOWN_CONFIG_KEYS)),
    }


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="python -m processes.optimizer")
    p.add_argument("--data-root", type=Path, default=Path("data"))
    p.add_argument("--config", type=Path, help="YAML or JSON thresholds file")
    p.add_argument("--config-kv", nargs="*", help="Inline overrides key=value")
    p.add_argument("--input", type=Path, help="Explicit items CSV (id,weight,value)")
    p.add_argument("--no-history", action="store_true")
    p.add_argument("--json", action="store_true", help="Print the result as JSON")
    p.add_argument("--verbose", action="store_true")
    return p


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    out = run_adapter(
        data_root=args.data_root,
        config_path=args.config,
        config_kv=args.config_kv,
        input_path=args.input,
        record_history=not args.no_history,
    )
    result = out["result"]
    if args.verbose:
        if out["unknown_config_keys"]:
            print(
                f"[pack] Warning: unknown config keys ignored: {', '.join(out['unknown_config_keys'])}",
                file=sys.stderr,
            )
        print(
            f"[pack] {out['item_count']} candidate(s), strategy: {out['strategy']}",
            file=sys.stderr,
        )
        if out["history_recorded"]:
            print("[pack] result saved to history", file=sys.stderr)
    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(render_result_panel(result, out["min_value"], out["max_weight"]))
    return 0 if result.success else 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
