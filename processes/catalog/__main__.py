"""CLI for managing the item catalog, thresholds and run history."""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Sequence
from pathlib import Path

from processes.optimizer.stats import compute_statistics
from processes.optimizer.types import CatalogError, Item
from processes.report.render import render_items_table, render_statistics

from .io import bundle_filename, read_bundle, read_items_csv, write_bundle, write_items_csv
from .store import CatalogStore


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m processes.catalog",
        description="Manage pack optimizer items, thresholds and history",
    )
    parser.add_argument(
        "--data-root",
        type=Path,
        default=Path("data"),
        help="Catalog directory (default: data)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    items = sub.add_parser("items", help="List and edit candidate items")
    items_sub = items.add_subparsers(dest="action", required=True)
    items_sub.add_parser("list", help="Print the item table")
    add = items_sub.add_parser("add", help="Add a new item")
    add.add_argument("id")
    add.add_argument("weight", type=float)
    add.add_argument("value", type=float)
    upd = items_sub.add_parser("update", help="Replace an existing item")
    upd.add_argument("old_id")
    upd.add_argument("--id", dest="new_id")
    upd.add_argument("--weight", type=float)
    upd.add_argument("--value", type=float)
    rm = items_sub.add_parser("delete", help="Delete an item")
    rm.add_argument("id")
    imp = items_sub.add_parser("import", help="Replace items from a CSV file")
    imp.add_argument("path", type=Path)
    exp = items_sub.add_parser("export", help="Write items to a CSV file")
    exp.add_argument("path", type=Path)

    cfg = sub.add_parser("config", help="Show or set thresholds")
    cfg_sub = cfg.add_subparsers(dest="action", required=True)
    cfg_sub.add_parser("show")
    cfg_set = cfg_sub.add_parser("set")
    cfg_set.add_argument("--min-value", type=float)
    cfg_set.add_argument("--max-weight", type=float)

    hist = sub.add_parser("history", help="Show or clear past results")
    hist_sub = hist.add_subparsers(dest="action", required=True)
    hist_list = hist_sub.add_parser("list")
    hist_list.add_argument("--limit", type=int, default=10)
    hist_sub.add_parser("clear")

    sub.add_parser("stats", help="Print item statistics")

    export = sub.add_parser("export", help="Write the whole catalog to a JSON bundle")
    export.add_argument("--out", type=Path, help="Bundle path (default: dated file in cwd)")
    bundle_in = sub.add_parser("import", help="Load a JSON bundle")
    bundle_in.add_argument("path", type=Path)

    sub.add_parser("reset", help="Restore default items and thresholds, clear history")
    sub.add_parser("clear", help="Remove all stored catalog data")
    return parser


def _items(store: CatalogStore, args: argparse.Namespace) -> int:
    if args.action == "list":
        print(render_items_table(store.get_items()))
    elif args.action == "add":
        store.add_item(Item(args.id, args.weight, args.value))
        print(f"Item '{args.id}' added")
    elif args.action == "update":
        current = store.get_item(args.old_id)
        new = Item(
            args.new_id or current.id,
            args.weight if args.weight is not None else current.weight,
            args.value if args.value is not None else current.value,
        )
        store.update_item(args.old_id, new)
        print(f"Item '{new.id}' updated")
    elif args.action == "delete":
        store.delete_item(args.id)
        print(f"Item '{args.id}' deleted")
    elif args.action == "import":
        loaded = read_items_csv(args.path)
        store.import_bundle({"items": [it.to_dict() for it in loaded]})
        print(f"{len(loaded)} item(s) imported")
    elif args.action == "export":
        write_items_csv(store.get_items(), args.path)
        print(f"Items written to {args.path}")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    store = CatalogStore(args.data_root)
    try:
        if args.command == "items":
            return _items(store, args)
        if args.command == "config":
            if args.action == "set":
                cfg = store.get_config()
                if args.min_value is not None:
                    cfg["min_value"] = args.min_value
                if args.max_weight is not None:
                    cfg["max_weight"] = args.max_weight
                store.save_config(cfg)
            print(json.dumps(store.get_config(), indent=2))
        elif args.command == "history":
            if args.action == "clear":
                store.clear_history()
                print("History cleared")
            else:
                print(json.dumps(store.get_history()[: args.limit], indent=2))
        elif args.command == "stats":
            print(render_statistics(compute_statistics(store.get_items())))
        elif args.command == "export":
            out = args.out or Path(bundle_filename())
            write_bundle(store.export_bundle(), out)
            print(f"Catalog exported to {out}")
        elif args.command == "import":
            store.import_bundle(read_bundle(args.path))
            print(f"Catalog imported from {args.path}")
        elif args.command == "reset":
            store.reset_defaults()
            print("Defaults restored")
        elif args.command == "clear":
            store.clear_all()
            print("Catalog cleared")
    except CatalogError as e:
        print(f"[catalog] {e.code.value}: {e.user_message}", file=sys.stderr)
        return 2
    except ValueError as e:
        print(f"[catalog] {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
