from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from jsonschema.validators import Draft202012Validator as Validator

SCHEMAS_ROOT = Path(__file__).resolve().parents[1] / "schemas"


def load_schema(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        schema = yaml.safe_load(f)
    Validator.check_schema(schema)
    return schema


def schema_path(name: str, schemas_root: Path | None = None) -> Path:
    return (schemas_root or SCHEMAS_ROOT) / f"{name}.schema.yaml"


def iter_errors(schema: dict[str, Any], obj: Any) -> list[str]:
    """All violations as "<path>: <message>" strings, ordered by path."""
    errors = sorted(
        Validator(schema).iter_errors(obj), key=lambda e: [str(p) for p in e.path]
    )
    out: list[str] = []
    for err in errors:
        loc = "/".join(str(p) for p in err.path) or "<root>"
        out.append(f"{loc}: {err.message}")
    return out
