from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path for package imports like `processes.*`
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from processes.optimizer.types import Item  # noqa: E402


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def sample_items() -> list[Item]:
    """The five-item catalog the app ships with."""
    return [
        Item("E1", 5, 3),
        Item("E2", 3, 5),
        Item("E3", 5, 2),
        Item("E4", 1, 8),
        Item("E5", 2, 3),
    ]


@pytest.fixture
def data_root(tmp_path: Path, monkeypatch) -> Path:
    root = tmp_path / "data"
    monkeypatch.setenv("PACK_DATA_ROOT", str(root))
    return root
