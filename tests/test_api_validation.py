from __future__ import annotations

from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

from processes.api.app import app as api_app


def _client() -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=api_app), base_url="http://test")


@pytest.mark.anyio
async def test_add_item_non_positive_weight(data_root: Path) -> None:
    async with _client() as ac:
        resp = await ac.post("/items", json={"id": "X", "weight": 0, "value": 1})
        assert resp.status_code == 422


@pytest.mark.anyio
async def test_add_item_blank_id(data_root: Path) -> None:
    async with _client() as ac:
        resp = await ac.post("/items", json={"id": "   ", "weight": 1, "value": 1})
        assert resp.status_code == 422


@pytest.mark.anyio
async def test_optimize_items_wrong_type(data_root: Path) -> None:
    async with _client() as ac:
        resp = await ac.post("/optimize", json={"items": "not-a-list"})
        assert resp.status_code == 422


@pytest.mark.anyio
async def test_config_missing_field(data_root: Path) -> None:
    async with _client() as ac:
        resp = await ac.put("/config", json={"min_value": 3})
        assert resp.status_code == 422
