from __future__ import annotations

from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

from processes.api.app import app as api_app


def _client() -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=api_app), base_url="http://test")


@pytest.mark.anyio
async def test_health(data_root: Path) -> None:
    async with _client() as ac:
        resp = await ac.get("/health")
    assert resp.status_code == 200
    assert resp.json()["ok"] is True


@pytest.mark.anyio
async def test_items_crud(data_root: Path) -> None:
    async with _client() as ac:
        resp = await ac.get("/items")
        assert resp.status_code == 200
        assert [it["id"] for it in resp.json()] == ["E1", "E2", "E3", "E4", "E5"]

        resp = await ac.post("/items", json={"id": "E6", "weight": 4, "value": 9})
        assert resp.status_code == 201

        resp = await ac.post("/items", json={"id": "E6", "weight": 1, "value": 1})
        assert resp.status_code == 409
        assert resp.json()["error"] == "duplicate_id"

        resp = await ac.post("/items", json={"id": "  E6 ", "weight": 1, "value": 1})
        assert resp.status_code == 409

        resp = await ac.post("/items", json={"id": " E7 ", "weight": 1, "value": 1})
        assert resp.status_code == 201
        assert resp.json()["id"] == "E7"
        assert (await ac.delete("/items/E7")).status_code == 200

        resp = await ac.put("/items/E6", json={"id": "E6", "weight": 2, "value": 9})
        assert resp.status_code == 200

        resp = await ac.put("/items/nope", json={"id": "nope", "weight": 2, "value": 9})
        assert resp.status_code == 404
        assert resp.json()["error"] == "not_found"

        resp = await ac.delete("/items/E6")
        assert resp.status_code == 200
        resp = await ac.delete("/items/E6")
        assert resp.status_code == 404


@pytest.mark.anyio
async def test_config_roundtrip(data_root: Path) -> None:
    async with _client() as ac:
        resp = await ac.get("/config")
        assert resp.json() == {"min_value": 15, "max_weight": 10}

        resp = await ac.put("/config", json={"min_value": 8, "max_weight": 4})
        assert resp.status_code == 200

        resp = await ac.get("/config")
        assert resp.json() == {"min_value": 8, "max_weight": 4}


@pytest.mark.anyio
async def test_optimize_stored_catalog_records_history(data_root: Path) -> None:
    async with _client() as ac:
        resp = await ac.post("/optimize", json={})
        assert resp.status_code == 200
        payload = resp.json()
        assert payload["strategy"] == "exact"
        assert payload["result"]["success"] is True
        assert [it["id"] for it in payload["result"]["selected_items"]] == [
            "E2",
            "E4",
            "E5",
        ]
        assert payload["result"]["total_weight"] == 6

        resp = await ac.get("/history")
        history = resp.json()["history"]
        assert len(history) == 1
        assert history[0]["result"]["total_value"] == 16

        resp = await ac.delete("/history")
        assert resp.json() == {"cleared": True}
        resp = await ac.get("/history")
        assert resp.json()["history"] == []


@pytest.mark.anyio
async def test_optimize_failure_is_not_an_http_error(data_root: Path) -> None:
    async with _client() as ac:
        resp = await ac.post("/optimize", json={"min_value": 0})
        assert resp.status_code == 200
        result = resp.json()["result"]
        assert result["success"] is False
        assert result["message"] == "value floor must be positive"
        assert result["total_weight"] == 0

        resp = await ac.get("/history")
        assert resp.json()["history"] == []


@pytest.mark.anyio
async def test_optimize_explicit_items_uses_heuristic(data_root: Path) -> None:
    items = [
        {"id": f"S{i}", "weight": 1 + i % 5, "value": 2 + i % 7} for i in range(25)
    ]
    async with _client() as ac:
        resp = await ac.post(
            "/optimize",
            json={
                "min_value": 20,
                "max_weight": 15,
                "items": items,
                "record_history": False,
            },
        )
    payload = resp.json()
    assert payload["strategy"] == "heuristic"
    assert payload["result"]["success"] is True
    assert payload["result"]["total_value"] >= 20
    assert payload["result"]["total_weight"] <= 15


@pytest.mark.anyio
async def test_stats(data_root: Path) -> None:
    async with _client() as ac:
        resp = await ac.get("/stats")
    assert resp.json()["count"] == 5
    assert resp.json()["mean_ratio"] == 2.43


@pytest.mark.anyio
async def test_export_import_reset(data_root: Path) -> None:
    async with _client() as ac:
        await ac.post("/items", json={"id": "E6", "weight": 4, "value": 9})
        bundle = (await ac.get("/export")).json()
        assert bundle["version"] == "1.0"
        assert len(bundle["items"]) == 6

        resp = await ac.post("/reset")
        assert resp.status_code == 200
        assert len((await ac.get("/items")).json()) == 5

        resp = await ac.post("/import", json=bundle)
        assert resp.status_code == 200
        assert len((await ac.get("/items")).json()) == 6

        resp = await ac.post("/import", json={"items": [{"id": "A", "weight": -1, "value": 1}]})
        assert resp.status_code == 400
        assert resp.json()["error"] == "invalid_bundle"

        resp = await ac.post("/import", json={"items": [{"id": " ", "weight": 1, "value": 1}]})
        assert resp.status_code == 400
        assert resp.json()["error"] == "invalid_bundle"
        assert len((await ac.get("/items")).json()) == 6
