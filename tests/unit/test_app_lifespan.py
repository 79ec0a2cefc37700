"""End-to-end tests for the application lifespan and persistence wiring."""

from __future__ import annotations

import json

import pytest
from fastapi.testclient import TestClient

from backend.app import main
from backend.app.api import dependencies

pytestmark = [pytest.mark.api, pytest.mark.persistence]


def _clear_singletons() -> None:
    dependencies._settings_singleton.cache_clear()
    dependencies._stats_service_singleton.cache_clear()
    dependencies._catalog_singleton.cache_clear()


@pytest.fixture()
def json_profile(tmp_path, monkeypatch):
    data_path = tmp_path / "entries.json"
    (tmp_path / "test.yaml").write_text(
        "\n".join(
            [
                "environment: test",
                "persistence:",
                "  backend: json",
                f"  json_path: {data_path}",
                "catalog:",
                "  owners: [Ana, Luis]",
                "stats:",
                "  timezone: America/Bogota",
                "logging:",
                "  level: DEBUG",
            ]
        ),
        encoding="utf-8",
    )
    monkeypatch.setenv("BITACORA_CONFIG_DIR", str(tmp_path))
    monkeypatch.setenv("BITACORA_CONFIG_PROFILE", "test")
    monkeypatch.delenv("BITACORA_PERSISTENCE_BACKEND", raising=False)
    _clear_singletons()
    yield data_path
    _clear_singletons()


def test_entries_survive_an_application_restart(json_profile):
    with TestClient(main.create_app()) as client:
        created = client.post(
            "/api/entries",
            json={
                "date": "2026-10-19T10:00:00-05:00",
                "title": "Board meeting",
                "description": "Monthly board meeting minutes.",
                "owner": "Ana",
                "category": "meeting",
            },
        )
        assert created.status_code == 201
        entry_id = created.json()["entry_id"]
        toggled = client.post(f"/api/entries/{entry_id}/toggle-complete")
        assert toggled.json()["completed"] is True

    stored = json.loads(json_profile.read_text(encoding="utf-8"))
    assert [record["entry_id"] for record in stored] == [entry_id]

    with TestClient(main.create_app()) as client:
        listing = client.get("/api/entries").json()
        health = client.get("/api/healthz").json()
        catalog = client.get("/api/catalog").json()
        summary = client.get("/api/stats/summary").json()

    assert [item["entry_id"] for item in listing["items"]] == [entry_id]
    assert listing["items"][0]["completed"] is True
    assert health["environment"] == "test"
    assert health["persistence"] == "json"
    assert catalog["owners"] == ["Ana", "Luis"]
    assert summary["totals"]["completion_percent"] == 100
    assert summary["meta"]["timezone"] == "America/Bogota"


def test_store_is_released_after_shutdown(json_profile):
    app = main.create_app()

    with TestClient(app):
        assert app.state.entry_store is not None

    assert app.state.entry_store is None
