"""Shared fixtures: a fresh app and SQLite file per test."""

from __future__ import annotations

from typing import Any

import pytest
from flask import Flask
from flask.testing import FlaskClient

from goalbingo import create_app
from helpers import GOAL_TEXTS


@pytest.fixture
def app(tmp_path) -> Flask:
    app = create_app(
        {
            "TESTING": True,
            "DATABASE_URL": f"sqlite:///{tmp_path / 'bingo_test.db'}",
        }
    )
    yield app
    app.extensions["engine"].dispose()


@pytest.fixture
def client(app: Flask) -> FlaskClient:
    return app.test_client()


@pytest.fixture
def card_payload() -> dict[str, Any]:
    return {"ownerName": "Ada Lovelace", "goals": list(GOAL_TEXTS), "freeSpaceIndex": 3}


@pytest.fixture
def card_code(client: FlaskClient, card_payload: dict[str, Any]) -> str:
    response = client.post("/api/cards", json=card_payload)
    assert response.status_code == 201, response.get_json()
    return response.get_json()["data"]["code"]
