"""Request helpers shared by the API tests."""

from __future__ import annotations

from typing import Any

from flask.testing import FlaskClient

GOAL_TEXTS = [f"Goal {i}" for i in range(25)]


def fetch_card(client: FlaskClient, code: str) -> dict[str, Any]:
    response = client.get(f"/api/cards/{code}")
    assert response.status_code == 200, response.get_json()
    return response.get_json()["data"]


def goal_ids_by_position(client: FlaskClient, code: str) -> dict[int, int]:
    return {g["position"]: g["id"] for g in fetch_card(client, code)["goals"]}


def set_completed(client: FlaskClient, code: str, positions: list[int], completed: bool = True) -> None:
    ids = goal_ids_by_position(client, code)
    for position in positions:
        response = client.put(f"/api/goals/{ids[position]}", json={"isCompleted": completed})
        assert response.status_code == 200, response.get_json()


def reconcile(client: FlaskClient, code: str) -> dict[str, Any]:
    response = client.post(f"/api/cards/{code}/bingos/reconcile")
    assert response.status_code == 200, response.get_json()
    return response.get_json()["data"]


def bingo_keys(data: dict[str, Any]) -> set[tuple[str, int]]:
    return {(b["type"], b["index"]) for b in data["bingos"]}
