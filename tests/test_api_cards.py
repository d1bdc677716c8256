"""Tests for the card endpoints."""

from collections import Counter
from typing import Any

import pytest
from flask.testing import FlaskClient

from goalbingo.db import session_scope
from goalbingo.models import Bingo, Goal
from goalbingo.services import card_service
from helpers import GOAL_TEXTS, fetch_card, reconcile, set_completed


class TestCreateCard:
    def test_returns_code(self, client: FlaskClient, card_payload: dict[str, Any]) -> None:
        response = client.post("/api/cards", json=card_payload)

        body = response.get_json()
        assert response.status_code == 201
        assert body["success"] is True
        assert body["data"]["code"].startswith("ADALOVELAC-")

    def test_free_space_placed_in_center(self, client: FlaskClient, card_code: str) -> None:
        data = fetch_card(client, card_code)

        center = data["goals"][12]
        assert center["position"] == 12
        assert center["text"] == "Goal 3"
        assert center["is_free_space"] is True
        assert center["is_completed"] is True
        assert center["completed_date"] is not None

    def test_other_goals_present_exactly_once(self, client: FlaskClient, card_code: str) -> None:
        data = fetch_card(client, card_code)

        others = [g["text"] for g in data["goals"] if g["position"] != 12]
        assert Counter(others) == Counter(t for t in GOAL_TEXTS if t != "Goal 3")
        assert not any(g["is_completed"] for g in data["goals"] if g["position"] != 12)

    def test_defaults(self, client: FlaskClient, card_code: str) -> None:
        card = fetch_card(client, card_code)["card"]

        assert card["owner_name"] == "Ada Lovelace"
        assert card["display_name"] == "Ada Lovelace"
        assert card["theme"] == "default"
        assert card["stamp_color"] == "#FFD700"

    def test_text_is_html_escaped(self, client: FlaskClient, card_payload: dict[str, Any]) -> None:
        card_payload["goals"][0] = "<b>Run</b> & swim"
        card_payload["freeSpaceIndex"] = 0
        code = client.post("/api/cards", json=card_payload).get_json()["data"]["code"]

        center = fetch_card(client, code)["goals"][12]
        assert center["text"] == "&lt;b&gt;Run&lt;/b&gt; &amp; swim"

    @pytest.mark.parametrize(
        ("mutate", "field"),
        [
            (lambda p: p.update(goals=p["goals"][:24]), "goals"),
            (lambda p: p["goals"].__setitem__(5, "   "), "goals"),
            (lambda p: p["goals"].__setitem__(5, "x" * 101), "goals"),
            (lambda p: p.update(freeSpaceIndex=25), "freeSpaceIndex"),
            (lambda p: p.update(freeSpaceIndex=-1), "freeSpaceIndex"),
            (lambda p: p.pop("freeSpaceIndex"), "freeSpaceIndex"),
            (lambda p: p.update(ownerName=""), "ownerName"),
            (lambda p: p.update(ownerName="n" * 51), "ownerName"),
        ],
    )
    def test_validation_errors(self, client: FlaskClient, card_payload: dict[str, Any], mutate, field: str) -> None:
        mutate(card_payload)

        response = client.post("/api/cards", json=card_payload)

        body = response.get_json()
        assert response.status_code == 400
        assert body["error"]["code"] == "validation_error"
        assert field in body["error"]["details"]

    def test_nothing_persisted_on_validation_error(self, app, client: FlaskClient, card_payload: dict[str, Any]) -> None:
        card_payload["goals"] = card_payload["goals"][:3]
        client.post("/api/cards", json=card_payload)

        with session_scope(app) as session:
            assert session.query(Goal).count() == 0

    def test_code_collision_is_a_conflict(self, client: FlaskClient, card_payload: dict[str, Any], monkeypatch) -> None:
        monkeypatch.setattr(card_service, "generate_card_code", lambda *a, **k: "ADA-2026-AAAA")
        assert client.post("/api/cards", json=card_payload).status_code == 201

        response = client.post("/api/cards", json=card_payload)

        assert response.status_code == 409
        assert response.get_json()["error"]["code"] == "conflict"


class TestGetCard:
    def test_unknown_code(self, client: FlaskClient) -> None:
        response = client.get("/api/cards/NOBODY-2026-ZZZZ")

        assert response.status_code == 404
        assert response.get_json()["error"]["code"] == "not_found"

    def test_malformed_code(self, client: FlaskClient) -> None:
        assert client.get("/api/cards/not-a-code").status_code == 404

    def test_goals_ordered_by_position(self, client: FlaskClient, card_code: str) -> None:
        goals = fetch_card(client, card_code)["goals"]

        assert [g["position"] for g in goals] == list(range(25))


class TestUpdateCard:
    def test_partial_update(self, client: FlaskClient, card_code: str) -> None:
        response = client.put(f"/api/cards/{card_code}", json={"theme": "ocean", "stampColor": "#4ECDC4"})

        card = response.get_json()["data"]
        assert response.status_code == 200
        assert card["theme"] == "ocean"
        assert card["stamp_color"] == "#4ECDC4"
        assert card["display_name"] == "Ada Lovelace"

    def test_display_name_and_stamp(self, client: FlaskClient, card_code: str) -> None:
        client.put(f"/api/cards/{card_code}", json={"displayName": " Countess ", "stampIcon": "🔥"})

        card = fetch_card(client, card_code)["card"]
        assert card["display_name"] == "Countess"
        assert card["stamp_icon"] == "🔥"

    @pytest.mark.parametrize(
        "payload",
        [{"theme": "neon"}, {"stampColor": "gold"}, {"stampColor": "#12345"}, {"displayName": ""}],
    )
    def test_rejects_invalid_settings(self, client: FlaskClient, card_code: str, payload: dict[str, Any]) -> None:
        response = client.put(f"/api/cards/{card_code}", json=payload)

        assert response.status_code == 400

    def test_empty_update_rejected(self, client: FlaskClient, card_code: str) -> None:
        response = client.put(f"/api/cards/{card_code}", json={})

        assert response.status_code == 400
        assert response.get_json()["error"]["message"] == "No updates provided"

    def test_unknown_card(self, client: FlaskClient) -> None:
        assert client.put("/api/cards/NOBODY-2026-ZZZZ", json={"theme": "ocean"}).status_code == 404


class TestDeleteCard:
    def test_owner_mismatch_forbidden(self, client: FlaskClient, card_code: str) -> None:
        response = client.delete(f"/api/cards/{card_code}", json={"ownerName": "ada lovelace"})

        assert response.status_code == 403
        assert response.get_json()["error"]["code"] == "forbidden"
        fetch_card(client, card_code)

    def test_owner_required(self, client: FlaskClient, card_code: str) -> None:
        assert client.delete(f"/api/cards/{card_code}", json={}).status_code == 400

    def test_cascades_goals_and_bingos(self, app, client: FlaskClient, card_code: str) -> None:
        set_completed(client, card_code, [0, 1, 2, 3, 4])
        assert reconcile(client, card_code)["bingos"]

        response = client.delete(f"/api/cards/{card_code}", json={"ownerName": "Ada Lovelace"})

        assert response.status_code == 200
        assert client.get(f"/api/cards/{card_code}").status_code == 404

        with session_scope(app) as session:
            assert session.query(Goal).filter_by(card_code=card_code).count() == 0
            assert session.query(Bingo).filter_by(card_code=card_code).count() == 0
