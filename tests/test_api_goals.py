"""Tests for the goal update endpoint."""

from datetime import date

import pytest
from flask.testing import FlaskClient

from helpers import fetch_card, goal_ids_by_position


@pytest.fixture
def goal_id(client: FlaskClient, card_code: str) -> int:
    return goal_ids_by_position(client, card_code)[0]


def _put(client: FlaskClient, goal_id: int, payload: dict):
    return client.put(f"/api/goals/{goal_id}", json=payload)


class TestCompleteGoal:
    def test_complete_with_date_and_notes(self, client: FlaskClient, goal_id: int) -> None:
        response = _put(client, goal_id, {"isCompleted": True, "completedDate": "2026-03-14", "notes": "Pi day"})

        goal = response.get_json()["data"]
        assert response.status_code == 200
        assert goal["is_completed"] is True
        assert goal["completed_date"] == "2026-03-14"
        assert goal["notes"] == "Pi day"

    def test_complete_defaults_to_today(self, client: FlaskClient, goal_id: int) -> None:
        goal = _put(client, goal_id, {"isCompleted": True}).get_json()["data"]

        assert goal["completed_date"] == date.today().isoformat()

    def test_notes_are_escaped(self, client: FlaskClient, goal_id: int) -> None:
        goal = _put(client, goal_id, {"isCompleted": True, "notes": "<script>"}).get_json()["data"]

        assert goal["notes"] == "&lt;script&gt;"

    def test_notes_length_capped(self, client: FlaskClient, goal_id: int) -> None:
        response = _put(client, goal_id, {"isCompleted": True, "notes": "n" * 501})

        assert response.status_code == 400

    def test_notes_without_completion_rejected(self, client: FlaskClient, goal_id: int) -> None:
        response = _put(client, goal_id, {"notes": "too early"})

        assert response.status_code == 400
        assert "notes" in response.get_json()["error"]["details"]

    def test_resave_keeps_goal_completed(self, client: FlaskClient, goal_id: int) -> None:
        _put(client, goal_id, {"isCompleted": True, "completedDate": "2026-01-01"})
        goal = _put(client, goal_id, {"isCompleted": True, "completedDate": "2026-01-02"}).get_json()["data"]

        assert goal["is_completed"] is True
        assert goal["completed_date"] == "2026-01-02"


class TestUncompleteGoal:
    def test_clears_date_and_notes(self, client: FlaskClient, goal_id: int) -> None:
        _put(client, goal_id, {"isCompleted": True, "notes": "done"})

        goal = _put(client, goal_id, {"isCompleted": False}).get_json()["data"]

        assert goal["is_completed"] is False
        assert goal["completed_date"] is None
        assert goal["notes"] is None

    def test_free_space_stays_complete(self, client: FlaskClient, card_code: str) -> None:
        free_id = goal_ids_by_position(client, card_code)[12]

        response = _put(client, free_id, {"isCompleted": False})

        assert response.status_code == 400
        assert fetch_card(client, card_code)["goals"][12]["is_completed"] is True


class TestEditGoal:
    def test_edit_text(self, client: FlaskClient, card_code: str, goal_id: int) -> None:
        goal = _put(client, goal_id, {"text": "  Learn Python  "}).get_json()["data"]

        assert goal["text"] == "Learn Python"
        assert goal["is_completed"] is False

    @pytest.mark.parametrize("text", ["", "   ", "t" * 101])
    def test_invalid_text(self, client: FlaskClient, goal_id: int, text: str) -> None:
        assert _put(client, goal_id, {"text": text}).status_code == 400

    def test_empty_update_rejected(self, client: FlaskClient, goal_id: int) -> None:
        assert _put(client, goal_id, {}).status_code == 400

    def test_unknown_goal(self, client: FlaskClient, card_code: str) -> None:
        response = _put(client, 999_999, {"isCompleted": True})

        assert response.status_code == 404
        assert response.get_json()["error"]["code"] == "not_found"
