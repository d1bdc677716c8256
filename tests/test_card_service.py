"""Tests for card code generation and goal layout."""

import random
from collections import Counter

import pytest

from goalbingo.services.card_service import generate_card_code, is_valid_card_code, layout_goals
from helpers import GOAL_TEXTS


class TestGenerateCardCode:
    def test_format(self) -> None:
        code = generate_card_code("Ada Lovelace", year=2026, rng=random.Random(1))

        assert code.startswith("ADALOVELAC-2026-")
        assert is_valid_card_code(code)

    def test_name_keeps_letters_only(self) -> None:
        code = generate_card_code("j.r.r. tolkien 3rd", year=2026, rng=random.Random(1))

        assert code.split("-")[0] == "JRRTOLKIEN"

    def test_name_without_letters_falls_back(self) -> None:
        code = generate_card_code("1234 !!", year=2026, rng=random.Random(1))

        assert code.startswith("CARD-2026-")
        assert is_valid_card_code(code)

    def test_suffix_varies(self) -> None:
        rng = random.Random(7)
        codes = {generate_card_code("Sam", year=2026, rng=rng) for _ in range(20)}

        assert len(codes) > 1

    @pytest.mark.parametrize(
        "code",
        ["sam-2026-ABCD", "SAM-26-ABCD", "SAM-2026-ABC", "SAM2026ABCD", "", "SAM-2026-AB/D"],
    )
    def test_rejects_malformed_codes(self, code: str) -> None:
        assert not is_valid_card_code(code)


class TestLayoutGoals:
    def test_free_space_goes_to_center(self) -> None:
        layout = layout_goals(GOAL_TEXTS, 3, rng=random.Random(0))

        center = layout[12]
        assert center["text"] == "Goal 3"
        assert center["is_free_space"] is True
        assert [cell["position"] for cell in layout] == list(range(25))
        assert sum(cell["is_free_space"] for cell in layout) == 1

    def test_other_goals_are_a_permutation(self) -> None:
        layout = layout_goals(GOAL_TEXTS, 3, rng=random.Random(0))

        others = [cell["text"] for cell in layout if not cell["is_free_space"]]
        expected = [text for text in GOAL_TEXTS if text != "Goal 3"]
        assert Counter(others) == Counter(expected)

    def test_layout_differs_between_creations(self) -> None:
        rng = random.Random(42)
        layouts = {tuple(cell["text"] for cell in layout_goals(GOAL_TEXTS, 0, rng=rng)) for _ in range(5)}

        assert len(layouts) > 1

    def test_duplicate_texts_are_kept(self) -> None:
        texts = ["Same"] * 25

        layout = layout_goals(texts, 24, rng=random.Random(0))

        assert [cell["text"] for cell in layout] == texts
