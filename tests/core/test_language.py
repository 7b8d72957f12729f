from __future__ import annotations

import pytest

from app.core.language import as_text, pick_language


@pytest.mark.parametrize(
    "value", ["en", "EN", "en-US", "en_GB", "English", "eng", ["en"], ["EN", "ro"]]
)
def test_values_starting_with_en_select_english(value) -> None:
    assert pick_language(value) == "en"


@pytest.mark.parametrize(
    "value", [None, "", "ro", "RO", "fr", "de-en", " en", 0, "e", True, False, [], ["ro", "en"], {}]
)
def test_everything_else_selects_romanian(value) -> None:
    assert pick_language(value) == "ro"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, ""),
        (True, "true"),
        (42, "42"),
        (["a", 1, False], "a,1,false"),
        ("  kept  ", "  kept  "),
    ],
)
def test_as_text(value, expected) -> None:
    assert as_text(value) == expected
