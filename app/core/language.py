from __future__ import annotations

from typing import Any, Literal

Language = Literal["en", "ro"]

DEFAULT_LANGUAGE: Language = "ro"


def as_text(value: Any) -> str:
    """Render a loosely typed JSON value as plain text.

    Lists are joined with commas and booleans are lowercased, so `["en"]` reads
    as "en" and `true` as "true".
    """

    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(as_text(item) for item in value)
    return str(value)


def pick_language(lang: Any) -> Language:
    """Map a free-form language hint to a template language.

    Any value whose lowercase form starts with "en" selects English; everything
    else, including an absent value, selects the Romanian default.
    """

    value = as_text(lang or DEFAULT_LANGUAGE).lower()
    return "en" if value.startswith("en") else DEFAULT_LANGUAGE
