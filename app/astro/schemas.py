from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class PlanetPlacement(BaseModel):
    """
    Projection of one caller-supplied planet entry.

    Only these fields are forwarded upstream; anything else on the entry
    (meanings, glyphs, UI hints) is dropped to keep the prompt small and stable.
    """

    model_config = ConfigDict(extra="ignore")

    name: str | None = None
    sign: str | None = None
    degree: float | str | None = None
    longitude: float | None = None

    def to_prompt_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"name": self.name, "sign": self.sign, "degree": self.degree}
        if self.longitude is not None:
            out["longitude"] = self.longitude
        return out


class AstroRequest(BaseModel):
    # birthChart stays opaque here; the service validates it so that every shape
    # problem maps to the same caller-facing message.
    model_config = ConfigDict(extra="ignore")

    birth_chart: Any = Field(
        default=None,
        alias="birthChart",
        description="Precomputed chart: `planets` (required, non-empty list of "
        "`{name, sign, degree, longitude?}`), optional `houses`, `date`, `time`, `place`.",
        examples=[{"planets": [{"name": "Sun", "sign": "Leo", "degree": 12.3}]}],
    )
    question: Any = Field(
        default=None,
        validation_alias=AliasChoices("question", "focus"),
        description="Optional focus for the reading.",
    )
    lang: Any = Field(
        default=None,
        description="Language hint. Values starting with `en` select English; "
        "anything else selects Romanian.",
    )
