from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class OracleRequest(BaseModel):
    # Fields stay untyped so that any JSON value reaches the service, which owns
    # the "Missing question" rule; unknown fields are ignored.
    model_config = ConfigDict(extra="ignore")

    question: Any = Field(
        default=None,
        description="Free-form question for the oracle. Required; must not be blank.",
        examples=["Should I take the job?"],
    )
    lang: Any = Field(
        default=None,
        description="Language hint. Values starting with `en` select English; "
        "anything else selects Romanian.",
        examples=["en", "ro"],
    )
