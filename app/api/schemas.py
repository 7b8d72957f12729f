from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class HealthOut(BaseModel):
    """Health check response."""

    ok: Literal[True] = True
    status: str = Field(
        description="Service status indicator. `ok` means the API process is up and responding.",
        examples=["ok"],
    )
    service: str = Field(examples=["sanctuary-relay"])


class RelayTextOut(BaseModel):
    """Successful relay response carrying the generated text."""

    ok: Literal[True] = True
    text: str = Field(min_length=1, description="Generated text (trimmed, never empty).")


class RelayErrorOut(BaseModel):
    """Failure envelope shared by every endpoint."""

    ok: Literal[False] = False
    error: str = Field(examples=["Missing question"])


RELAY_ERROR_RESPONSES: dict[int | str, dict] = {
    400: {"model": RelayErrorOut, "description": "Missing or malformed input."},
    500: {"model": RelayErrorOut, "description": "Upstream failure, timeout or misconfiguration."},
}
