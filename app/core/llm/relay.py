from __future__ import annotations

import time
from typing import Protocol

from app.core.llm.openai_client import CompletionRequest
from app.core.metrics import observe_upstream_call
from app.domain.exceptions import UpstreamError, UpstreamTimeoutError


class CompletionClient(Protocol):
    async def complete(self, request: CompletionRequest) -> str: ...


async def relay_completion(
    *, client: CompletionClient, request: CompletionRequest, endpoint: str
) -> str:
    """Send one completion request and return its non-empty text.

    Failures propagate unchanged; only the outcome is recorded (no prompt or output).
    """

    started = time.perf_counter()
    outcome = "upstream_error"
    try:
        text = await client.complete(request)
        if not text or not text.strip():
            raise UpstreamError("Empty response from upstream")
        outcome = "success"
        return text.strip()
    except UpstreamTimeoutError:
        outcome = "timeout"
        raise
    finally:
        observe_upstream_call(
            endpoint=endpoint,
            outcome=outcome,
            duration_seconds=time.perf_counter() - started,
        )
