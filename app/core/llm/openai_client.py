from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any

import httpx

from app.domain.exceptions import UpstreamError, UpstreamTimeoutError


@dataclass(frozen=True)
class OpenAIConfig:
    api_key: str
    base_url: str


@dataclass(frozen=True)
class CompletionRequest:
    system_prompt: str
    user_prompt: str
    model: str
    max_tokens: int
    temperature: float
    timeout_seconds: float


def resolve_model(*candidates: str | None, default: str) -> str:
    """Return the first non-blank model identifier, falling back to `default`."""

    for candidate in candidates:
        if candidate and candidate.strip():
            return candidate.strip()
    return default


def _provider_error_message(resp: httpx.Response) -> str:
    try:
        data = resp.json()
    except ValueError:
        data = None
    if isinstance(data, dict):
        error = data.get("error")
        if isinstance(error, dict):
            message = error.get("message")
            if isinstance(message, str) and message.strip():
                return message.strip()
    return f"upstream HTTP {resp.status_code}"


def _extract_content(resp: httpx.Response) -> str:
    try:
        data = resp.json()
        content = data["choices"][0]["message"]["content"]
    except (ValueError, KeyError, IndexError, TypeError):
        return ""
    if not isinstance(content, str):
        return ""
    return content.strip()


class OpenAIClient:
    """
    Minimal chat-completion client: one request in, one trimmed message out.

    Design notes:
    - No logging in this module (prompts/outputs carry personal data).
    - Exactly one attempt per call; failures surface to the caller.
    - The exchange is bounded by `timeout_seconds`; on elapse the in-flight request
      is cancelled and `UpstreamTimeoutError` is raised.
    """

    def __init__(
        self,
        *,
        config: OpenAIConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._config = config
        self._transport = transport

    async def complete(self, request: CompletionRequest) -> str:
        url = f"{self._config.base_url.rstrip('/')}/chat/completions"
        headers = {
            "Authorization": f"Bearer {self._config.api_key}",
            "Content-Type": "application/json",
        }
        payload: dict[str, Any] = {
            "model": request.model,
            "messages": [
                {"role": "system", "content": request.system_prompt},
                {"role": "user", "content": request.user_prompt},
            ],
            "max_tokens": request.max_tokens,
            "temperature": request.temperature,
        }

        try:
            async with httpx.AsyncClient(
                timeout=request.timeout_seconds, transport=self._transport
            ) as client:
                resp = await asyncio.wait_for(
                    client.post(url, headers=headers, json=payload),
                    timeout=request.timeout_seconds,
                )
        except (TimeoutError, httpx.TimeoutException) as exc:
            raise UpstreamTimeoutError() from exc
        except httpx.HTTPError as exc:
            raise UpstreamError("Upstream request failed") from exc

        if not resp.is_success:
            raise UpstreamError(_provider_error_message(resp))

        text = _extract_content(resp)
        if not text:
            raise UpstreamError("Empty response from upstream")
        return text
