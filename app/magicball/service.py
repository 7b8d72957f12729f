from __future__ import annotations

from typing import Any

from app.core.language import as_text, pick_language
from app.core.llm.openai_client import CompletionRequest, resolve_model
from app.core.llm.relay import CompletionClient, relay_completion
from app.core.settings import Settings
from app.domain.exceptions import ConfigurationError, InvalidRequestError
from app.magicball.prompt import build_magicball_prompts

ENDPOINT = "magicball"


class MagicBallService:
    def __init__(self, *, settings: Settings, llm_client: CompletionClient | None):
        self._settings = settings
        self._llm = llm_client

    def model_for(self, explicit: str | None = None) -> str:
        return resolve_model(
            explicit,
            self._settings.openai_model_chat,
            default=self._settings.openai_default_model,
        )

    async def ask(self, *, question: Any, lang: Any = None, model: str | None = None) -> str:
        # Falsy values of any JSON type (false, 0, [], {}) count as absent.
        text = as_text(question).strip() if question else ""
        if not text:
            raise InvalidRequestError("Missing question")
        if self._llm is None:
            raise ConfigurationError("Missing OPENAI_API_KEY")

        system_prompt, user_prompt = build_magicball_prompts(
            question=text, language=pick_language(lang)
        )
        request = CompletionRequest(
            system_prompt=system_prompt,
            user_prompt=user_prompt,
            model=self.model_for(model),
            max_tokens=self._settings.magicball_max_tokens,
            temperature=self._settings.magicball_temperature,
            timeout_seconds=self._settings.magicball_timeout_seconds,
        )
        return await relay_completion(client=self._llm, request=request, endpoint=ENDPOINT)
