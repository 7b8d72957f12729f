from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import ValidationError

from app.astro.prompt import build_astro_prompts
from app.astro.schemas import PlanetPlacement
from app.core.language import as_text, pick_language
from app.core.llm.openai_client import CompletionRequest, resolve_model
from app.core.llm.relay import CompletionClient, relay_completion
from app.core.settings import Settings
from app.domain.exceptions import ConfigurationError, InvalidRequestError

ENDPOINT = "astro"

_BIRTH_FIELDS = ("date", "time", "place")


def project_planets(*, birth_chart: Any, max_planets: int) -> list[dict[str, Any]]:
    """
    Validate `birthChart.planets` and project each entry to name/sign/degree/longitude.

    Raises InvalidRequestError when the list is absent, not a list, or empty, or
    when an entry cannot be projected.
    """

    raw = birth_chart.get("planets") if isinstance(birth_chart, dict) else None
    if not isinstance(raw, list) or not raw:
        raise InvalidRequestError("Missing birthChart.planets")

    projected: list[dict[str, Any]] = []
    for idx, entry in enumerate(raw):
        if not isinstance(entry, dict):
            raise InvalidRequestError(f"Invalid birthChart.planets[{idx}]")
        try:
            placement = PlanetPlacement.model_validate(entry)
        except ValidationError as exc:
            raise InvalidRequestError(f"Invalid birthChart.planets[{idx}]") from exc
        projected.append(placement.to_prompt_dict())

    return projected[:max_planets]


def _birth_details(birth_chart: dict[str, Any]) -> dict[str, Any]:
    return {k: birth_chart[k] for k in _BIRTH_FIELDS if birth_chart.get(k) not in (None, "")}


class AstroService:
    def __init__(self, *, settings: Settings, llm_client: CompletionClient | None):
        self._settings = settings
        self._llm = llm_client

    def model_for(self, explicit: str | None = None) -> str:
        return resolve_model(
            explicit,
            self._settings.openai_model_astro,
            self._settings.openai_model_chat,
            default=self._settings.openai_default_model,
        )

    async def interpret(
        self,
        *,
        birth_chart: Any,
        question: Any = None,
        lang: Any = None,
        model: str | None = None,
        today: date | None = None,
    ) -> str:
        planets = project_planets(
            birth_chart=birth_chart, max_planets=self._settings.astro_max_planets
        )
        if self._llm is None:
            raise ConfigurationError("Missing OPENAI_API_KEY")

        system_prompt, user_prompt = build_astro_prompts(
            planets=planets,
            language=pick_language(lang),
            reference_date=today or date.today(),
            houses=birth_chart.get("houses"),
            birth=_birth_details(birth_chart),
            focus=as_text(question) if question else None,
        )
        request = CompletionRequest(
            system_prompt=system_prompt,
            user_prompt=user_prompt,
            model=self.model_for(model),
            max_tokens=self._settings.astro_max_tokens,
            temperature=self._settings.astro_temperature,
            timeout_seconds=self._settings.astro_timeout_seconds,
        )
        return await relay_completion(client=self._llm, request=request, endpoint=ENDPOINT)
