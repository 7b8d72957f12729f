from __future__ import annotations

from fastapi import Depends, Request

from app.core.llm.openai_client import OpenAIClient, OpenAIConfig
from app.core.settings import Settings


def get_app_settings(request: Request) -> Settings:
    """Return the settings constructed once at application startup."""

    return request.app.state.settings


def get_completion_client(settings: Settings = Depends(get_app_settings)) -> OpenAIClient | None:
    """
    Dependency provider for OpenAIClient.

    Returns None when not configured so routes can return a safe error envelope
    without raising during dependency resolution.
    """

    if not settings.openai_api_key:
        return None

    config = OpenAIConfig(
        api_key=settings.openai_api_key,
        base_url=settings.openai_base_url,
    )
    return OpenAIClient(config=config)
