from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from app.core.llm.deps import get_completion_client
from app.core.settings import Settings
from tests._helpers import FakeCompletionClient


@pytest.fixture()
def settings() -> Settings:
    # Explicit values win over any OPENAI_* variables present in the test environment.
    return Settings(
        _env_file=None,
        openai_api_key="sk-test",
        openai_default_model="gpt-4.1",
        openai_model_chat=None,
        openai_model_astro=None,
    )


@pytest.fixture()
def fake_llm() -> FakeCompletionClient:
    return FakeCompletionClient()


@pytest.fixture
def client(settings: Settings, fake_llm: FakeCompletionClient):
    from app.main import create_app

    app = create_app(settings)
    app.dependency_overrides[get_completion_client] = lambda: fake_llm
    with TestClient(app) as c:
        yield c
