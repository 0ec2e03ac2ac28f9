"""
Shared fixtures: settings without a .env file and mocked Gemini SDK clients.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from mermaidgen.agents.diagram_agent import DiagramAgent
from mermaidgen.agents.gemini_client import GeminiClient
from mermaidgen.config import Settings


@pytest.fixture
def settings() -> Settings:
    return Settings(gemini_api_key="test-key", _env_file=None)


@pytest.fixture
def genai_client() -> MagicMock:
    """Stand-in for google.genai.Client; set generate_content's return value per test."""
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock()
    return client


@pytest.fixture
def gemini_client(settings, genai_client) -> GeminiClient:
    return GeminiClient(settings, client=genai_client)


@pytest.fixture
def model_reply(genai_client):
    """Make the mocked model answer with the given text."""
    def _reply(text):
        genai_client.aio.models.generate_content.return_value = MagicMock(text=text)
    return _reply


@pytest.fixture
def agent(settings, gemini_client) -> DiagramAgent:
    return DiagramAgent(settings=settings, client=gemini_client)
