"""Shared fixtures for Visual Spec Architect tests."""

from unittest.mock import AsyncMock, Mock

import pytest

from visual_spec_architect.config import Settings
from visual_spec_architect.utils.ai_output_logger import ai_logger


@pytest.fixture
def test_settings(tmp_path):
    """Settings isolated from the environment and any .env file."""
    return Settings(
        _env_file=None,
        gemini_api_key=None,
        key_store_path=str(tmp_path / "credentials.json"),
        ai_log_dir=str(tmp_path / "ai_logs"),
    )


@pytest.fixture
def generate_content():
    """Stand-in for client.aio.models.generate_content."""
    return AsyncMock()


@pytest.fixture
def gemini_client(generate_content):
    """Fake Gemini client wired to generate_content."""
    client = Mock()
    client.aio.models.generate_content = generate_content
    client.aio.aclose = AsyncMock()
    return client


@pytest.fixture
def client_factory(gemini_client):
    """Factory returning the fake Gemini client."""
    return Mock(return_value=gemini_client)


@pytest.fixture(autouse=True)
def reset_ai_logger():
    """Keep the AI output logger singleton clean between tests."""
    ai_logger.reset()
    yield
    ai_logger.reset()
