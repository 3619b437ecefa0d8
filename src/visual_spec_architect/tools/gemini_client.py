"""Construction of Gemini clients for a resolved API key."""

from typing import Any, Callable, Optional

from google import genai
from google.genai import types

from ..config import Settings, settings as default_settings
from ..errors import MissingCredentialError


# Builds a client for one call from the resolved API key
ClientFactory = Callable[[str], Any]


def require_api_key(api_key: Optional[str]) -> str:
    """Return the key or fail before any network call is made."""
    if not api_key or not api_key.strip():
        raise MissingCredentialError()
    return api_key.strip()


def make_client_factory(config: Optional[Settings] = None) -> ClientFactory:
    """Create a factory building ``genai.Client`` instances with the configured timeout."""
    config = config or default_settings
    
    def factory(api_key: str) -> genai.Client:
        return genai.Client(
            api_key=api_key,
            http_options=types.HttpOptions(timeout=config.request_timeout_ms),
        )
    
    return factory
