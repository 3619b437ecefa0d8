"""Unit tests for Gemini client construction."""

from unittest.mock import patch

import pytest

from visual_spec_architect.errors import MissingCredentialError
from visual_spec_architect.tools.gemini_client import make_client_factory, require_api_key


class TestRequireApiKey:
    """Test require_api_key."""
    
    def test_strips_key(self):
        assert require_api_key("  key  ") == "key"
    
    @pytest.mark.parametrize("key", [None, "", "  "])
    def test_missing(self, key):
        with pytest.raises(MissingCredentialError):
            require_api_key(key)


class TestClientFactory:
    """Test make_client_factory."""
    
    @patch('visual_spec_architect.tools.gemini_client.genai')
    def test_timeout_is_applied(self, mock_genai, test_settings):
        """Test the configured timeout reaches the client in milliseconds."""
        test_settings.request_timeout = 30
        factory = make_client_factory(test_settings)
        
        client = factory("test-key")
        
        assert client is mock_genai.Client.return_value
        kwargs = mock_genai.Client.call_args.kwargs
        assert kwargs["api_key"] == "test-key"
        assert kwargs["http_options"].timeout == 30000
