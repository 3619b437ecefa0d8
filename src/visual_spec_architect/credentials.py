"""API key resolution and persistence for the web front end.

The orchestrators never read keys on their own; the UI resolves one here and
passes it into every call.
"""

import json
import logging
from pathlib import Path
from typing import Optional, Union

from .config import Settings, settings as default_settings


logger = logging.getLogger(__name__)

STORAGE_KEY = "user_gemini_api_key"


class ApiKeyStore:
    """Stores a user-supplied Gemini API key in a small JSON file."""

    def __init__(self, path: Optional[Union[str, Path]] = None, settings: Optional[Settings] = None):
        """Initialize the key store.

        Args:
            path: JSON file holding the stored key, defaults to settings.key_store_path
            settings: Settings providing the environment key
        """
        self.settings = settings or default_settings
        self.path = Path(path or self.settings.key_store_path).expanduser()
        # Key saved during this session; it replaces the environment key until removed
        self._session_key: Optional[str] = None

    @property
    def is_using_env(self) -> bool:
        """True if the environment key is the one in use."""
        return self._session_key is None and self.settings.has_env_api_key()

    def resolve(self) -> Optional[str]:
        """Key saved this session first, then the environment key, then the stored one."""
        if self._session_key:
            return self._session_key
        if self.is_using_env:
            return self.settings.gemini_api_key.strip()
        return self.load()

    def load(self) -> Optional[str]:
        """Read the stored key, if any."""
        if not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable key store {self.path}: {e}")
            return None
        key = data.get(STORAGE_KEY) if isinstance(data, dict) else None
        return key or None

    def save(self, key: str) -> bool:
        """Persist a key and use it for the rest of the session. Blank keys are ignored.

        Returns:
            True if the key was stored
        """
        if not key or not key.strip():
            return False
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({STORAGE_KEY: key.strip()}), encoding="utf-8")
        self._session_key = key.strip()
        try:
            self.path.chmod(0o600)
        except OSError:
            logger.debug(f"Could not restrict permissions on {self.path}")
        logger.info("Stored user API key")
        return True

    def remove(self) -> bool:
        """Delete the stored key.

        Returns:
            True if a key file was removed
        """
        self._session_key = None
        if not self.path.exists():
            return False
        self.path.unlink()
        logger.info("Removed stored user API key")
        return True
