"""Configuration management for Visual Spec Architect."""

from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    # Gemini API
    gemini_api_key: Optional[str] = None
    
    # Model configuration
    analysis_model: str = "gemini-3-flash-preview"
    primary_image_model: str = "gemini-3-pro-image-preview"
    fallback_image_model: str = "gemini-2.5-flash-image"
    analysis_temperature: float = 0.4
    preview_image_size: str = "1K"
    
    # Network
    request_timeout: float = 120.0  # seconds, applied to Gemini calls and URL fetches
    
    # Local state
    key_store_path: str = "~/.visual_spec_architect/credentials.json"
    ai_log_dir: str = "./data/ai_logs"
    
    # Development
    debug: bool = False
    log_level: str = "INFO"
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra fields in .env file
    )
    
    @property
    def request_timeout_ms(self) -> int:
        """Timeout in milliseconds, as expected by the genai HTTP options."""
        return int(self.request_timeout * 1000)
    
    def has_env_api_key(self) -> bool:
        """Check if a usable API key is provided by the environment.
        
        Placeholder values such as ``YOUR_API_KEY`` are treated as absent.
        """
        key = (self.gemini_api_key or "").strip()
        return bool(key) and not key.startswith("YOUR_")


# Global settings instance
settings = Settings()
