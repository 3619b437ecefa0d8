"""Error types raised by the analysis and preview pipelines."""

from dataclasses import dataclass
from typing import List, Optional


class VisualSpecError(Exception):
    """Base class for all errors surfaced to the caller."""
    pass


class MissingCredentialError(VisualSpecError):
    """Raised before any network call when no API key is available."""
    
    def __init__(self, message: str = "API Key is missing. Please configure it in the settings."):
        super().__init__(message)


class EmptyInputError(VisualSpecError):
    """Raised when there is nothing to send upstream."""
    pass


class EmptyResponseError(VisualSpecError):
    """The analysis call returned no text body."""
    
    def __init__(self, message: str = "Empty response from AI"):
        super().__init__(message)


class MalformedResponseError(VisualSpecError):
    """The model output could not be parsed as a JSON object.
    
    The raw text is kept on the exception for diagnostics.
    """
    
    def __init__(self, raw_text: str, detail: Optional[str] = None):
        self.raw_text = raw_text
        self.detail = detail
        message = "Failed to parse AI response. The model output was not valid JSON."
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


@dataclass(frozen=True)
class TierFailure:
    """Why one image tier did not produce an image."""
    tier: str
    model: str
    message: str


class PreviewGenerationError(VisualSpecError):
    """Every image tier failed."""
    
    def __init__(self, message: str, attempts: List[TierFailure], permission_denied: bool = False):
        self.attempts = attempts
        self.permission_denied = permission_denied
        super().__init__(message)
