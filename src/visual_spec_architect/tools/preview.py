"""Preview image generation with an ordered model fallback."""

import base64
import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

from google.genai import types

from ..config import Settings, settings as default_settings
from ..errors import EmptyInputError, PreviewGenerationError, TierFailure
from ..models.medium import TargetMedium
from ..utils.ai_output_logger import ai_logger
from ..utils.simple_logger import log_start, log_update, log_complete
from .gemini_client import ClientFactory, make_client_factory, require_api_key


logger = logging.getLogger(__name__)

PERMISSION_MARKERS = ("403", "PERMISSION")
DEFAULT_IMAGE_MIME_TYPE = "image/png"


@dataclass(frozen=True)
class ImageTier:
    """One image backend in the fallback order."""
    name: str
    model: str
    image_size: Optional[str] = None  # Not every model accepts a size hint

    def build_config(self, aspect_ratio: str) -> types.GenerateContentConfig:
        image_config_kwargs = {"aspect_ratio": aspect_ratio}
        if self.image_size:
            image_config_kwargs["image_size"] = self.image_size
        return types.GenerateContentConfig(
            response_modalities=["TEXT", "IMAGE"],
            image_config=types.ImageConfig(**image_config_kwargs),
        )


def default_tiers(config: Optional[Settings] = None) -> List[ImageTier]:
    """High quality model first, then the faster one without a size hint."""
    config = config or default_settings
    return [
        ImageTier("primary", config.primary_image_model, config.preview_image_size),
        ImageTier("fallback", config.fallback_image_model),
    ]


def extract_first_image(response: Any) -> Optional[str]:
    """Return the first inline image in a response as a data URI.

    Scans every candidate and every part in order.
    """
    for candidate in getattr(response, "candidates", None) or []:
        content = getattr(candidate, "content", None)
        for part in getattr(content, "parts", None) or []:
            inline_data = getattr(part, "inline_data", None)
            if inline_data is None or not inline_data.data:
                continue
            data = inline_data.data
            # data may be bytes or base64 string
            if isinstance(data, bytes):
                data = base64.b64encode(data).decode("ascii")
            mime_type = inline_data.mime_type or DEFAULT_IMAGE_MIME_TYPE
            return f"data:{mime_type};base64,{data}"
    return None


def is_permission_error(message: str) -> bool:
    return any(marker in message for marker in PERMISSION_MARKERS)


class PreviewOrchestrator:
    """Turns an image prompt into a single preview image."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client_factory: Optional[ClientFactory] = None,
        tiers: Optional[Sequence[ImageTier]] = None,
    ):
        self.settings = settings or default_settings
        self.client_factory = client_factory or make_client_factory(self.settings)
        self.tiers = list(tiers) if tiers is not None else default_tiers(self.settings)

    async def generate(self, prompt: str, medium: TargetMedium, api_key: Optional[str]) -> str:
        """Generate a preview image for the prompt.

        Tiers are tried one after another; the first one that yields an image wins.

        Args:
            prompt: Image generation prompt
            medium: Target medium, decides the aspect ratio
            api_key: Resolved Gemini API key

        Returns:
            Data URI of the generated image

        Raises:
            MissingCredentialError: If no API key is given
            EmptyInputError: If the prompt is blank
            PreviewGenerationError: If every tier failed
        """
        key = require_api_key(api_key)
        if not prompt or not prompt.strip():
            raise EmptyInputError("No prompt provided for preview generation.")

        aspect_ratio = medium.aspect_ratio
        client = self.client_factory(key)
        failures: List[TierFailure] = []

        log_start(logger, f"Generating preview ({aspect_ratio})")
        try:
            for tier in self.tiers:
                log_update(logger, f"Trying {tier.name} model {tier.model}...")
                try:
                    image = await self._attempt(client, tier, prompt, aspect_ratio)
                except Exception as e:
                    failures.append(TierFailure(tier.name, tier.model, str(e)))
                    logger.warning(f"{tier.model} image generation failed: {e}")
                    ai_logger.log_preview(prompt, tier.name, tier.model, aspect_ratio, False, error=str(e))
                    continue

                ai_logger.log_preview(prompt, tier.name, tier.model, aspect_ratio, True)
                log_complete(logger, f"Preview generated by {tier.model}")
                return image
        finally:
            await client.aio.aclose()

        raise self._combined_failure(failures)

    async def _attempt(self, client: Any, tier: ImageTier, prompt: str, aspect_ratio: str) -> str:
        response = await client.aio.models.generate_content(
            model=tier.model,
            contents=types.Content(role="user", parts=[types.Part.from_text(text=prompt)]),
            config=tier.build_config(aspect_ratio),
        )
        image = extract_first_image(response)
        if image is None:
            raise ValueError(f"{tier.model} returned no image data")
        return image

    def _combined_failure(self, failures: List[TierFailure]) -> PreviewGenerationError:
        message = "Image generation failed."
        permission_denied = bool(failures) and is_permission_error(failures[0].message)
        if permission_denied:
            message += " (Permission Denied: Please check if your API Key supports the selected model)."
        else:
            details = " ".join(
                f"{failure.tier.capitalize()} ({failure.model}) error: {failure.message}."
                for failure in failures
            )
            message = f"{message} {details}".strip()

        logger.error(message)
        return PreviewGenerationError(message, attempts=failures, permission_denied=permission_denied)
