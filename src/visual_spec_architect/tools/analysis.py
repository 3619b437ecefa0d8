"""Moodboard analysis using the Gemini API."""

import base64
import logging
from typing import List, Optional, Sequence

import httpx
from google.genai import types

from ..config import Settings, settings as default_settings
from ..errors import EmptyInputError, EmptyResponseError, VisualSpecError
from ..models.analysis import AnalysisResult
from ..models.medium import TargetMedium
from ..models.visual_asset import (
    EncodingOutcome,
    InlineDataPart,
    RequestPart,
    SkippedAsset,
    TextPart,
    VisualAsset,
)
from ..utils.ai_output_logger import ai_logger
from ..utils.simple_logger import log_start, log_update, log_complete
from .asset_encoder import encode_assets
from .gemini_client import ClientFactory, make_client_factory, require_api_key
from .prompts import SYSTEM_INSTRUCTION, build_analysis_instruction
from .response_repair import parse_json_response


logger = logging.getLogger(__name__)


def to_genai_part(part: RequestPart) -> types.Part:
    """Convert a request part into the SDK's Part type."""
    if isinstance(part, InlineDataPart):
        return types.Part.from_bytes(
            data=base64.b64decode(part.data),
            mime_type=part.mime_type,
        )
    return types.Part.from_text(text=part.text)


def collect_parts(outcomes: Sequence[EncodingOutcome]) -> List[RequestPart]:
    """Keep the parts of encoded assets in order and log the skipped ones."""
    parts: List[RequestPart] = []
    for outcome in outcomes:
        if isinstance(outcome, SkippedAsset):
            logger.warning(f"Skipping asset {outcome.asset_id}: {outcome.reason}")
            continue
        if outcome.degraded:
            log_update(logger, f"Asset {outcome.asset_id} sent as URL text only")
        parts.append(outcome.part)
    return parts


class AnalysisOrchestrator:
    """Runs one "analyze this moodboard" request end to end."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client_factory: Optional[ClientFactory] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize the orchestrator.

        Args:
            settings: Application settings, defaults to the global instance
            client_factory: Builds a Gemini client from an API key
            http_client: Client used to fetch remote assets
        """
        self.settings = settings or default_settings
        self.client_factory = client_factory or make_client_factory(self.settings)
        self.http_client = http_client

    async def analyze(
        self,
        assets: Sequence[VisualAsset],
        medium: TargetMedium,
        api_key: Optional[str],
    ) -> AnalysisResult:
        """Analyze a moodboard for the given medium.

        Args:
            assets: Ordered, non-empty list of moodboard images
            medium: Target medium
            api_key: Resolved Gemini API key

        Returns:
            Fully populated AnalysisResult

        Raises:
            MissingCredentialError: If no API key is given
            EmptyInputError: If no assets are given
            EmptyResponseError: If the model returns no text
            MalformedResponseError: If the text is not a JSON object
            VisualSpecError: If the API call itself fails
        """
        key = require_api_key(api_key)
        if not assets:
            raise EmptyInputError("No assets provided for analysis.")

        log_start(logger, f"Analyzing moodboard of {len(assets)} asset(s) for {medium.value}")

        log_update(logger, "Encoding assets...")
        outcomes = await encode_assets(assets, self.http_client, timeout=self.settings.request_timeout)
        parts = collect_parts(outcomes)
        asset_part_count = len(parts)

        instruction = build_analysis_instruction(medium)
        parts.append(TextPart(text=instruction))

        log_update(logger, f"Sending {len(parts)} part(s) to {self.settings.analysis_model}...")
        try:
            response_text = await self._call_gemini(key, parts)
        except VisualSpecError as e:
            ai_logger.log_analysis(medium.value, asset_part_count, instruction, error=str(e))
            raise

        if not response_text:
            ai_logger.log_analysis(medium.value, asset_part_count, instruction, error="empty response")
            raise EmptyResponseError()

        log_update(logger, "Parsing analysis results...")
        try:
            data = parse_json_response(response_text)
        except VisualSpecError as e:
            ai_logger.log_analysis(
                medium.value, asset_part_count, instruction,
                raw_response=response_text, error=str(e)
            )
            raise

        result = AnalysisResult.from_payload(data, raw_response=response_text)

        ai_logger.log_analysis(
            medium.value, asset_part_count, instruction,
            raw_response=response_text, result=result.model_dump()
        )

        log_complete(logger, f"Analysis complete - {len(result.summary.primary_colors)} colors, "
                             f"{len(result.summary.mood_keywords)} keywords")
        return result

    async def _call_gemini(self, api_key: str, parts: List[RequestPart]) -> Optional[str]:
        """Issue the single analysis request and return its text body."""
        client = self.client_factory(api_key)
        try:
            response = await client.aio.models.generate_content(
                model=self.settings.analysis_model,
                contents=types.Content(
                    role="user",
                    parts=[to_genai_part(part) for part in parts],
                ),
                config=types.GenerateContentConfig(
                    system_instruction=SYSTEM_INSTRUCTION,
                    temperature=self.settings.analysis_temperature,
                    response_mime_type="application/json",
                ),
            )
        except Exception as e:
            logger.error(f"Gemini analysis call failed: {e}")
            raise VisualSpecError(
                f"Failed to analyze moodboard. Please try again or check your API Key. ({e})"
            ) from e
        finally:
            await client.aio.aclose()

        return response.text
