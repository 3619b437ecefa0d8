"""Unit tests for preview image generation."""

import base64
from types import SimpleNamespace

import pytest

from fakes import PNG_BYTES, image_response, png_data_uri, text_only_response
from visual_spec_architect.errors import EmptyInputError, MissingCredentialError, PreviewGenerationError
from visual_spec_architect.models import TargetMedium
from visual_spec_architect.tools.preview import ImageTier, PreviewOrchestrator, extract_first_image


PROMPT = "Constructivist title slide with bold red diagonals"


@pytest.fixture
def orchestrator(test_settings, client_factory):
    return PreviewOrchestrator(settings=test_settings, client_factory=client_factory)


def called_models(generate_content):
    return [c.kwargs["model"] for c in generate_content.call_args_list]


class TestExtractFirstImage:
    """Test extract_first_image."""
    
    def test_bytes_are_base64_encoded(self):
        assert extract_first_image(image_response()) == png_data_uri()
    
    def test_base64_string_passes_through(self):
        encoded = base64.b64encode(PNG_BYTES).decode("ascii")
        
        assert extract_first_image(image_response(data=encoded, mime_type="image/jpeg")) == \
            f"data:image/jpeg;base64,{encoded}"
    
    def test_scans_later_parts_and_candidates(self):
        """Test the first image anywhere in the response is returned."""
        text_part = SimpleNamespace(text="Here is your image", inline_data=None)
        image_part = image_response().candidates[0].content.parts[0]
        response = SimpleNamespace(candidates=[
            SimpleNamespace(content=SimpleNamespace(parts=[text_part])),
            SimpleNamespace(content=None),
            SimpleNamespace(content=SimpleNamespace(parts=[text_part, image_part])),
        ])
        
        assert extract_first_image(response) == png_data_uri()
    
    def test_no_image(self):
        assert extract_first_image(text_only_response()) is None
        assert extract_first_image(SimpleNamespace(candidates=None)) is None


class TestPreviewFallback:
    """Test the two-tier fallback."""
    
    @pytest.mark.asyncio
    async def test_primary_success_short_circuits(self, orchestrator, generate_content):
        generate_content.return_value = image_response()
        
        result = await orchestrator.generate(PROMPT, TargetMedium.POSTER, "test-key")
        
        assert result == png_data_uri()
        assert called_models(generate_content) == ["gemini-3-pro-image-preview"]
    
    @pytest.mark.asyncio
    async def test_primary_error_falls_back(self, orchestrator, generate_content):
        """Test the fallback image is returned after one primary attempt."""
        fallback_bytes = b"fallback-image"
        generate_content.side_effect = [
            RuntimeError("500 INTERNAL"),
            image_response(data=fallback_bytes, mime_type="image/jpeg"),
        ]
        
        result = await orchestrator.generate(PROMPT, TargetMedium.POSTER, "test-key")
        
        assert result == png_data_uri(fallback_bytes, "image/jpeg")
        assert called_models(generate_content) == ["gemini-3-pro-image-preview", "gemini-2.5-flash-image"]
    
    @pytest.mark.asyncio
    async def test_primary_without_image_falls_back(self, orchestrator, generate_content):
        generate_content.side_effect = [text_only_response(), image_response()]
        
        result = await orchestrator.generate(PROMPT, TargetMedium.SAAS, "test-key")
        
        assert result == png_data_uri()
        assert generate_content.call_count == 2
    
    @pytest.mark.asyncio
    async def test_size_hint_only_on_primary(self, orchestrator, generate_content):
        """Test the fallback tier is called without an image size."""
        generate_content.side_effect = [RuntimeError("boom"), image_response()]
        
        await orchestrator.generate(PROMPT, TargetMedium.POSTER, "test-key")
        
        primary, fallback = [c.kwargs["config"].image_config for c in generate_content.call_args_list]
        assert primary.image_size == "1K"
        assert fallback.image_size is None
    
    @pytest.mark.asyncio
    @pytest.mark.parametrize("medium,ratio", [
        (TargetMedium.SLIDES, "16:9"),
        (TargetMedium.SAAS, "3:4"),
        (TargetMedium.POSTER, "3:4"),
    ])
    async def test_aspect_ratio_on_both_attempts(self, orchestrator, generate_content, medium, ratio):
        generate_content.side_effect = [RuntimeError("boom"), image_response()]
        
        await orchestrator.generate(PROMPT, medium, "test-key")
        
        ratios = [c.kwargs["config"].image_config.aspect_ratio for c in generate_content.call_args_list]
        assert ratios == [ratio, ratio]
    
    @pytest.mark.asyncio
    async def test_prompt_is_sent_as_text(self, orchestrator, generate_content):
        generate_content.return_value = image_response()
        
        await orchestrator.generate(PROMPT, TargetMedium.SLIDES, "test-key")
        
        parts = generate_content.call_args.kwargs["contents"].parts
        assert [p.text for p in parts] == [PROMPT]


class TestPreviewFailures:
    """Test failures surfaced to the caller."""
    
    @pytest.mark.asyncio
    async def test_both_tiers_fail(self, orchestrator, generate_content):
        """Test the message carries detail from both attempts."""
        generate_content.side_effect = [
            RuntimeError("500 INTERNAL from pro"),
            RuntimeError("429 RESOURCE_EXHAUSTED from flash"),
        ]
        
        with pytest.raises(PreviewGenerationError) as exc_info:
            await orchestrator.generate(PROMPT, TargetMedium.SLIDES, "test-key")
        
        message = str(exc_info.value)
        assert message.startswith("Image generation failed.")
        assert "500 INTERNAL from pro" in message
        assert "429 RESOURCE_EXHAUSTED from flash" in message
        assert not exc_info.value.permission_denied
        assert [a.tier for a in exc_info.value.attempts] == ["primary", "fallback"]
    
    @pytest.mark.asyncio
    async def test_fallback_without_image_is_reported(self, orchestrator, generate_content):
        generate_content.side_effect = [RuntimeError("timeout"), text_only_response()]
        
        with pytest.raises(PreviewGenerationError, match="returned no image data"):
            await orchestrator.generate(PROMPT, TargetMedium.SLIDES, "test-key")
    
    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", ["403 Forbidden", "PERMISSION_DENIED: model not allowed"])
    async def test_permission_denied_is_distinguished(self, orchestrator, generate_content, error):
        generate_content.side_effect = [RuntimeError(error), RuntimeError("also failed")]
        
        with pytest.raises(PreviewGenerationError, match="Permission Denied") as exc_info:
            await orchestrator.generate(PROMPT, TargetMedium.POSTER, "test-key")
        
        assert exc_info.value.permission_denied
    
    @pytest.mark.asyncio
    async def test_missing_credential(self, orchestrator, client_factory, generate_content):
        with pytest.raises(MissingCredentialError):
            await orchestrator.generate(PROMPT, TargetMedium.SLIDES, None)
        
        assert client_factory.call_count == 0
        assert generate_content.call_count == 0
    
    @pytest.mark.asyncio
    async def test_blank_prompt(self, orchestrator, generate_content):
        with pytest.raises(EmptyInputError):
            await orchestrator.generate("   ", TargetMedium.SLIDES, "test-key")
        
        assert generate_content.call_count == 0


class TestCustomTiers:
    """Test tier lists other than the default pair."""
    
    @pytest.mark.asyncio
    async def test_third_tier(self, test_settings, client_factory, generate_content):
        tiers = [
            ImageTier("primary", "model-a", "2K"),
            ImageTier("fallback", "model-b"),
            ImageTier("last-resort", "model-c"),
        ]
        orchestrator = PreviewOrchestrator(settings=test_settings, client_factory=client_factory, tiers=tiers)
        generate_content.side_effect = [RuntimeError("a"), RuntimeError("b"), image_response()]
        
        result = await orchestrator.generate(PROMPT, TargetMedium.SLIDES, "test-key")
        
        assert result == png_data_uri()
        assert called_models(generate_content) == ["model-a", "model-b", "model-c"]


class TestClientLifecycle:
    """Test the Gemini client is closed once per preview."""
    
    @pytest.mark.asyncio
    async def test_closed_after_success(self, orchestrator, gemini_client, generate_content):
        generate_content.return_value = image_response()
        
        await orchestrator.generate(PROMPT, TargetMedium.SLIDES, "test-key")
        
        gemini_client.aio.aclose.assert_awaited_once()
    
    @pytest.mark.asyncio
    async def test_closed_after_every_tier_failed(self, orchestrator, gemini_client, generate_content):
        generate_content.side_effect = [RuntimeError("a"), RuntimeError("b")]
        
        with pytest.raises(PreviewGenerationError):
            await orchestrator.generate(PROMPT, TargetMedium.SLIDES, "test-key")
        
        gemini_client.aio.aclose.assert_awaited_once()
