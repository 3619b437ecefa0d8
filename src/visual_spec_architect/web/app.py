"""Gradio web interface for Visual Spec Architect."""

import argparse
import asyncio
import base64
import html
import logging
import mimetypes
import tempfile
import uuid
from typing import Any, List, Optional, Sequence, Tuple

import gradio as gr

from ..config import settings
from ..credentials import ApiKeyStore
from ..errors import VisualSpecError
from ..models.analysis import AnalysisResult
from ..models.medium import TargetMedium
from ..models.visual_asset import VisualAsset
from ..tools.analysis import AnalysisOrchestrator
from ..tools.bridge_prompts import build_bridge_prompts
from ..tools.preview import PreviewOrchestrator
from ..tools.prompts import SAMPLE_YAML
from ..utils.ai_output_logger import ai_logger
from ..utils.logging_config import configure_logging


logger = logging.getLogger(__name__)

# Style, keywords, colors, YAML, image prompt, status, result state, then the bridge panel
AnalysisOutputs = Tuple[Any, ...]
BridgeOutputs = Tuple[Any, str, str, str]


def parse_urls(urls_text: Optional[str]) -> List[str]:
    """One URL per line; blank lines are ignored."""
    if not urls_text:
        return []
    return [line.strip() for line in urls_text.splitlines() if line.strip()]


def build_assets(files: Optional[Sequence[Any]], urls_text: Optional[str]) -> List[VisualAsset]:
    """Turn uploaded files and pasted URLs into moodboard assets, files first."""
    assets = []
    for item in files or []:
        # Gradio hands over plain paths or tempfile wrappers depending on version
        path = item if isinstance(item, str) else getattr(item, "name", None)
        if path:
            assets.append(VisualAsset.from_file(path))
    for url in parse_urls(urls_text):
        try:
            assets.append(VisualAsset.from_url(url))
        except ValueError as e:
            logger.warning(f"Ignoring invalid URL {url}: {e}")
    return assets


def render_colors(colors: Sequence[str]) -> str:
    """HTML swatches for the extracted palette."""
    if not colors:
        return "<p><em>No colors extracted.</em></p>"
    swatches = []
    for color in colors:
        safe = html.escape(color)
        swatches.append(
            f'<div style="display:inline-block;margin:4px;text-align:center">'
            f'<div style="width:56px;height:56px;background:{safe};border:2px solid #000"></div>'
            f'<code>{safe}</code></div>'
        )
    return "".join(swatches)


def render_keywords(keywords: Sequence[str]) -> str:
    if not keywords:
        return "_No mood keywords._"
    return " · ".join(f"`{keyword}`" for keyword in keywords)


def save_preview(data_uri: str, directory: Optional[str] = None) -> str:
    """Write a data URI image to a file Gradio can serve and offer for download."""
    header, _, encoded = data_uri.partition(",")
    mime_type = header[len("data:"):].split(";")[0]
    suffix = mimetypes.guess_extension(mime_type) or ".png"
    with tempfile.NamedTemporaryFile(prefix="preview_", suffix=suffix, dir=directory, delete=False) as f:
        f.write(base64.b64decode(encoded))
    return f.name


class VisualSpecArchitectApp:
    """Gradio application for Visual Spec Architect."""

    def __init__(
        self,
        analysis: Optional[AnalysisOrchestrator] = None,
        preview: Optional[PreviewOrchestrator] = None,
        key_store: Optional[ApiKeyStore] = None,
    ):
        """Initialize the application."""
        self.analysis = analysis or AnalysisOrchestrator()
        self.preview = preview or PreviewOrchestrator()
        self.key_store = key_store or ApiKeyStore()
        self.session_id = uuid.uuid4().hex[:8]
        if settings.debug:
            ai_logger.set_session(self.session_id, output_dir=settings.ai_log_dir)
        logger.info(f"Initialized app session {self.session_id}")

    def create_interface(self) -> gr.Blocks:
        """Create the Gradio interface."""
        with gr.Blocks(title="Visual Spec Architect", theme=gr.themes.Soft()) as app:
            gr.Markdown(
                """
                # Visual Spec Architect

                Extract the visual style of a moodboard and build a YAML design specification.
                """
            )

            with gr.Accordion("API Key Settings", open=self.key_store.resolve() is None):
                key_status = gr.Markdown(self.key_status(), elem_id="key_status")
                api_key = gr.Textbox(
                    label="Gemini API Key",
                    type="password",
                    placeholder="Paste your Gemini API key",
                    elem_id="api_key_input"
                )
                with gr.Row():
                    save_key_btn = gr.Button("Save Key", variant="primary")
                    remove_key_btn = gr.Button("Remove Key")

            with gr.Row():
                with gr.Column(scale=5):
                    asset_files = gr.File(
                        label="Moodboard Images",
                        file_count="multiple",
                        file_types=["image"],
                        elem_id="asset_upload"
                    )

                    asset_urls = gr.Textbox(
                        label="Image URLs (one per line)",
                        placeholder="https://example.com/reference.jpg",
                        lines=3,
                        elem_id="asset_urls"
                    )

                    medium = gr.Radio(
                        choices=[m.value for m in TargetMedium],
                        value=TargetMedium.SLIDES.value,
                        label="Target Medium",
                        info=" | ".join(f"{m.value}: {m.description}" for m in TargetMedium),
                        elem_id="medium_selector"
                    )

                    with gr.Row():
                        analyze_btn = gr.Button("Analyze Moodboard", variant="primary", size="lg")
                        reset_btn = gr.Button("Reset")

                    status = gr.Markdown("", elem_id="status")

                with gr.Column(scale=7):
                    style_description = gr.Markdown(elem_id="style_description")
                    mood_keywords = gr.Markdown(elem_id="mood_keywords")
                    colors = gr.HTML(elem_id="primary_colors")

                    yaml_output = gr.Code(
                        value=SAMPLE_YAML,
                        language="yaml",
                        label="YAML Design Specification",
                        elem_id="yaml_output"
                    )

                    # Hand-off prompts, only shown for slides and web UIs
                    with gr.Column(visible=False, elem_id="bridge_panel") as bridge_panel:
                        bridge_title = gr.Markdown(elem_id="bridge_title")
                        bridge_instruction = gr.Textbox(
                            label="Instruction only",
                            lines=8,
                            interactive=False,
                            show_copy_button=True,
                            elem_id="bridge_instruction"
                        )
                        bridge_full_prompt = gr.Code(
                            language="markdown",
                            label="Full prompt (with YAML)",
                            elem_id="bridge_full_prompt"
                        )

                    image_prompt = gr.Textbox(
                        label="Image Generation Prompt",
                        lines=4,
                        elem_id="image_prompt"
                    )

                    preview_btn = gr.Button("Generate Preview")
                    preview_image = gr.Image(
                        label="Preview",
                        type="filepath",
                        interactive=False,
                        show_download_button=True,
                        elem_id="preview_image"
                    )

            result_state = gr.State(None)
            bridge_components = [bridge_panel, bridge_title, bridge_instruction, bridge_full_prompt]
            analysis_outputs = [
                style_description, mood_keywords, colors, yaml_output, image_prompt, status,
                result_state, *bridge_components
            ]

            # Event handlers
            save_key_btn.click(fn=self.save_api_key, inputs=[api_key], outputs=[key_status, api_key])
            remove_key_btn.click(fn=self.remove_api_key, inputs=[], outputs=[key_status])

            analyze_btn.click(
                fn=self.analyze,
                inputs=[asset_files, asset_urls, medium],
                outputs=analysis_outputs
            )

            medium.change(
                fn=self.update_bridge,
                inputs=[result_state, medium],
                outputs=bridge_components
            )

            preview_btn.click(
                fn=self.generate_preview,
                inputs=[image_prompt, medium],
                outputs=[preview_image, status]
            )

            reset_btn.click(
                fn=self.reset,
                inputs=[],
                outputs=[asset_files, asset_urls, *analysis_outputs, preview_image]
            )

        return app

    def key_status(self) -> str:
        if self.key_store.is_using_env:
            return "Using the API key from the environment. Saving a key replaces it for this session."
        if self.key_store.load():
            return "Using your saved API key."
        return "**No API key configured.** Save one below to start."

    def save_api_key(self, key: str) -> Tuple[str, str]:
        if not self.key_store.save(key):
            return "Please enter a non-empty key.", ""
        return self.key_status(), ""

    def remove_api_key(self) -> str:
        self.key_store.remove()
        return self.key_status()

    async def analyze_async(
        self,
        files: Optional[Sequence[Any]],
        urls_text: Optional[str],
        medium_value: str,
    ) -> AnalysisOutputs:
        """Run the analysis and format the outputs for display."""
        medium = TargetMedium.from_string(medium_value)
        assets = build_assets(files, urls_text)
        if not assets:
            return self.empty_outputs("Please add at least one image or URL.")

        try:
            result = await self.analysis.analyze(assets, medium, self.key_store.resolve())
        except VisualSpecError as e:
            logger.error(f"Analysis failed: {e}")
            return self.empty_outputs(f"Error: {e}")

        return self.format_result(result, medium, f"Analyzed {len(assets)} asset(s).")

    def analyze(
        self,
        files: Optional[Sequence[Any]],
        urls_text: Optional[str],
        medium_value: str,
    ) -> AnalysisOutputs:
        """Analyze (synchronous wrapper)."""
        return asyncio.run(self.analyze_async(files, urls_text, medium_value))

    @classmethod
    def format_result(cls, result: AnalysisResult, medium: TargetMedium, status: str) -> AnalysisOutputs:
        summary = result.summary
        return (
            f"### Style\n{summary.style_description}",
            render_keywords(summary.mood_keywords),
            render_colors(summary.primary_colors),
            result.yaml,
            result.image_generation_prompt,
            status,
            result,
            *cls.bridge_outputs(result, medium),
        )

    @classmethod
    def empty_outputs(cls, status: str) -> AnalysisOutputs:
        return ("", "", "", SAMPLE_YAML, "", status, None, *cls.bridge_outputs(None, TargetMedium.POSTER))

    @staticmethod
    def bridge_outputs(result: Optional[AnalysisResult], medium: TargetMedium) -> BridgeOutputs:
        """Panel visibility, title, instruction and full prompt for the hand-off bridge."""
        bridge = build_bridge_prompts(result, medium) if result is not None else None
        if bridge is None:
            return gr.update(visible=False), "", "", ""
        return gr.update(visible=True), f"### {bridge.name}", bridge.instruction, bridge.full_prompt

    def update_bridge(self, result: Optional[AnalysisResult], medium_value: str) -> BridgeOutputs:
        """Rebuild the bridge when the medium changes after an analysis."""
        return self.bridge_outputs(result, TargetMedium.from_string(medium_value))

    async def generate_preview_async(self, prompt: str, medium_value: str) -> Tuple[Optional[str], str]:
        """Generate the preview image and save it for display."""
        try:
            data_uri = await self.preview.generate(
                prompt,
                TargetMedium.from_string(medium_value),
                self.key_store.resolve(),
            )
        except VisualSpecError as e:
            logger.error(f"Preview generation failed: {e}")
            return None, f"Error: {e}"

        try:
            path = save_preview(data_uri)
        except (OSError, ValueError) as e:
            logger.error(f"Could not save preview image: {e}")
            return None, f"Error: Could not save preview image ({e})"
        return path, "Preview generated."

    def generate_preview(self, prompt: str, medium_value: str) -> Tuple[Optional[str], str]:
        """Generate preview (synchronous wrapper)."""
        return asyncio.run(self.generate_preview_async(prompt, medium_value))

    def reset(self) -> Tuple[Any, ...]:
        """Clear the moodboard and every result."""
        return (None, "", *self.empty_outputs(""), None)


def launch_app(share: bool = False, port: int = 7860):
    """Launch the Gradio application.

    Args:
        share: If True, create a public share link
        port: Port to run the server on
    """
    app_instance = VisualSpecArchitectApp()
    interface = app_instance.create_interface()
    interface.launch(
        share=share,
        server_port=port,
        server_name="0.0.0.0",
        show_error=True
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command line entry point."""
    parser = argparse.ArgumentParser(
        description="Launch Visual Spec Architect web interface"
    )

    parser.add_argument(
        '--share',
        action='store_true',
        help='Create a public share link (requires internet)'
    )

    parser.add_argument(
        '--port',
        type=int,
        default=7860,
        help='Port to run the server on (default: 7860)'
    )

    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug logging'
    )

    args = parser.parse_args(argv)

    configure_logging("DEBUG" if args.debug else settings.log_level)

    try:
        launch_app(share=args.share, port=args.port)
    except KeyboardInterrupt:
        logger.info("Server stopped by user.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
