"""Orchestration tools for Visual Spec Architect."""

from .analysis import AnalysisOrchestrator
from .asset_encoder import encode_asset, encode_assets
from .bridge_prompts import BridgePrompts, build_bridge_prompts
from .preview import ImageTier, PreviewOrchestrator, extract_first_image
from .response_repair import parse_json_response, repair_json_text

__all__ = [
    "AnalysisOrchestrator",
    "PreviewOrchestrator",
    "ImageTier",
    "BridgePrompts",
    "build_bridge_prompts",
    "encode_asset",
    "encode_assets",
    "extract_first_image",
    "parse_json_response",
    "repair_json_text",
]
