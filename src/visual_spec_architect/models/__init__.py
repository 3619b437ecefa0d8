"""
Data models for Visual Spec Architect.

This module provides Pydantic models for type safety and validation
throughout the application.
"""

from .medium import TargetMedium
from .visual_asset import (
    VisualAsset,
    AssetOrigin,
    InlineDataPart,
    TextPart,
    RequestPart,
    EncodedAsset,
    SkippedAsset,
    EncodingOutcome,
)
from .analysis import (
    AnalysisResult,
    StyleSummary,
    DEFAULT_STYLE_DESCRIPTION,
    DEFAULT_IMAGE_PROMPT,
    DEFAULT_YAML,
)

__all__ = [
    # Medium
    "TargetMedium",
    # Visual Assets
    "VisualAsset",
    "AssetOrigin",
    "InlineDataPart",
    "TextPart",
    "RequestPart",
    "EncodedAsset",
    "SkippedAsset",
    "EncodingOutcome",
    # Analysis
    "AnalysisResult",
    "StyleSummary",
    "DEFAULT_STYLE_DESCRIPTION",
    "DEFAULT_IMAGE_PROMPT",
    "DEFAULT_YAML",
]
