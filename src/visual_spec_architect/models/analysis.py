"""Analysis result models."""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


DEFAULT_STYLE_DESCRIPTION = "No summary available."
DEFAULT_IMAGE_PROMPT = "Abstract geometric composition, high contrast, retro style."
DEFAULT_YAML = "# Error: YAML field missing in response"


def _string_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [item if isinstance(item, str) else str(item) for item in value if item is not None]


class StyleSummary(BaseModel):
    """Visual DNA extracted from the moodboard."""
    model_config = ConfigDict(frozen=True)
    
    mood_keywords: List[str] = Field(default_factory=list, description="Ordered mood keywords")
    primary_colors: List[str] = Field(default_factory=list, description="Ordered hex colors")
    style_description: str = Field(DEFAULT_STYLE_DESCRIPTION, description="Short style description")
    
    @field_validator("mood_keywords", "primary_colors", mode="before")
    @classmethod
    def coerce_lists(cls, v):
        return _string_list(v)
    
    @field_validator("style_description", mode="before")
    @classmethod
    def coerce_description(cls, v):
        if isinstance(v, str) and v.strip():
            return v
        return DEFAULT_STYLE_DESCRIPTION
    
    @classmethod
    def from_payload(cls, payload: Any) -> "StyleSummary":
        """Build a summary from whatever the model returned, field by field."""
        if not isinstance(payload, dict):
            return cls()
        return cls(
            mood_keywords=payload.get("mood_keywords"),
            primary_colors=payload.get("primary_colors"),
            style_description=payload.get("style_description"),
        )


class AnalysisResult(BaseModel):
    """Structured style specification for one moodboard."""
    model_config = ConfigDict(frozen=True)
    
    summary: StyleSummary = Field(default_factory=StyleSummary)
    yaml: str = Field(DEFAULT_YAML, description="YAML design specification, kept as opaque text")
    image_generation_prompt: str = Field(DEFAULT_IMAGE_PROMPT, description="Prompt for the preview image")
    
    # Raw model output (excluded from serialization)
    raw_response: Optional[str] = Field(None, exclude=True, description="Raw text returned by the model")
    
    @classmethod
    def from_payload(cls, data: dict, raw_response: Optional[str] = None) -> "AnalysisResult":
        """Map a parsed response onto a fully populated result.
        
        Missing or mistyped fields fall back independently.
        """
        yaml_spec = data.get("yaml_spec")
        prompt = data.get("image_generation_prompt")
        return cls(
            summary=StyleSummary.from_payload(data.get("summary")),
            yaml=yaml_spec if isinstance(yaml_spec, str) and yaml_spec.strip() else DEFAULT_YAML,
            image_generation_prompt=prompt if isinstance(prompt, str) and prompt.strip() else DEFAULT_IMAGE_PROMPT,
            raw_response=raw_response,
        )
