"""Unit tests for hand-off prompt building."""

import pytest

from visual_spec_architect.models import AnalysisResult, TargetMedium
from visual_spec_architect.tools.bridge_prompts import build_bridge_prompts


@pytest.fixture
def result():
    return AnalysisResult.from_payload({
        "summary": {
            "mood_keywords": ["Retro", "Bold"],
            "primary_colors": ["#E61D23"],
            "style_description": "高對比的復古風格。"
        },
        "yaml_spec": "design_specification:\n  meta: {}\n"
    })


class TestBuildBridgePrompts:
    """Test build_bridge_prompts."""
    
    def test_slides_notebooklm_bridge(self, result):
        """Test the presentation brief carries style and keywords."""
        bridge = build_bridge_prompts(result, TargetMedium.SLIDES)
        
        assert bridge.name == "NotebookLM Bridge"
        assert '"高對比的復古風格。"' in bridge.instruction
        assert "關鍵字：Retro, Bold" in bridge.instruction
        assert "```yaml" not in bridge.instruction
    
    def test_full_prompt_appends_yaml(self, result):
        bridge = build_bridge_prompts(result, TargetMedium.SLIDES)
        
        assert bridge.full_prompt == (
            f"{bridge.instruction}\n\n附錄：[YAML Design Specification]\n"
            "```yaml\ndesign_specification:\n  meta: {}\n\n```\n"
        )
    
    def test_saas_coding_bridge(self, result):
        bridge = build_bridge_prompts(result, TargetMedium.SAAS)
        
        assert bridge.name == "AI Coding Bridge"
        assert "Styling: Tailwind CSS" in bridge.instruction
        assert "[Retro, Bold]" in bridge.instruction
        assert bridge.full_prompt.startswith(bridge.instruction)
        assert "[Design Specification - YAML Source]\n```yaml\ndesign_specification:" in bridge.full_prompt
    
    def test_poster_has_no_bridge(self, result):
        assert build_bridge_prompts(result, TargetMedium.POSTER) is None
    
    def test_yaml_braces_are_kept(self):
        """Test braces in the YAML are inserted literally."""
        result = AnalysisResult.from_payload({"yaml_spec": "tokens: {primary: '#000'}"})
        
        bridge = build_bridge_prompts(result, TargetMedium.SAAS)
        
        assert "tokens: {primary: '#000'}" in bridge.full_prompt
