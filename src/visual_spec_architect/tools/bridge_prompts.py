"""Hand-off prompts that carry an analysis into the next tool.

Slides go to NotebookLM as a presentation consultant brief, web UIs go to an
AI coding assistant. Posters have no bridge.
"""

from dataclasses import dataclass
from typing import Optional

from ..models.analysis import AnalysisResult
from ..models.medium import TargetMedium


NOTEBOOKLM_INSTRUCTION_TEMPLATE = """指令： 請你擔任我的首席簡報設計顧問。請參考這份名為 design_specification 的 YAML 風格定義（若為檔案請參閱來源，若為文字請見下方附錄）。

現在，請你根據這份規範，將我接下來提供的研究資料轉化為簡報大綱。在產出內容時，請嚴格遵守以下邏輯：

1. **資訊極簡化（Low Density）**： 根據 YAML 中的 density_limit，每張投影片僅限一個核心概念，文字要精煉。
2. **視覺佈局建議**： 請在每張投影片的大綱下方，根據 layout_mapping_logic 提供具體的「設計指令」。
3. **色彩與情緒**： 內容語氣需符合 "{style_description}" 的精神，以及關鍵字：{mood_keywords}。
4. **結構劃分**： 請自動根據資料內容，將其分配至「標題頁 (Title)」、「概念頁 (Text)」與「數據頁 (Data)」。"""

NOTEBOOKLM_FULL_TEMPLATE = """{instruction}

附錄：[YAML Design Specification]
```yaml
{yaml}
```
"""

CODING_INSTRUCTION_TEMPLATE = """Role: Senior Frontend Engineer & UI/UX Designer
Task: Build a high-fidelity Single Page Application (SPA) or Dashboard UI based strictly on the attached Design Specification.

[Tech Stack]
- Framework: React (Latest)
- Styling: Tailwind CSS
- Icons: Lucide React

[Implementation Requirements]
1. **Visual Accuracy**: You MUST strictly adhere to the `color_system` (use arbitrary values like bg-[#...] if needed) and `visual_assets` defined in the YAML.
2. **App Shell**: Implement the structure defined in `layout_system.app_shell`.
3. **Atmosphere**: The UI must reflect the mood keywords: [{mood_keywords}] and the style: "{style_description}".
4. **Interactive States**: Implement hover/active states as defined in `ui_states`.

[Output]
Return the complete, runnable React code for the main App component and necessary sub-components."""

CODING_FULL_TEMPLATE = """{instruction}

[Design Specification - YAML Source]
```yaml
{yaml}
```
"""


@dataclass(frozen=True)
class BridgePrompts:
    """Instruction-only and full (instruction plus YAML) variants of a hand-off prompt."""
    name: str
    instruction: str
    full_prompt: str


_BRIDGES = {
    TargetMedium.SLIDES: ("NotebookLM Bridge", NOTEBOOKLM_INSTRUCTION_TEMPLATE, NOTEBOOKLM_FULL_TEMPLATE),
    TargetMedium.SAAS: ("AI Coding Bridge", CODING_INSTRUCTION_TEMPLATE, CODING_FULL_TEMPLATE),
}


def build_bridge_prompts(result: AnalysisResult, medium: TargetMedium) -> Optional[BridgePrompts]:
    """Build the hand-off prompts for a medium.

    Args:
        result: Completed analysis
        medium: Medium the analysis was made for

    Returns:
        BridgePrompts, or None when the medium has no bridge
    """
    bridge = _BRIDGES.get(medium)
    if bridge is None:
        return None

    name, instruction_template, full_template = bridge
    summary = result.summary
    instruction = instruction_template.format(
        style_description=summary.style_description,
        mood_keywords=", ".join(summary.mood_keywords),
    )
    return BridgePrompts(
        name=name,
        instruction=instruction,
        full_prompt=full_template.format(instruction=instruction, yaml=result.yaml),
    )
