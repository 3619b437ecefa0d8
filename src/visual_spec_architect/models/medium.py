"""Target medium enum and utilities."""

from enum import Enum


class TargetMedium(str, Enum):
    """Output contexts a moodboard can be translated for."""
    
    SLIDES = "Presentation / Slides"   # NotebookLM style decks
    SAAS = "SPA / SaaS / Web UI"       # App shell, UI states, design tokens
    POSTER = "Poster / Key Visual"     # Full-bleed aesthetic impact
    
    @classmethod
    def from_string(cls, value: str) -> "TargetMedium":
        """Convert string to TargetMedium enum.
        
        Accepts either the enum value or the member name, case-insensitively.
        
        Args:
            value: String representation of the medium
            
        Returns:
            TargetMedium enum value
            
        Raises:
            ValueError: If value does not name a medium
        """
        needle = value.strip().lower()
        for medium in cls:
            if medium.value.lower() == needle or medium.name.lower() == needle:
                return medium
        raise ValueError(f"Invalid target medium: {value}. Valid options: {[m.value for m in cls]}")
    
    @property
    def description(self) -> str:
        """Get human-readable description of the medium."""
        descriptions = {
            TargetMedium.SLIDES: "針對簡報提案 (NotebookLM Workflow)",
            TargetMedium.SAAS: "定義 App Shell、UI 狀態與 Design Tokens",
            TargetMedium.POSTER: "針對海報與主視覺 (Aesthetic Impact)",
        }
        return descriptions[self]
    
    @property
    def aspect_ratio(self) -> str:
        """Aspect ratio used for preview images."""
        return "16:9" if self == TargetMedium.SLIDES else "3:4"
