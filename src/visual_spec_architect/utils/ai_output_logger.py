"""AI Output Logger - Captures every Gemini exchange for transparency and debugging."""

import logging
import threading
from datetime import datetime
from pathlib import Path
from typing import Dict, Any, Optional, List

logger = logging.getLogger(__name__)

PROMPT_PREVIEW_CHARS = 1500


class AIOutputLogger:
    """Singleton logger for capturing all AI interactions."""
    
    _instance = None
    _lock = threading.Lock()
    
    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
        return cls._instance
    
    def __init__(self):
        """Initialize the AI output logger."""
        if not hasattr(self, 'initialized'):
            self.entries: List[Dict[str, Any]] = []
            self.session_id: Optional[str] = None
            self.start_time = datetime.now()
            self.output_path: Optional[Path] = None
            self.auto_save = False
            self.initialized = True
    
    def set_session(self, session_id: str, output_dir: str = "data/ai_logs", auto_save: bool = True):
        """Start capturing exchanges for a session.
        
        Args:
            session_id: Identifier used in the report file name
            output_dir: Directory for report files
            auto_save: If True, rewrite the report after each entry
        """
        self.session_id = session_id
        self.output_path = Path(output_dir) / f"{session_id}_ai_output.txt"
        self.start_time = datetime.now()
        self.entries = []
        self.auto_save = auto_save
        logger.info(f"AI output will be saved to: {self.output_path}")
        
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
    
    def log_analysis(self, medium: str, asset_count: int, prompt: str,
                     raw_response: Optional[str] = None,
                     result: Optional[Dict[str, Any]] = None,
                     error: Optional[str] = None):
        """Log one moodboard analysis exchange.
        
        Args:
            medium: Target medium value
            asset_count: Number of parts built from assets
            prompt: Instruction text sent with the images
            raw_response: Raw API response text
            result: Parsed analysis result
            error: Error message if the exchange failed
        """
        if not self.session_id:
            logger.debug("Skipping analysis log - logger not initialized")
            return
        
        self.entries.append({
            "timestamp": datetime.now().isoformat(),
            "type": "analysis",
            "medium": medium,
            "asset_count": asset_count,
            "prompt": prompt,
            "raw_response": raw_response,
            "result": result,
            "error": error,
        })
        self._auto_save_if_enabled()
    
    def log_preview(self, prompt: str, tier: str, model: str,
                    aspect_ratio: str, succeeded: bool, error: Optional[str] = None):
        """Log one image generation attempt.
        
        Args:
            prompt: Image prompt
            tier: Tier name (primary, fallback, ...)
            model: Model used for this attempt
            aspect_ratio: Requested aspect ratio
            succeeded: Whether an image came back
            error: Error message if the attempt failed
        """
        if not self.session_id:
            logger.debug("Skipping preview log - logger not initialized")
            return
        
        self.entries.append({
            "timestamp": datetime.now().isoformat(),
            "type": "preview",
            "tier": tier,
            "model": model,
            "aspect_ratio": aspect_ratio,
            "prompt": prompt,
            "succeeded": succeeded,
            "error": error,
        })
        self._auto_save_if_enabled()
    
    def generate_report(self) -> str:
        """Render all captured entries as a plain-text report."""
        report = []
        report.append("=" * 80)
        report.append(f"AI OUTPUT REPORT - session {self.session_id}")
        report.append(f"Started: {self.start_time.isoformat()}")
        report.append(f"Entries: {len(self.entries)}")
        report.append("=" * 80)
        report.append("")
        
        for i, entry in enumerate(self.entries, 1):
            report.append(f"[{i}] {entry['type'].upper()} @ {entry['timestamp']}")
            if entry["type"] == "analysis":
                report.append(f"  Medium: {entry['medium']}")
                report.append(f"  Parts from assets: {entry['asset_count']}")
            else:
                report.append(f"  Tier: {entry['tier']} ({entry['model']})")
                report.append(f"  Aspect ratio: {entry['aspect_ratio']}")
                report.append(f"  Succeeded: {entry['succeeded']}")
            
            prompt = entry.get("prompt") or ""
            prompt_preview = prompt[:PROMPT_PREVIEW_CHARS]
            if len(prompt) > PROMPT_PREVIEW_CHARS:
                prompt_preview += "\n  ... [truncated for display]"
            report.append("  PROMPT:")
            for line in prompt_preview.strip().split("\n"):
                report.append(f"    {line.strip()}")
            
            if entry.get("raw_response"):
                report.append("  RAW RESPONSE:")
                for line in entry["raw_response"].split("\n"):
                    report.append(f"    {line}")
            if entry.get("error"):
                report.append(f"  ERROR: {entry['error']}")
            report.append("")
        
        return "\n".join(report)
    
    def save_report(self) -> Optional[str]:
        """Write the report to disk and return its path."""
        if not self.output_path:
            return None
        with open(self.output_path, 'w', encoding='utf-8') as f:
            f.write(self.generate_report())
        return str(self.output_path)
    
    def _auto_save_if_enabled(self):
        if not self.auto_save:
            return
        try:
            self.save_report()
        except OSError as e:
            logger.error(f"Failed to auto-save report to {self.output_path}: {e}")
    
    def reset(self):
        """Reset the logger for a new session."""
        self.entries = []
        self.session_id = None
        self.start_time = datetime.now()
        self.output_path = None
        self.auto_save = False


# Global singleton instance
ai_logger = AIOutputLogger()
