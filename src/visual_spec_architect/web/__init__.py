"""Web interface for Visual Spec Architect."""
