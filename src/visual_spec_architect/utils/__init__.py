"""Logging helpers for Visual Spec Architect."""
