"""Visual Spec Architect: moodboard images in, YAML design specification out."""

__version__ = "0.1.0"
