#!/usr/bin/env python3
"""Launch the Visual Spec Architect web interface."""

import sys

from visual_spec_architect.web.app import main


if __name__ == "__main__":
    print("""
    🎨 Visual Spec Architect - Web Interface
    ========================================
    
    Starting web server...
    """)
    sys.exit(main())
