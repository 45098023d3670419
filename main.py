#!/usr/bin/env python3
"""
Shop map data tools
Main entry point for re-parsing business hours and querying shops.
"""

import sys
from pathlib import Path

# Add shopmap package to path
sys.path.insert(0, str(Path(__file__).parent))

from shopmap.cli import main

if __name__ == "__main__":
    main()
