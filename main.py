#!/usr/bin/env python3
"""
Spotty - Main entry point.

Runs the CLI straight from a source checkout.
"""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "src"))

from spotty.cli import main

if __name__ == "__main__":
    main()
