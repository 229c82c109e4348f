#!/usr/bin/env python3
"""
Minefield - terminal entry point.

Usage:
    python main.py [--rows N] [--cols N] [--hazards N] [--seed N] [--verbose]
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent / "src"))

from minefield.shell import main


if __name__ == "__main__":
    sys.exit(main())
