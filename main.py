#!/usr/bin/env python3
"""
Tile-grid game state - main entry point.

Usage:
    python main.py demo [--size N] [--bombs N] [--seed N]
    python main.py status [--damage N] [--heal N] [--score N]
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent / "src"))

from tilegrid.cli import main


if __name__ == "__main__":
    main()
