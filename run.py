#!/usr/bin/env python3
"""
run.py - Main entry point for playing Connect Four against the computer

Usage:
    python run.py play [--delay 0.5]
    python run.py --seed 3 analyze --position 0,0,...
    python run.py benchmark --iterations 500
"""

import os
import sys

# Add the project root to Python path so the package imports without installing
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from dropfour.interfaces.cli import main

if __name__ == "__main__":
    sys.exit(main())
