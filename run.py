#!/usr/bin/env python3
"""
run.py - Main entry point for the Four-in-a-Row engine
"""

import sys

from fourinarow.interfaces.cli import main

if __name__ == "__main__":
    sys.exit(main())
