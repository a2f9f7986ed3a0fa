#!/usr/bin/env python3
"""
Main entry point for HexTwitch
"""

import sys

from hextwitch.cli import main

if __name__ == "__main__":
    sys.exit(main())
