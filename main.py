#!/usr/bin/env python3
"""
srtkit Entry Point Script

This script initializes the CLI handler and normalizes a single SRT file.
"""

import sys
from srtkit.cli import main

if __name__ == "__main__":
    if sys.version_info < (3, 7):
        sys.stderr.write("srtkit requires Python 3.7 or later.\n")
        sys.exit(1)

    main()
