#!/usr/bin/env python3
"""
Tower Generator - command-line entry point.

Equivalent to the installed ``tower-generator`` script.
"""

import sys

from tower_generator.cli import main


if __name__ == "__main__":
    sys.exit(main())
