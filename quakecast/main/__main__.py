"""
Main module entry point.

This allows running the trainer as: python -m quakecast.main
"""

import sys

from .trainer import main

if __name__ == "__main__":
    sys.exit(main())
