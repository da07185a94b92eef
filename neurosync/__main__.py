"""
Main entry point for NeuroSync package

This allows running the package with: python -m neurosync
"""

import sys

from .cli.main import main

if __name__ == "__main__":
    sys.exit(main())
