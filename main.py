#!/usr/bin/env python3
"""
Main CLI for the Nerd Fonts Manager
===================================

Thin entry point so the tool can be run straight from a checkout or
bundled into a standalone ``.pyz``.
"""

import logging
import sys

try:
    from nerdfonts.cli import cli
except ImportError as e:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")
    logging.getLogger(__name__).exception(f"Import failed: {e}")
    logging.getLogger(__name__).error(
        "Make sure you have all dependencies installed and the project is properly set up"
    )
    sys.exit(1)


if __name__ == "__main__":
    cli()
