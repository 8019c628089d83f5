#!/usr/bin/env python3
"""
nodecheck CLI entry point for `python -m nodecheck`.

Usage:
    python -m nodecheck check node.js --output Summary:text
    python -m nodecheck check --node my-node.json --format json
    python -m nodecheck template --node my-node.json
"""

import sys
from nodecheck.cli import main

if __name__ == "__main__":
    sys.exit(main())
