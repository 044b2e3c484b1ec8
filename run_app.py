#!/usr/bin/env python3
"""
Simple script to run the mention gateway without installing the package.
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent / "src"))

from mention_gateway.server import main

if __name__ == "__main__":
    main()
