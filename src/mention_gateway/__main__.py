#!/usr/bin/env python3
"""
Entry point for running the mention gateway as a module.
"""

from mention_gateway.server import main

if __name__ == "__main__":
    main()
