#!/usr/bin/env python
"""
Run the scenario manager from a source checkout without installing it:
    python scripts/esm.py ls
"""
import os
import sys

# Add the repository root to the path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from esm.cli import main

if __name__ == '__main__':
    sys.exit(main())
