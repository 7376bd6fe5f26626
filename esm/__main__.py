"""
Allows running the scenario manager as a module:
    python3 -m esm --help
"""

import sys
from esm.cli import main

if __name__ == "__main__":
    sys.exit(main())
