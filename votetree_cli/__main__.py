"""
Module execution entry point.

Allows running with: python -m votetree_cli
"""

import sys
from votetree_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
