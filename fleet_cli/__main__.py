"""
Module execution entry point.

Allows running with: python -m fleet_cli
"""

import sys
from fleet_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
