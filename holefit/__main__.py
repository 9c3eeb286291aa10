"""
holefit — entry point.

Usage:
    python -m holefit solve ./problems ./solutions -a tree_search
    python -m holefit run tree_search problems/1.problem out/1.solution
    python -m holefit serve --port 8000
"""

import sys

from holefit.app import main


if __name__ == "__main__":
    sys.exit(main())
