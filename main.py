"""
Part Inspection System
Launcher for the live color and shape inspection loop.
"""

import sys

from part_inspector.app import main


if __name__ == "__main__":
    sys.exit(main())
