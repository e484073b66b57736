"""
Main entry point for running the package as a module.

Usage:
    python -m pixgallery build -o content/gallery/trip -t "Trip"
    python -m pixgallery report --manifest gallery.json
"""

import sys
from .cli import main

if __name__ == '__main__':
    sys.exit(main())
