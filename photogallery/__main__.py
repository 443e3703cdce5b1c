"""
Main entry point for running the package as a module.

Usage:
    python -m photogallery generate photos/*.jpg --output /tmp/gallery
    python -m photogallery welcome
"""

import sys
from .cli import main

if __name__ == '__main__':
    sys.exit(main())
