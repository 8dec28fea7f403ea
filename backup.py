#!/usr/bin/env python3
"""
TARVAULT - entry point.

Usage:
    python backup.py /var/log                 # positional mode
    python backup.py -i /srv/data -c xz       # named mode
    python backup.py --help
"""

from tarvault.__main__ import main

if __name__ == "__main__":
    main()
