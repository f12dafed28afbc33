#!/usr/bin/env python
"""
Genetic Plasma CLI

Usage:
    python main.py [OPTION]... [GENOME]...

See `python main.py --help`.
"""

import sys

from plasma.cli import main


if __name__ == '__main__':
    sys.exit(main())
