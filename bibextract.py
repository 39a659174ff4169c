#!/usr/bin/env python3
"""Legacy entry-point script.

Invoking ``python bibextract.py`` from a checkout runs the same command as
the installed ``bibextract`` console script, see :mod:`bibextract.cli`.
"""

from bibextract.cli import main

if __name__ == '__main__':
    import sys
    sys.exit(main())
