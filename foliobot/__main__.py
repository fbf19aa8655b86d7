"""Main entry point for foliobot when run as a module"""

import logging
import sys

# Force UTF-8 output on Windows (fixes garbled box characters)
if sys.stdout.encoding and sys.stdout.encoding.lower() not in ('utf-8', 'utf8'):
    try:
        sys.stdout.reconfigure(encoding='utf-8', errors='replace')
        sys.stderr.reconfigure(encoding='utf-8', errors='replace')
    except AttributeError:
        pass

# ── Root logger ──────────────────────────────────────────────────────────────
logging.basicConfig(level=logging.WARNING, format='%(levelname)s: %(message)s')

# Package logging stays quiet unless --verbose is given
logging.getLogger('foliobot').setLevel(logging.ERROR)

from foliobot.cli import main

if __name__ == '__main__':
    sys.exit(main())
