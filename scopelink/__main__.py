"""Entry point for ``python -m scopelink``."""

import sys

from scopelink.cli import main

if __name__ == "__main__":
    sys.exit(main())
