"""Entry point for ``python -m ssh_registry``."""

import sys

from ssh_registry.cli import main

if __name__ == "__main__":
    sys.exit(main())
