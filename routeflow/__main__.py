"""Allow ``python -m routeflow``."""

import sys

from routeflow.cli import main

if __name__ == "__main__":
    sys.exit(main())
