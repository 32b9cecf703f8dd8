"""Allow ``python -m tdd``."""

import sys

from tdd.cli import main

if __name__ == "__main__":
    sys.exit(main())
