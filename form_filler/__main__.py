"""Allow running the tool with ``python -m form_filler``."""

import sys

from form_filler.cli import main

if __name__ == "__main__":
    sys.exit(main())
