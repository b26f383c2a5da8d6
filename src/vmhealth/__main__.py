"""Entry point for python -m vmhealth."""

import sys

from vmhealth.cli import main

if __name__ == "__main__":
    sys.exit(main())
