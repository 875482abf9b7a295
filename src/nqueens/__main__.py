"""Main entry point for the N-Queens solver."""

import sys

from nqueens import main

sys.exit(main())
