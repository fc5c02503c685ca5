"""Entry point for ``python -m naval_referee``."""

import sys

from .cli import main

sys.exit(main())
