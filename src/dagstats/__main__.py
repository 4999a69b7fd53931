"""Allow running dagstats as ``python -m dagstats``."""

import sys

from dagstats.cli import main

sys.exit(main())
