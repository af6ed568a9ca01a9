"""Allow ``python -m springdamper``."""

import sys

from springdamper.cli import main

sys.exit(main())
