"""Allow ``python -m prt7``."""

import sys

from .main import main

sys.exit(main())
