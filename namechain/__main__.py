"""Allow ``python -m namechain``."""

import sys

from namechain.cli import main

sys.exit(main())
