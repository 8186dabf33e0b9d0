"""Allow ``python -m diststage``."""

import sys

from diststage.cli import main

sys.exit(main())
