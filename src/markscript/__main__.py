"""Allow ``python -m markscript``."""

import sys

from markscript.cli import main

sys.exit(main())
