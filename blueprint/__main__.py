"""Allow ``python -m blueprint``."""

import sys

from blueprint.pipeline import main

sys.exit(main())
