"""Allow ``python -m lifx_tile_effects``."""

import sys

from lifx_tile_effects.cli import main

sys.exit(main())
