"""Constants used across lifx-tile-effects."""

from __future__ import annotations

from pathlib import Path
from typing import Final

# LIFX Tile product id (see lifx.products)
TILE_PRODUCT_ID: Final[int] = 55

# Discovery
DISCOVERY_TIMEOUT: Final[float] = 5.0
BROADCAST_ADDRESS: Final[str] = "255.255.255.255"

# Device cache snapshot, relative to the working directory
DEFAULT_CACHE_PATH: Final[Path] = Path("cache") / "devices.json"

# Control sequence timings (milliseconds)
FADE_DURATION_MS: Final[int] = 1000
FADE_DURATION_INSTANT_MS: Final[int] = 50
POWER_SETTLE_MS: Final[int] = 50
FLUSH_SETTLE_MS: Final[int] = 500

# Recognised effect module extensions
EFFECT_EXTENSIONS: Final[frozenset[str]] = frozenset({".py"})

# Environment variables
ENV_EFFECTS_PATH: Final[str] = "EFFECTS_PATH"
ENV_INSTANT: Final[str] = "INSTANT"
ENV_CACHE_PATH: Final[str] = "LIFX_TILE_CACHE"
