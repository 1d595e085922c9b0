"""lifx-tile-effects

Discover a LIFX Tile, cache it, and run pluggable animated effects on it.
"""

from __future__ import annotations

from importlib.metadata import version as get_version

from lifx_tile_effects.color import NAMED_COLORS, OFF, Color, parse_color, parse_colors
from lifx_tile_effects.config import Settings
from lifx_tile_effects.effects import (
    Conductor,
    Effect,
    EffectContext,
    EffectInfo,
    EffectRegistry,
    is_valid_effect,
    load_effects,
)
from lifx_tile_effects.exceptions import (
    CacheCorruptError,
    ConfigurationError,
    NoEffectChosenError,
    NoEffectsFoundError,
    NoTileChosenError,
    NoTileFoundError,
    ResolutionError,
    TileEffectsError,
    TileNotRespondingError,
)
from lifx_tile_effects.network import (
    Bounds,
    DeviceCacheStore,
    DiscoveredDevice,
    ResolvedTile,
    Tile,
    TileResolver,
    discover_devices,
)

__version__ = get_version("lifx-tile-effects")  # type: ignore

__all__ = [
    # Version
    "__version__",
    # Color
    "Color",
    "NAMED_COLORS",
    "OFF",
    "parse_color",
    "parse_colors",
    # Configuration
    "Settings",
    # Effects
    "Conductor",
    "Effect",
    "EffectContext",
    "EffectInfo",
    "EffectRegistry",
    "is_valid_effect",
    "load_effects",
    # Network
    "Bounds",
    "DeviceCacheStore",
    "DiscoveredDevice",
    "ResolvedTile",
    "Tile",
    "TileResolver",
    "discover_devices",
    # Exceptions
    "TileEffectsError",
    "ConfigurationError",
    "NoEffectsFoundError",
    "NoEffectChosenError",
    "CacheCorruptError",
    "ResolutionError",
    "NoTileFoundError",
    "NoTileChosenError",
    "TileNotRespondingError",
]
