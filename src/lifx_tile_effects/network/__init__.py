"""Device discovery, caching and tile resolution."""

from __future__ import annotations

from lifx_tile_effects.network.cache import (
    DeviceCacheStore,
    DiscoveredDevice,
    serial_to_mac,
)
from lifx_tile_effects.network.discovery import discover_devices
from lifx_tile_effects.network.resolver import (
    Bounds,
    ResolvedTile,
    Tile,
    TileResolver,
    tiles_from_chain,
)

__all__ = [
    "Bounds",
    "DeviceCacheStore",
    "DiscoveredDevice",
    "ResolvedTile",
    "Tile",
    "TileResolver",
    "discover_devices",
    "serial_to_mac",
    "tiles_from_chain",
]
