"""Conductor for handing a tile over to an effect.

This module provides the Conductor class that walks a resolved tile through
the start-up sequence (power check, fade-out, flush, power-on) and then
starts the effect.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import TYPE_CHECKING

from lifx.exceptions import LifxError

from lifx_tile_effects.color import OFF, Color
from lifx_tile_effects.const import FADE_DURATION_MS, FLUSH_SETTLE_MS, POWER_SETTLE_MS
from lifx_tile_effects.effects.base import EffectContext

if TYPE_CHECKING:
    from lifx import HSBK

    from lifx_tile_effects.effects.base import Effect
    from lifx_tile_effects.network.resolver import ResolvedTile

_LOGGER = logging.getLogger(__name__)

# Device errors tolerated during the start-up sequence
_DEVICE_ERRORS = (LifxError, TimeoutError, OSError)


class Conductor:
    """Drive a tile from its current state into an effect.

    The sequence never shows a stale colour: a lit tile is faded to black
    first, and a dark tile is flushed to the effect's colour before it is
    powered on. Device commands are not acknowledged, so each one is
    followed by a fixed delay. A failed command is logged and the
    sequence carries on; the flush and power-on that follow set absolute
    state, so the tile still ends up correct.

    Attributes:
        fade_duration_ms: Fade-out transition time
        power_settle_ms: Delay after power commands
        flush_settle_ms: Delay after the flush

    Example:
        ```python
        conductor = Conductor(fade_duration_ms=50)
        async with await resolver.resolve() as tile:
            await conductor.run(tile, registry.get_effect("rainbow").effect)
        ```
    """

    def __init__(
        self,
        fade_duration_ms: int = FADE_DURATION_MS,
        power_settle_ms: int = POWER_SETTLE_MS,
        flush_settle_ms: int = FLUSH_SETTLE_MS,
    ) -> None:
        """Initialize the Conductor.

        Args:
            fade_duration_ms: Fade-out transition time (default 1000)
            power_settle_ms: Delay after power commands (default 50)
            flush_settle_ms: Delay after the flush (default 500)
        """
        self.fade_duration_ms = fade_duration_ms
        self.power_settle_ms = power_settle_ms
        self.flush_settle_ms = flush_settle_ms

    async def run(self, tile: ResolvedTile, effect: Effect) -> None:
        """Run the start-up sequence, then start the effect.

        Returns only if the effect's create() returns.

        Args:
            tile: Resolved tile to drive
            effect: Effect to start
        """
        powered = await self._get_power(tile)

        if powered:
            await self._set_tiles(tile, OFF, self.fade_duration_ms, "fade_out")
            await self._sleep(self.fade_duration_ms)

        await self._set_tiles(tile, effect.get_flush_color(), 0, "flush")
        await self._sleep(self.flush_settle_ms)

        if not powered:
            await self._power_on(tile)

        _LOGGER.debug(
            {
                "class": self.__class__.__name__,
                "method": "run",
                "action": "create",
                "values": {"serial": tile.device.serial},
            }
        )
        result = effect.create(
            EffectContext(device=tile.device, tiles=tile.tiles, bounds=tile.bounds)
        )
        if inspect.isawaitable(result):
            await result

    async def _get_power(self, tile: ResolvedTile) -> bool:
        """Query power state; an unreadable state counts as off."""
        try:
            powered = bool(await tile.device.get_power())
        except _DEVICE_ERRORS as e:
            _LOGGER.warning(
                {
                    "class": self.__class__.__name__,
                    "method": "_get_power",
                    "action": "error",
                    "error": str(e),
                    "values": {"serial": tile.device.serial, "assumed": False},
                }
            )
            powered = False

        _LOGGER.debug(
            {
                "class": self.__class__.__name__,
                "method": "_get_power",
                "action": "power",
                "values": {"serial": tile.device.serial, "power": powered},
            }
        )
        await self._sleep(self.power_settle_ms)
        return powered

    async def _power_on(self, tile: ResolvedTile) -> None:
        """Power the device on."""
        try:
            await tile.device.set_power(True)
        except _DEVICE_ERRORS as e:
            _LOGGER.warning(
                {
                    "class": self.__class__.__name__,
                    "method": "_power_on",
                    "action": "error",
                    "error": str(e),
                    "values": {"serial": tile.device.serial},
                }
            )
        await self._sleep(self.power_settle_ms)

    async def _set_tiles(
        self,
        tile: ResolvedTile,
        color: Color | HSBK,
        duration_ms: int,
        action: str,
    ) -> None:
        """Paint every tile one solid colour with a single request.

        The request starts at the first tile and spans the whole chain, so
        all tiles share the first tile's dimensions.
        """
        first = tile.tiles[0]
        hsbk = color.as_hsbk() if isinstance(color, Color) else color

        _LOGGER.debug(
            {
                "class": self.__class__.__name__,
                "method": "_set_tiles",
                "action": action,
                "values": {
                    "serial": tile.device.serial,
                    "tile_index": first.index,
                    "length": len(tile.tiles),
                    "duration_ms": duration_ms,
                },
            }
        )
        try:
            await tile.device.set64(
                tile_index=first.index,
                length=len(tile.tiles),
                x=0,
                y=0,
                width=first.width,
                duration=duration_ms,
                colors=[hsbk] * first.pixel_count,
            )
        except _DEVICE_ERRORS as e:
            _LOGGER.warning(
                {
                    "class": self.__class__.__name__,
                    "method": "_set_tiles",
                    "action": "error",
                    "error": str(e),
                    "values": {"serial": tile.device.serial, "step": action},
                }
            )

    @staticmethod
    async def _sleep(ms: int) -> None:
        if ms > 0:
            await asyncio.sleep(ms / 1000)

    def __repr__(self) -> str:
        """String representation of Conductor."""
        return (
            f"Conductor(fade_duration_ms={self.fade_duration_ms}, "
            f"power_settle_ms={self.power_settle_ms}, "
            f"flush_settle_ms={self.flush_settle_ms})"
        )
