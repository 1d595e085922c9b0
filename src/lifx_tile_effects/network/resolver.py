"""Tile resolution: find exactly one tile on the network and bind to it.

Resolution reads the device cache first and only sweeps the network when
the cache is missing, was cleared on request, or turns out to hold no tile.
A stale cache is tolerated for one generation: if the cache has no tile it
is rebuilt once, and a second miss in the same run is terminal.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from contextlib import AsyncExitStack
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

from lifx import MatrixLight
from lifx.exceptions import LifxError

from lifx_tile_effects.const import TILE_PRODUCT_ID
from lifx_tile_effects.exceptions import (
    NoTileChosenError,
    NoTileFoundError,
    TileNotRespondingError,
)
from lifx_tile_effects.network.cache import DeviceCacheStore, DiscoveredDevice
from lifx_tile_effects.network.discovery import discover_devices

if TYPE_CHECKING:
    from typing import Self

    from lifx_tile_effects.prompt import Selector

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Tile:
    """One tile in a device chain.

    Attributes:
        index: Position of the tile in the chain
        width: Width in pixels
        height: Height in pixels
        left: Horizontal pixel offset in the user layout
        top: Vertical pixel offset in the user layout
    """

    index: int
    width: int
    height: int
    left: int = 0
    top: int = 0

    @property
    def pixel_count(self) -> int:
        """Number of pixels on the tile."""
        return self.width * self.height


@dataclass(frozen=True)
class Bounds:
    """Layout rectangle spanning every tile of a device."""

    left: int
    top: int
    width: int
    height: int

    @property
    def right(self) -> int:
        """Exclusive right edge."""
        return self.left + self.width

    @property
    def bottom(self) -> int:
        """Exclusive bottom edge."""
        return self.top + self.height


def tiles_from_chain(chain: Sequence[Any]) -> tuple[list[Tile], Bounds]:
    """Build tile descriptors and overall bounds from a device chain.

    Args:
        chain: TileInfo entries as returned by MatrixLight.get_device_chain()

    Returns:
        Tuple of (tiles, bounds)
    """
    tiles = [
        Tile(
            index=info.tile_index,
            width=info.width,
            height=info.height,
            left=round(info.user_x * info.width),
            top=round(info.user_y * info.height),
        )
        for info in chain
    ]
    if not tiles:
        return tiles, Bounds(left=0, top=0, width=0, height=0)

    left = min(tile.left for tile in tiles)
    top = min(tile.top for tile in tiles)
    right = max(tile.left + tile.width for tile in tiles)
    bottom = max(tile.top + tile.height for tile in tiles)
    return tiles, Bounds(left=left, top=top, width=right - left, height=bottom - top)


@dataclass
class ResolvedTile:
    """A bound tile device and its geometry.

    Use as an async context manager; leaving the context releases the
    device connection.

    Attributes:
        device: Connected lifx-async MatrixLight
        tiles: Tiles in chain order
        bounds: Layout rectangle spanning all tiles
        source: Cache entry the device was resolved from
    """

    device: MatrixLight
    tiles: list[Tile]
    bounds: Bounds
    source: DiscoveredDevice
    _exit_stack: AsyncExitStack = field(default_factory=AsyncExitStack, repr=False)

    async def close(self) -> None:
        """Release the device connection."""
        await self._exit_stack.aclose()

    async def __aenter__(self) -> Self:
        """Enter async context."""
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Exit async context and close the device connection."""
        await self.close()


class _State(Enum):
    """Resolution states."""

    CHECK_CACHE = "check_cache"
    DISCOVER = "discover"
    INVALIDATE = "invalidate"
    FILTER = "filter"


class TileResolver:
    """Resolve the target tile from the device cache or the network.

    Example:
        ```python
        resolver = TileResolver(DeviceCacheStore(path), selector=select)
        async with await resolver.resolve(clear_cache=True) as tile:
            print(tile.source.display_label, len(tile.tiles))
        ```
    """

    def __init__(
        self,
        store: DeviceCacheStore,
        discover: Callable[[], Awaitable[list[DiscoveredDevice]]] = discover_devices,
        selector: Selector | None = None,
        device_factory: Callable[..., MatrixLight] = MatrixLight,
        product_id: int = TILE_PRODUCT_ID,
    ) -> None:
        """Initialize the resolver.

        Args:
            store: Device cache store
            discover: Coroutine function performing one discovery sweep
            selector: Chooses one label when several tiles match. Without
                one, multiple matches cannot be resolved.
            device_factory: Creates the device handle from serial and ip
            product_id: Product id identifying tile-class devices
        """
        self._store = store
        self._discover = discover
        self._selector = selector
        self._device_factory = device_factory
        self._product_id = product_id

    async def resolve(self, clear_cache: bool = False) -> ResolvedTile:
        """Find exactly one tile and bind to it.

        Args:
            clear_cache: Delete the cache before reading it (once per call)

        Returns:
            The bound tile with its geometry

        Raises:
            NoTileFoundError: If no tile is found after a fresh discovery
            NoTileChosenError: If several tiles match and none is chosen
            TileNotRespondingError: If the chosen tile does not respond
            CacheCorruptError: If the cache snapshot cannot be parsed
        """
        has_discovered = False
        has_cleared = False
        state = _State.CHECK_CACHE

        while True:
            _LOGGER.debug(
                {
                    "class": self.__class__.__name__,
                    "method": "resolve",
                    "action": "state",
                    "values": {"state": state.value},
                }
            )

            if state is _State.CHECK_CACHE:
                if not self._store.exists():
                    state = _State.DISCOVER
                elif clear_cache and not has_cleared:
                    state = _State.INVALIDATE
                else:
                    state = _State.FILTER

            elif state is _State.DISCOVER:
                devices = await self._discover()
                self._store.save(devices)
                has_discovered = True
                state = _State.FILTER

            elif state is _State.INVALIDATE:
                self._store.invalidate()
                has_cleared = True
                state = _State.CHECK_CACHE

            else:
                candidates = [
                    device
                    for device in self._store.load() or []
                    if device.product_id == self._product_id
                ]
                if len(candidates) == 1:
                    return await self._bind(candidates[0])
                if len(candidates) > 1:
                    return await self._bind(await self._choose(candidates))

                if has_discovered:
                    raise NoTileFoundError("No tile found.")

                _LOGGER.debug(
                    {
                        "class": self.__class__.__name__,
                        "method": "resolve",
                        "action": "stale",
                        "values": {"path": str(self._store.path)},
                    }
                )
                self._store.invalidate()
                state = _State.CHECK_CACHE

    async def _choose(self, candidates: list[DiscoveredDevice]) -> DiscoveredDevice:
        """Ask the selector to pick one of several matching tiles.

        The selector may block on terminal input, so it runs in a worker
        thread.
        """
        labels = [device.display_label for device in candidates]
        selected = None
        if self._selector is not None:
            selected = await asyncio.to_thread(self._selector, "Choose a tile", labels)

        for device in candidates:
            if device.display_label == selected:
                return device
        raise NoTileChosenError("No tile chosen.")

    async def _bind(self, chosen: DiscoveredDevice) -> ResolvedTile:
        """Connect to the chosen device and read its tile geometry."""
        _LOGGER.debug(
            {
                "class": self.__class__.__name__,
                "method": "_bind",
                "action": "connect",
                "values": {"mac": chosen.mac, "ip": chosen.ip},
            }
        )

        async with AsyncExitStack() as stack:
            device = self._device_factory(serial=chosen.serial, ip=chosen.ip)
            try:
                await stack.enter_async_context(device)
                chain = await device.get_device_chain()
            except (LifxError, TimeoutError) as e:
                raise TileNotRespondingError("Tile not responding.") from e

            tiles, bounds = tiles_from_chain(chain)
            if not tiles:
                raise TileNotRespondingError("Tile not responding.")

            _LOGGER.debug(
                {
                    "class": self.__class__.__name__,
                    "method": "_bind",
                    "action": "geometry",
                    "values": {
                        "tile_count": len(tiles),
                        "bounds": {
                            "left": bounds.left,
                            "top": bounds.top,
                            "width": bounds.width,
                            "height": bounds.height,
                        },
                    },
                }
            )
            return ResolvedTile(
                device=device,
                tiles=tiles,
                bounds=bounds,
                source=chosen,
                _exit_stack=stack.pop_all(),
            )
