"""Contract between the control sequence and effect modules.

An effect is any object, normally a module loaded from the effects
directory, exposing two callables:

- ``get_flush_color()`` returns the solid colour painted on every tile
  before the effect starts.
- ``create(context)`` starts the effect. It receives an `EffectContext`
  and is expected to run for the rest of the process lifetime. It may be
  a coroutine function.

Example effect module:
    ```python
    from lifx_tile_effects import parse_color

    def get_flush_color():
        return parse_color("B")

    async def create(context):
        while True:
            ...
    ```
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from lifx import HSBK, MatrixLight

    from lifx_tile_effects.color import Color
    from lifx_tile_effects.network.resolver import Bounds, Tile


@dataclass(frozen=True)
class EffectContext:
    """Everything an effect needs to draw on the tile.

    Attributes:
        device: Connected lifx-async MatrixLight
        tiles: Tiles in chain order
        bounds: Layout rectangle spanning all tiles
    """

    device: MatrixLight
    tiles: Sequence[Tile]
    bounds: Bounds


class Effect(Protocol):
    """Shape of a valid effect."""

    def create(self, context: EffectContext) -> Any:
        """Start the effect."""

    def get_flush_color(self) -> Color | HSBK:
        """Return the colour to flush the tiles with before starting."""


def is_valid_effect(candidate: object) -> bool:
    """Return True if candidate exposes callable create and get_flush_color."""
    return callable(getattr(candidate, "create", None)) and callable(
        getattr(candidate, "get_flush_color", None)
    )
