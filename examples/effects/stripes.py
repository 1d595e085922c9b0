"""Stripes effect for lifx-tile-effects.

Paints each tile with a repeating pattern of colour tokens and rotates the
pattern one column per step.

Usage:
    lifx-tile-effects --effects-path examples/effects --effect stripes
"""

import asyncio

from lifx_tile_effects import EffectContext, parse_color, parse_colors

PATTERN = "RKOYLGSCBMP"
STEP_SECONDS = 0.25


def get_flush_color():
    return parse_color("K")


async def create(context: EffectContext) -> None:
    """Rotate the stripes forever."""
    palette = [color.as_hsbk() for color in parse_colors(PATTERN, {"brightness": 0.6})]
    offset = 0

    while True:
        for tile in context.tiles:
            colors = [
                palette[(tile.left + x + offset) % len(palette)]
                for _ in range(tile.height)
                for x in range(tile.width)
            ]
            await context.device.set64(
                tile_index=tile.index,
                length=1,
                x=0,
                y=0,
                width=tile.width,
                duration=0,
                colors=colors,
            )
        offset += 1
        await asyncio.sleep(STEP_SECONDS)
