"""Rainbow effect for lifx-tile-effects.

Spreads a full 360-degree rainbow across the tile layout (left to right,
using the tile bounds so multi-tile chains share one rainbow) and scrolls
it over time.

Usage:
    lifx-tile-effects --effects-path examples/effects --effect rainbow
"""

import asyncio
import time

from lifx import HSBK

from lifx_tile_effects import EffectContext, parse_color

PERIOD = 10.0  # seconds per full scroll
FPS = 20.0
BRIGHTNESS = 0.8
KELVIN = 3500


def get_flush_color():
    """Start from solid red, the rainbow's first hue."""
    return parse_color("R", {"brightness": BRIGHTNESS})


def generate_tile_frame(context: EffectContext, tile, elapsed_s: float) -> list[HSBK]:
    """Return the colors for one tile, row by row."""
    degrees_scrolled = (elapsed_s / PERIOD) * 360.0
    width = max(context.bounds.width, 1)

    colors: list[HSBK] = []
    for y in range(tile.height):
        for x in range(tile.width):
            column = tile.left + x - context.bounds.left
            hue = round((degrees_scrolled + (column / width) * 360.0) % 360)
            colors.append(
                HSBK(hue=hue, saturation=1.0, brightness=BRIGHTNESS, kelvin=KELVIN)
            )
    return colors


async def create(context: EffectContext) -> None:
    """Scroll the rainbow until the process is stopped."""
    frame_interval = 1.0 / FPS
    start_time = time.monotonic()

    while True:
        frame_start = time.monotonic()
        elapsed_s = frame_start - start_time

        for tile in context.tiles:
            await context.device.set64(
                tile_index=tile.index,
                length=1,
                x=0,
                y=0,
                width=tile.width,
                duration=0,
                colors=generate_tile_frame(context, tile, elapsed_s),
            )

        sleep_time = frame_interval - (time.monotonic() - frame_start)
        await asyncio.sleep(max(0.0, sleep_time))
