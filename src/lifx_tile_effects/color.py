"""Single-letter colour tokens for tile effects.

Effects describe colours with one-letter tokens ("R" for red, "C" for cyan
and so on). This module maps those tokens to `Color` values and converts
them to lifx-async `HSBK` for sending to a device.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace
from typing import Any

from lifx.color import HSBK


@dataclass(frozen=True)
class Color:
    """A light colour with every channel normalized.

    Attributes:
        hue: Hue as a fraction of the colour wheel (0.0-1.0)
        saturation: Saturation (0.0-1.0)
        brightness: Brightness (0.0-1.0)
        kelvin: Colour temperature in Kelvin
    """

    hue: float
    saturation: float
    brightness: float
    kelvin: int

    def as_hsbk(self) -> HSBK:
        """Convert to a lifx-async HSBK (hue in degrees)."""
        return HSBK(
            hue=self.hue * 360.0,
            saturation=self.saturation,
            brightness=self.brightness,
            kelvin=self.kelvin,
        )

    def as_dict(self) -> dict[str, float]:
        """Return the colour as a plain dictionary."""
        return {
            "hue": self.hue,
            "saturation": self.saturation,
            "brightness": self.brightness,
            "kelvin": self.kelvin,
        }


OFF = Color(hue=0.0, saturation=1.0, brightness=0.0, kelvin=2500)

NAMED_COLORS: Mapping[str, Color] = {
    "W": Color(hue=0.0, saturation=0.0, brightness=1.0, kelvin=4000),  # white
    "F": Color(hue=0.0, saturation=0.0, brightness=1.0, kelvin=9000),  # fluorescent
    "R": Color(hue=0.0, saturation=1.0, brightness=1.0, kelvin=9000),  # red
    "K": Color(hue=22 / 360, saturation=1.0, brightness=1.0, kelvin=9000),  # pumpkin
    "O": Color(hue=31.2 / 360, saturation=1.0, brightness=1.0, kelvin=9000),  # orange
    "Y": Color(hue=60.235 / 360, saturation=1.0, brightness=1.0, kelvin=9000),  # yellow
    "L": Color(hue=67.059 / 360, saturation=1.0, brightness=1.0, kelvin=9000),  # lime
    "G": Color(hue=106.632 / 360, saturation=1.0, brightness=1.0, kelvin=9000),  # green
    "S": Color(hue=140 / 360, saturation=1.0, brightness=1.0, kelvin=9000),  # slime
    "C": Color(hue=180 / 360, saturation=1.0, brightness=1.0, kelvin=9000),  # cyan
    "B": Color(hue=247.294 / 360, saturation=1.0, brightness=1.0, kelvin=9000),  # blue
    "M": Color(hue=298.588 / 360, saturation=1.0, brightness=1.0, kelvin=9000),  # magenta
    "P": Color(hue=336.048 / 360, saturation=1.0, brightness=1.0, kelvin=9000),  # pink
}


def parse_color(token: Any, override: Mapping[str, Any] | None = None) -> Color:
    """Map a colour token to a Color.

    Only the first character of the token is significant and case is
    ignored, so "r", "R" and "red" all give red. Anything that is not a
    non-empty string, or whose first character is not in the table,
    gives `OFF`.

    Args:
        token: Colour token, usually a single letter
        override: Optional fields to replace on the parsed colour
            (e.g. ``{"brightness": 0.5}``)

    Returns:
        The parsed colour, with any override fields applied

    Example:
        ```python
        parse_color("c")  # cyan
        parse_color("W", {"kelvin": 2700})  # warm white
        parse_color(None)  # OFF
        ```
    """
    parsed = OFF
    if isinstance(token, str) and token:
        parsed = NAMED_COLORS.get(token[0].upper(), OFF)

    if override:
        return replace(parsed, **override)
    return parsed


def parse_colors(
    tokens: Iterable[Any], override: Mapping[str, Any] | None = None
) -> list[Color]:
    """Parse each token with `parse_color`, keeping order and length."""
    return [parse_color(token, override) for token in tokens]
