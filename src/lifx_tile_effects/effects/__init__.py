"""Effect loading and the start-up sequence that hands a tile to an effect."""

from __future__ import annotations

from lifx_tile_effects.effects.base import Effect, EffectContext, is_valid_effect
from lifx_tile_effects.effects.conductor import Conductor
from lifx_tile_effects.effects.registry import EffectInfo, EffectRegistry, load_effects

__all__ = [
    "Conductor",
    "Effect",
    "EffectContext",
    "EffectInfo",
    "EffectRegistry",
    "is_valid_effect",
    "load_effects",
]
