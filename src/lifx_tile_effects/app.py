"""Top-level run: load effects, resolve the tile, start the chosen effect."""

from __future__ import annotations

import asyncio
import functools
import logging
from collections.abc import Awaitable, Callable
from pathlib import Path

from lifx import MatrixLight

from lifx_tile_effects.config import Settings
from lifx_tile_effects.effects.conductor import Conductor
from lifx_tile_effects.effects.registry import EffectInfo, EffectRegistry, load_effects
from lifx_tile_effects.exceptions import (
    ConfigurationError,
    NoEffectChosenError,
    NoEffectsFoundError,
)
from lifx_tile_effects.network.cache import DeviceCacheStore, DiscoveredDevice
from lifx_tile_effects.network.discovery import discover_devices
from lifx_tile_effects.network.resolver import TileResolver
from lifx_tile_effects.prompt import Selector, select

_LOGGER = logging.getLogger(__name__)


def validate_effects_path(effects_path: Path | None) -> Path:
    """Check that the effects path is set and is a directory.

    Raises:
        ConfigurationError: If the path is missing, absent or not a directory
    """
    if effects_path is None or not str(effects_path):
        raise ConfigurationError("Effects path required.")
    if not effects_path.exists():
        raise ConfigurationError(f"Effects path [{effects_path}] does not exist.")
    if not effects_path.is_dir():
        raise ConfigurationError(f"Effects path [{effects_path}] is not a directory.")
    return effects_path


def load_valid_effects(effects_path: Path | None) -> EffectRegistry:
    """Validate the effects path and load its effects.

    Raises:
        ConfigurationError: If the effects path is invalid
        NoEffectsFoundError: If no valid effect was found
    """
    path = validate_effects_path(effects_path)
    registry = load_effects(path)
    if not registry:
        raise NoEffectsFoundError(f"No valid effect files found in [{path}].")
    return registry


def select_effect(
    registry: EffectRegistry, choice: str | None, selector: Selector
) -> EffectInfo:
    """Pick the effect to run.

    An explicit choice wins; a registry with a single effect needs no
    choice; otherwise the selector is asked.

    Raises:
        ConfigurationError: If the explicit choice is not a loaded effect
        NoEffectChosenError: If the selector was cancelled
    """
    if choice is not None:
        info = registry.get_effect(choice)
        if info is None:
            raise ConfigurationError(
                f"Unknown effect [{choice}]; choose from {', '.join(registry.names)}."
            )
        return info

    if len(registry) == 1:
        return registry.effects[0]

    selected = selector("Choose an effect", registry.names)
    info = registry.get_effect(selected) if selected is not None else None
    if info is None:
        raise NoEffectChosenError("No effect chosen.")
    return info


async def run(
    settings: Settings,
    registry: EffectRegistry | None = None,
    selector: Selector = select,
    discover: Callable[[], Awaitable[list[DiscoveredDevice]]] | None = None,
    device_factory: Callable[..., MatrixLight] = MatrixLight,
) -> None:
    """Resolve the tile and hand it over to an effect.

    The device connection is released however this returns: when the
    effect finishes, on a terminal error, or on cancellation.

    Args:
        settings: Run settings
        registry: Preloaded effects (loaded from settings.effects_path if None)
        selector: Chooses between several tiles or effects
        discover: Discovery sweep (lifx-async broadcast if None)
        device_factory: Creates the device handle from serial and ip

    Raises:
        TileEffectsError: On any terminal configuration or resolution error
    """
    if registry is None:
        _LOGGER.debug({"function": "run", "action": "load_effects"})
        registry = load_valid_effects(settings.effects_path)

    if discover is None:
        discover = functools.partial(
            discover_devices, timeout=settings.discovery_timeout
        )

    resolver = TileResolver(
        DeviceCacheStore(settings.cache_path),
        discover=discover,
        selector=selector,
        device_factory=device_factory,
    )

    _LOGGER.debug(
        {
            "function": "run",
            "action": "resolve",
            "values": {"clear_cache": settings.clear_cache},
        }
    )
    async with await resolver.resolve(clear_cache=settings.clear_cache) as tile:
        info = await asyncio.to_thread(
            select_effect, registry, settings.effect, selector
        )
        print(f"Starting {info.name} effect... (press [ctrl+c] to exit)")

        conductor = Conductor(fade_duration_ms=settings.fade_duration_ms)
        await conductor.run(tile, info.effect)
