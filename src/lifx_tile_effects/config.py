"""Run configuration."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from lifx_tile_effects.const import (
    DEFAULT_CACHE_PATH,
    DISCOVERY_TIMEOUT,
    ENV_CACHE_PATH,
    ENV_EFFECTS_PATH,
    ENV_INSTANT,
    FADE_DURATION_INSTANT_MS,
    FADE_DURATION_MS,
)

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


@dataclass(frozen=True)
class Settings:
    """Settings for one run.

    Attributes:
        effects_path: Directory containing effect modules
        effect: Effect to start, or None to choose at run time
        clear_cache: Rebuild the device cache before resolving the tile
        verbose: Emit debug logs
        instant: Use a short fade-out (for fast iteration on effects)
        cache_path: Device cache snapshot location
        discovery_timeout: Seconds to wait for discovery responses
    """

    effects_path: Path | None = None
    effect: str | None = None
    clear_cache: bool = False
    verbose: bool = False
    instant: bool = False
    cache_path: Path = DEFAULT_CACHE_PATH
    discovery_timeout: float = DISCOVERY_TIMEOUT

    @property
    def fade_duration_ms(self) -> int:
        """Fade-out duration for the current mode."""
        return FADE_DURATION_INSTANT_MS if self.instant else FADE_DURATION_MS

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from environment variables.

        Reads EFFECTS_PATH, INSTANT and LIFX_TILE_CACHE.

        Args:
            environ: Mapping to read instead of os.environ
        """
        env = os.environ if environ is None else environ
        effects_path = env.get(ENV_EFFECTS_PATH) or None
        cache_path = env.get(ENV_CACHE_PATH) or None
        return cls(
            effects_path=Path(effects_path) if effects_path else None,
            instant=env.get(ENV_INSTANT, "").strip().lower() in _TRUE_VALUES,
            cache_path=Path(cache_path) if cache_path else DEFAULT_CACHE_PATH,
        )
