"""Exceptions raised by lifx-tile-effects.

Device communication errors are not redefined here; they come from
lifx-async (``lifx.exceptions.LifxError`` and subclasses).
"""

from __future__ import annotations


class TileEffectsError(Exception):
    """Base exception for all terminal lifx-tile-effects errors."""


class ConfigurationError(TileEffectsError):
    """Effects path missing or invalid, or an unknown effect requested."""


class NoEffectsFoundError(ConfigurationError):
    """The effects directory holds no valid effect modules."""


class NoEffectChosenError(TileEffectsError):
    """Effect selection was cancelled."""


class CacheCorruptError(TileEffectsError):
    """The device cache snapshot could not be read or parsed."""


class ResolutionError(TileEffectsError):
    """Base class for tile resolution failures."""


class NoTileFoundError(ResolutionError):
    """No tile-class device found, even after a fresh discovery."""


class NoTileChosenError(ResolutionError):
    """Tile selection was cancelled."""


class TileNotRespondingError(ResolutionError):
    """The chosen tile did not answer the device chain query."""
