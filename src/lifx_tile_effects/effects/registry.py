"""Effect registry and effects directory scanner.

Effects are plain Python modules dropped into a directory. The scanner
imports each one, keeps those that satisfy the effect contract and
registers them under their file name.
"""

from __future__ import annotations

import importlib.machinery
import importlib.util
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from types import ModuleType
from typing import TYPE_CHECKING

from lifx_tile_effects.const import EFFECT_EXTENSIONS
from lifx_tile_effects.effects.base import is_valid_effect

if TYPE_CHECKING:
    from lifx_tile_effects.effects.base import Effect

_LOGGER = logging.getLogger(__name__)

# Loaded effect modules live under this prefix in sys.modules
_MODULE_PREFIX = "lifx_tile_effects.user_effects"


@dataclass(frozen=True)
class EffectInfo:
    """A registered effect.

    Attributes:
        name: Effect name (the module file stem, e.g. "rainbow")
        effect: The loaded effect
        path: File the effect was loaded from, if any
    """

    name: str
    effect: Effect
    path: Path | None = None


class EffectRegistry:
    """Named collection of validated effects.

    Example:
        ```python
        registry = load_effects(Path("effects"))
        for info in registry.effects:
            print(f"{info.name}: {info.path}")

        rainbow = registry.get_effect("rainbow")
        ```
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._effects: dict[str, EffectInfo] = {}

    def register(self, info: EffectInfo) -> None:
        """Register an effect.

        Args:
            info: Effect to register

        Raises:
            TypeError: If the effect does not satisfy the effect contract
        """
        if not is_valid_effect(info.effect):
            raise TypeError(
                f"Effect {info.name!r} must define callable create() "
                "and get_flush_color()"
            )
        self._effects[info.name] = info

    @property
    def effects(self) -> list[EffectInfo]:
        """Return all registered effects in registration order."""
        return list(self._effects.values())

    @property
    def names(self) -> list[str]:
        """Return all registered effect names in registration order."""
        return list(self._effects)

    def get_effect(self, name: str) -> EffectInfo | None:
        """Look up an effect by name.

        Args:
            name: Effect name to look up

        Returns:
            EffectInfo if found, None otherwise
        """
        return self._effects.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._effects

    def __len__(self) -> int:
        return len(self._effects)

    def __repr__(self) -> str:
        """String representation of the registry."""
        return f"EffectRegistry(effects={self.names})"


def load_effects(directory: Path) -> EffectRegistry:
    """Load every valid effect module in a directory.

    Only regular files directly inside the directory with a recognised
    extension are considered; names starting with an underscore are
    skipped. Modules that fail to import or do not satisfy the effect
    contract are left out without raising.

    Args:
        directory: Directory to scan (not recursive)

    Returns:
        Registry of the valid effects, ordered by file name
    """
    registry = EffectRegistry()

    for path in sorted(Path(directory).iterdir()):
        if not path.is_file() or path.name.startswith("_"):
            continue
        if path.suffix.lower() not in EFFECT_EXTENSIONS:
            continue

        module = _load_module(path)
        if module is None or not is_valid_effect(module):
            _LOGGER.debug(
                {
                    "function": "load_effects",
                    "action": "skip",
                    "values": {"path": str(path), "loaded": module is not None},
                }
            )
            continue

        registry.register(EffectInfo(name=path.stem, effect=module, path=path))

    _LOGGER.debug(
        {
            "function": "load_effects",
            "action": "complete",
            "values": {"directory": str(directory), "effects": registry.names},
        }
    )
    return registry


def _load_module(path: Path) -> ModuleType | None:
    """Import a source file as a standalone module.

    Returns:
        The module, or None if it could not be imported
    """
    module_name = f"{_MODULE_PREFIX}.{path.stem}"
    # Source loader regardless of suffix case (".PY")
    loader = importlib.machinery.SourceFileLoader(module_name, str(path))
    spec = importlib.util.spec_from_file_location(module_name, path, loader=loader)
    if spec is None or spec.loader is None:
        return None

    module = importlib.util.module_from_spec(spec)
    # Dataclasses defined in the effect look their module up in sys.modules
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception:
        sys.modules.pop(module_name, None)
        _LOGGER.debug(
            {
                "function": "_load_module",
                "action": "import_failed",
                "values": {"path": str(path)},
            },
            exc_info=True,
        )
        return None

    return module
