"""Command-line entry point."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence
from dataclasses import replace
from pathlib import Path

from lifx_tile_effects.app import load_valid_effects, run
from lifx_tile_effects.config import Settings
from lifx_tile_effects.effects.registry import EffectRegistry
from lifx_tile_effects.exceptions import TileEffectsError

_LOGGER = logging.getLogger(__name__)

_EPILOG = """
Examples:
  # Choose an effect interactively
  EFFECTS_PATH=./effects lifx-tile-effects

  # Start a named effect with verbose logging
  lifx-tile-effects --effects-path ./effects --effect rainbow --verbose

  # Rediscover the tile (e.g. after it changed IP address)
  lifx-tile-effects --effect rainbow --clear-cache
"""


def build_parser(effect_names: Sequence[str] | None = None) -> argparse.ArgumentParser:
    """Build the argument parser.

    Args:
        effect_names: Loaded effect names offered as --effect choices
    """
    from lifx_tile_effects import __version__

    parser = argparse.ArgumentParser(
        prog="lifx-tile-effects",
        description="Run animated effects on a LIFX Tile",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=_EPILOG,
    )
    parser.add_argument(
        "--effect",
        "-e",
        choices=list(effect_names) if effect_names else None,
        help="Effect name",
    )
    parser.add_argument(
        "--effects-path",
        "-p",
        type=Path,
        help="Directory containing effect modules (default: $EFFECTS_PATH)",
    )
    parser.add_argument(
        "--clear-cache",
        "-c",
        action="store_true",
        help="Clear device cache",
    )
    parser.add_argument(
        "--instant",
        "-i",
        action="store_true",
        help="Use a short fade-out (default: $INSTANT)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show debug logs",
    )
    parser.add_argument(
        "--version",
        "-V",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def configure_logging(verbose: bool) -> None:
    """Configure root logging for the requested verbosity."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _report(message: str) -> None:
    print(message, file=sys.stderr)
    print("Exiting...", file=sys.stderr)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line.

    Effects are loaded before the full parse so their names can be offered
    as --effect choices; a loading error is reported after the parse so
    --help and --version still work.

    Returns:
        Process exit code
    """
    env_settings = Settings.from_env()

    pre_parser = argparse.ArgumentParser(add_help=False)
    pre_parser.add_argument("--effects-path", "-p", type=Path)
    pre_args, _ = pre_parser.parse_known_args(argv)
    effects_path = pre_args.effects_path or env_settings.effects_path

    registry: EffectRegistry | None = None
    load_error: TileEffectsError | None = None
    try:
        registry = load_valid_effects(effects_path)
    except TileEffectsError as e:
        load_error = e

    args = build_parser(registry.names if registry else None).parse_args(argv)
    settings = replace(
        env_settings,
        effects_path=effects_path,
        effect=args.effect,
        clear_cache=args.clear_cache,
        verbose=args.verbose,
        instant=args.instant or env_settings.instant,
    )
    configure_logging(settings.verbose)

    if load_error is not None:
        _report(str(load_error))
        return 1

    try:
        asyncio.run(run(settings, registry=registry))
    except TileEffectsError as e:
        _report(str(e))
        return 1
    except KeyboardInterrupt:
        _report("Cancelled by user.")
        return 130

    return 0


if __name__ == "__main__":
    sys.exit(main())
