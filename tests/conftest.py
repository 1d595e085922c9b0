"""Shared fixtures for lifx-tile-effects tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from lifx_tile_effects.const import TILE_PRODUCT_ID

VALID_EFFECT_SOURCE = '''
from lifx_tile_effects import parse_color

calls = []


def get_flush_color():
    return parse_color("C")


async def create(context):
    calls.append(context)
'''

MISSING_FLUSH_COLOR_SOURCE = '''
async def create(context):
    pass
'''


def _make_record(
    mac: str,
    ip: str,
    label: str = "Tile",
    product_id: int = TILE_PRODUCT_ID,
    **extra: Any,
) -> dict[str, Any]:
    return {
        "mac": mac,
        "ip": ip,
        "port": 56700,
        "deviceInfo": {"label": label, "vendorId": 1, "productId": product_id},
        **extra,
    }


def _make_tile_info(
    user_x: float = 0.0, user_y: float = 0.0, tile_index: int = 0
) -> MagicMock:
    info = MagicMock()
    info.tile_index = tile_index
    info.width = 8
    info.height = 8
    info.user_x = user_x
    info.user_y = user_y
    return info


def _make_matrix_light(
    serial: str = "d073d5000001",
    ip: str = "192.168.1.100",
    tile_count: int = 1,
    power: bool = False,
) -> MagicMock:
    device = MagicMock()
    device.serial = serial
    device.ip = ip
    device.get_device_chain = AsyncMock(
        return_value=[
            _make_tile_info(user_x=float(i), tile_index=i) for i in range(tile_count)
        ]
    )
    device.get_power = AsyncMock(return_value=power)
    device.set_power = AsyncMock()
    device.set64 = AsyncMock()
    return device


@pytest.fixture
def make_record():
    """Factory for cache records as written by a discovery sweep."""
    return _make_record


@pytest.fixture
def make_tile_info():
    """Factory for mock TileInfo entries (8x8 tiles)."""
    return _make_tile_info


@pytest.fixture
def make_matrix_light():
    """Factory for mock MatrixLight devices."""
    return _make_matrix_light


@pytest.fixture
def cache_path(tmp_path: Path) -> Path:
    """Location of a device cache inside the test's temp directory."""
    return tmp_path / "cache" / "devices.json"


@pytest.fixture
def write_cache(cache_path: Path):
    """Write raw records to the cache file."""

    def _write(records: Any) -> Path:
        cache_path.parent.mkdir(parents=True, exist_ok=True)
        cache_path.write_text(json.dumps(records))
        return cache_path

    return _write


@pytest.fixture
def effects_dir(tmp_path: Path) -> Path:
    """Empty effects directory."""
    path = tmp_path / "effects"
    path.mkdir()
    return path


@pytest.fixture
def write_effect(effects_dir: Path):
    """Write an effect module into the effects directory."""

    def _write(filename: str, source: str = VALID_EFFECT_SOURCE) -> Path:
        path = effects_dir / filename
        path.write_text(source)
        return path

    return _write


@pytest.fixture
def invalid_effect_source() -> str:
    """Source of an effect module missing get_flush_color()."""
    return MISSING_FLUSH_COLOR_SOURCE
