"""Tests for the device cache store."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from lifx_tile_effects.exceptions import CacheCorruptError
from lifx_tile_effects.network.cache import (
    DeviceCacheStore,
    DiscoveredDevice,
    serial_to_mac,
)


class TestSerialToMac:
    """Tests for serial_to_mac()."""

    def test_plain_serial(self) -> None:
        assert serial_to_mac("d073d5123456") == "d0:73:d5:12:34:56"

    def test_already_formatted(self) -> None:
        assert serial_to_mac("D0:73:D5:12:34:56") == "d0:73:d5:12:34:56"


class TestDiscoveredDevice:
    """Tests for DiscoveredDevice."""

    def test_from_dict(self, make_record) -> None:
        """Test parsing a cache record."""
        device = DiscoveredDevice.from_dict(
            make_record("d0:73:d5:00:00:01", "192.168.1.10", label="Desk")
        )

        assert device.mac == "d0:73:d5:00:00:01"
        assert device.ip == "192.168.1.10"
        assert device.label == "Desk"
        assert device.product_id == 55

    def test_serial_and_label(self, make_record) -> None:
        """Test derived serial and display label."""
        device = DiscoveredDevice.from_dict(
            make_record("d0:73:d5:00:00:01", "192.168.1.10", label="Desk")
        )

        assert device.serial == "d073d5000001"
        assert device.display_label == "Desk [d0:73:d5:00:00:01]"

    def test_to_dict_preserves_opaque_fields(self, make_record) -> None:
        """Test fields this package does not use survive a round trip."""
        record = make_record("d0:73:d5:00:00:01", "192.168.1.10", firmware="3.70")
        record["deviceInfo"]["hardwareVersion"] = 2

        assert DiscoveredDevice.from_dict(record).to_dict() == record

    def test_missing_required_field(self) -> None:
        """Test a record without mac is rejected."""
        with pytest.raises(KeyError):
            DiscoveredDevice.from_dict({"ip": "1.2.3.4", "deviceInfo": {"productId": 55}})


class TestDeviceCacheStore:
    """Tests for DeviceCacheStore."""

    def test_load_absent(self, cache_path: Path) -> None:
        """Test a missing snapshot loads as None."""
        store = DeviceCacheStore(cache_path)

        assert store.exists() is False
        assert store.load() is None

    def test_save_then_load(self, cache_path: Path, make_record) -> None:
        """Test saved devices load back in order."""
        devices = [
            DiscoveredDevice.from_dict(make_record("d0:73:d5:00:00:01", "10.0.0.1")),
            DiscoveredDevice.from_dict(
                make_record("d0:73:d5:00:00:02", "10.0.0.2", product_id=27)
            ),
        ]
        store = DeviceCacheStore(cache_path)
        store.save(devices)

        assert store.exists() is True
        loaded = store.load()
        assert loaded == devices
        assert [device.to_dict() for device in loaded] == [
            device.to_dict() for device in devices
        ]

    def test_save_creates_parent_directories(self, tmp_path: Path) -> None:
        """Test saving into a directory that does not exist yet."""
        store = DeviceCacheStore(tmp_path / "a" / "b" / "devices.json")
        store.save([])

        assert store.load() == []

    def test_save_writes_json_array(self, cache_path: Path, make_record) -> None:
        """Test the on-disk format is a JSON array of records."""
        record = make_record("d0:73:d5:00:00:01", "10.0.0.1")
        DeviceCacheStore(cache_path).save([DiscoveredDevice.from_dict(record)])

        assert json.loads(cache_path.read_text()) == [record]

    def test_save_replaces_whole_snapshot(self, cache_path: Path, make_record) -> None:
        """Test a second save replaces rather than merges."""
        store = DeviceCacheStore(cache_path)
        store.save([DiscoveredDevice.from_dict(make_record("d0:73:d5:00:00:01", "10.0.0.1"))])
        store.save([DiscoveredDevice.from_dict(make_record("d0:73:d5:00:00:02", "10.0.0.2"))])

        loaded = store.load()
        assert loaded is not None
        assert [device.mac for device in loaded] == ["d0:73:d5:00:00:02"]

    def test_save_leaves_no_temp_files(self, cache_path: Path) -> None:
        """Test the atomic write cleans up after itself."""
        DeviceCacheStore(cache_path).save([])

        assert [path.name for path in cache_path.parent.iterdir()] == ["devices.json"]

    def test_invalidate(self, write_cache, cache_path: Path, make_record) -> None:
        """Test invalidate deletes the snapshot."""
        write_cache([make_record("d0:73:d5:00:00:01", "10.0.0.1")])
        store = DeviceCacheStore(cache_path)

        store.invalidate()

        assert store.exists() is False
        assert store.load() is None

    def test_invalidate_is_idempotent(self, cache_path: Path) -> None:
        """Test invalidating a missing snapshot is a no-op."""
        store = DeviceCacheStore(cache_path)
        store.invalidate()
        store.invalidate()

        assert store.exists() is False

    def test_invalid_json_is_corrupt(self, cache_path: Path) -> None:
        """Test malformed JSON raises rather than reading as a miss."""
        cache_path.parent.mkdir(parents=True)
        cache_path.write_text("[{")

        with pytest.raises(CacheCorruptError):
            DeviceCacheStore(cache_path).load()

    def test_non_list_is_corrupt(self, write_cache, cache_path: Path) -> None:
        """Test a top-level object is rejected."""
        write_cache({"mac": "d0:73:d5:00:00:01"})

        with pytest.raises(CacheCorruptError):
            DeviceCacheStore(cache_path).load()

    @pytest.mark.parametrize(
        "record",
        [
            "not a record",
            {"ip": "10.0.0.1", "deviceInfo": {"productId": 55}},
            {"mac": "d0:73:d5:00:00:01", "ip": "10.0.0.1"},
            {"mac": "d0:73:d5:00:00:01", "ip": "10.0.0.1", "deviceInfo": []},
            {"mac": "d0:73:d5:00:00:01", "ip": "10.0.0.1", "deviceInfo": {"productId": "x"}},
        ],
    )
    def test_bad_record_is_corrupt(self, write_cache, cache_path: Path, record) -> None:
        """Test structurally invalid records are rejected."""
        write_cache([record])

        with pytest.raises(CacheCorruptError):
            DeviceCacheStore(cache_path).load()
