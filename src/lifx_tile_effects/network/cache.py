"""On-disk cache of discovered LIFX devices.

The cache is a single JSON snapshot of the last discovery sweep. It is
always replaced as a whole and never patched: a stale snapshot is deleted
and rebuilt by a fresh sweep.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from lifx_tile_effects.exceptions import CacheCorruptError

_LOGGER = logging.getLogger(__name__)


def serial_to_mac(serial: str) -> str:
    """Convert a 12-hex-digit serial (d073d5123456) to d0:73:d5:12:34:56."""
    serial = serial.replace(":", "").lower()
    return ":".join(serial[i : i + 2] for i in range(0, len(serial), 2))


@dataclass(frozen=True)
class DiscoveredDevice:
    """A device found by a discovery sweep.

    Attributes:
        mac: Hardware address, colon separated (unique key)
        ip: IP address at discovery time (may go stale)
        label: Device label as set in the LIFX app
        product_id: LIFX product identifier
        raw: The full cache record, including fields this package does
            not interpret
    """

    mac: str
    ip: str
    label: str
    product_id: int
    raw: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @property
    def serial(self) -> str:
        """Serial number as lifx-async expects it (mac without colons)."""
        return self.mac.replace(":", "").lower()

    @property
    def display_label(self) -> str:
        """Label shown when choosing between devices."""
        return f"{self.label} [{self.mac}]"

    @classmethod
    def from_dict(cls, record: Mapping[str, Any]) -> DiscoveredDevice:
        """Build from a cache record.

        Raises:
            KeyError: If a required field is missing
            TypeError: If the record or its deviceInfo is not a mapping
            ValueError: If productId is not an integer
        """
        info = record["deviceInfo"]
        return cls(
            mac=str(record["mac"]),
            ip=str(record["ip"]),
            label=str(info.get("label", "")),
            product_id=int(info["productId"]),
            raw=dict(record),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the cache record, opaque fields included."""
        record = dict(self.raw)
        info = dict(record.get("deviceInfo") or {})
        info["label"] = self.label
        info["productId"] = self.product_id
        record["mac"] = self.mac
        record["ip"] = self.ip
        record["deviceInfo"] = info
        return record


class DeviceCacheStore:
    """Whole-snapshot JSON store for discovered devices.

    Example:
        ```python
        store = DeviceCacheStore(Path("cache/devices.json"))
        devices = store.load()
        if devices is None:
            store.save(await discover_devices())
        ```
    """

    def __init__(self, path: Path) -> None:
        """Initialize the store.

        Args:
            path: Location of the JSON snapshot
        """
        self._path = Path(path)

    @property
    def path(self) -> Path:
        """Location of the snapshot file."""
        return self._path

    def exists(self) -> bool:
        """Return True if a snapshot is present."""
        return self._path.is_file()

    def load(self) -> list[DiscoveredDevice] | None:
        """Read the snapshot.

        Returns:
            The cached devices in snapshot order, or None if there is no
            snapshot

        Raises:
            CacheCorruptError: If the file cannot be read or is not a JSON
                array of device records
        """
        if not self._path.exists():
            return None

        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise CacheCorruptError(
                f"Device cache [{self._path}] is unreadable: {e}"
            ) from e

        if not isinstance(data, list):
            raise CacheCorruptError(
                f"Device cache [{self._path}] is not a list of devices."
            )

        try:
            devices = [DiscoveredDevice.from_dict(record) for record in data]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise CacheCorruptError(
                f"Device cache [{self._path}] has an invalid record: {e!r}"
            ) from e

        _LOGGER.debug(
            {
                "class": self.__class__.__name__,
                "method": "load",
                "action": "read",
                "values": {"path": str(self._path), "count": len(devices)},
            }
        )
        return devices

    def save(self, devices: Iterable[DiscoveredDevice]) -> None:
        """Replace the snapshot with the given devices.

        The new snapshot is written to a temporary file beside the target
        and moved into place, so readers never see a partial file.
        """
        records = [device.to_dict() for device in devices]
        self._path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                json.dump(records, tmp, indent=2)
                tmp.write("\n")
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        _LOGGER.debug(
            {
                "class": self.__class__.__name__,
                "method": "save",
                "action": "write",
                "values": {"path": str(self._path), "count": len(records)},
            }
        )

    def invalidate(self) -> None:
        """Delete the snapshot if present."""
        existed = self._path.exists()
        self._path.unlink(missing_ok=True)

        _LOGGER.debug(
            {
                "class": self.__class__.__name__,
                "method": "invalidate",
                "action": "delete",
                "values": {"path": str(self._path), "existed": existed},
            }
        )

    def __repr__(self) -> str:
        """String representation of the store."""
        return f"DeviceCacheStore(path={str(self._path)!r})"
