"""Network discovery sweep producing cacheable device records."""

from __future__ import annotations

import logging

from lifx import discover
from lifx.exceptions import LifxError

from lifx_tile_effects.const import BROADCAST_ADDRESS, DISCOVERY_TIMEOUT
from lifx_tile_effects.network.cache import DiscoveredDevice, serial_to_mac

_LOGGER = logging.getLogger(__name__)


async def discover_devices(
    timeout: float = DISCOVERY_TIMEOUT,
    broadcast_address: str = BROADCAST_ADDRESS,
) -> list[DiscoveredDevice]:
    """Broadcast for LIFX devices and describe each one that answers.

    Every responding device is asked for its label and version so the
    result can be filtered by product id without further network traffic.
    Devices that stop responding between the broadcast and those queries
    are left out.

    Args:
        timeout: Seconds to wait for broadcast responses
        broadcast_address: Address to broadcast discovery packets to

    Returns:
        Discovered devices in the order they responded
    """
    found: list[DiscoveredDevice] = []

    async for device in discover(timeout=timeout, broadcast_address=broadcast_address):
        try:
            async with device:
                label = await device.get_label()
                version = await device.get_version()
        except (LifxError, TimeoutError) as e:
            _LOGGER.warning(
                {
                    "function": "discover_devices",
                    "action": "skip",
                    "error": str(e),
                    "values": {"serial": device.serial, "ip": device.ip},
                }
            )
            continue

        mac = serial_to_mac(device.serial)
        found.append(
            DiscoveredDevice(
                mac=mac,
                ip=device.ip,
                label=label,
                product_id=version.product,
                raw={
                    "mac": mac,
                    "ip": device.ip,
                    "port": device.port,
                    "deviceInfo": {
                        "label": label,
                        "vendorId": version.vendor,
                        "productId": version.product,
                    },
                },
            )
        )

    _LOGGER.debug(
        {
            "function": "discover_devices",
            "action": "complete",
            "values": {"count": len(found), "timeout": timeout},
        }
    )
    return found
