"""
Device connection

The session never talks to a transport itself. It awaits a connector
coroutine that turns a device kind into a DeviceInfo or raises when the
device cannot be reached. This module provides the default connector for the
known device kinds.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict

from ..core.config import DEVICE_PROFILES
from ..core.data_types import DeviceInfo, FilterSettings

DeviceConnector = Callable[[str], Awaitable[DeviceInfo]]


def device_info_from_preset(kind: str, preset: Dict[str, Any]) -> DeviceInfo:
    """
    Build a DeviceInfo from a DEVICE_PROFILES entry

    Only "name" is required; a preset without "sample_rate" leaves the rate
    to the session configuration.
    """
    channel_names = tuple(preset.get("channels", ()))
    filters = preset.get("filters")
    return DeviceInfo(
        name=preset["name"],
        kind=kind,
        channels=len(channel_names),
        sample_rate=preset.get("sample_rate"),
        channel_names=channel_names,
        filter_settings=FilterSettings(**filters) if filters else None,
    )


async def connect_device(kind: str, profiles: Dict[str, Dict[str, Any]] = DEVICE_PROFILES) -> DeviceInfo:
    """
    Resolve a device kind to its description

    Args:
        kind: Device kind ("simulator", "muse", "emotiv", "neurosky")
        profiles: Kind -> preset record (name, sample_rate, channels, filters)

    Returns:
        DeviceInfo: Connected device description

    Raises:
        ValueError: If the kind is not supported
    """
    if kind not in profiles:
        raise ValueError(f"Unsupported device kind '{kind}', available: {sorted(profiles)}")

    logging.info(f"Attempting to connect to {kind} device...")
    # Yield to the loop as a real handshake would
    await asyncio.sleep(0)

    return device_info_from_preset(kind, profiles[kind])
