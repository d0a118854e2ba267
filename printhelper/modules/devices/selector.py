"""Target printer selection."""

from collections.abc import Sequence

from printhelper.shared.logging import get_logger

from .schemas import Device

logger = get_logger(__name__)


def select_target(devices: Sequence[Device], keywords: Sequence[str]) -> str | None:
    """
    Choose the printer to send a job to.

    Priority: first keyword (in order) that matches any device name as a
    case-insensitive substring, then the OS default device, then the
    first device. Returns None for an empty list.
    """
    if not devices:
        return None

    for keyword in keywords:
        needle = keyword.lower()
        for device in devices:
            if needle in device.name.lower():
                logger.info(f"Target printer matched keyword '{keyword}': {device.name}")
                return device.name

    for device in devices:
        if device.is_default:
            logger.info(f"Using default printer: {device.name}")
            return device.name

    logger.info(f"Using first printer: {devices[0].name}")
    return devices[0].name
