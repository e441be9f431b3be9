"""
Collaborator callbacks. The core forwards requests, it never performs the
image read or the navigation itself.
"""
import logging
from dataclasses import dataclass
from typing import Callable, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeviceActions:
    on_image_update: Optional[Callable[[str, str], None]] = None    # (device_id, data_uri)
    on_device_select: Optional[Callable[[str], None]] = None        # (device_id)


def forward_image_update(actions: DeviceActions, device_id: str, image_data_uri: str) -> bool:
    """
    Forward a decoded image for a device. Content and size are not validated.
    Returns False when the host registered no handler.
    """
    if actions.on_image_update is None:
        logger.debug("No image handler registered, dropping update for %s", device_id)
        return False
    actions.on_image_update(device_id, image_data_uri)
    return True


def forward_device_selection(actions: DeviceActions, device_id: str) -> None:
    if actions.on_device_select is not None:
        actions.on_device_select(device_id)
