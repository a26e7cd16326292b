"""
Domain Entities - Device

This module defines the device entity and its state enumeration.
The entity carries the business rules that depend only on its own state,
without dependencies on external frameworks or infrastructure.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import List, Optional

from devices_api.domain.entities.errors import InvalidDeviceStateError

NAME_MAX_LENGTH = 100
BRAND_MAX_LENGTH = 50


class DeviceState(str, Enum):
    """Lifecycle state of a device."""

    AVAILABLE = "available"
    IN_USE = "in-use"
    INACTIVE = "inactive"

    @classmethod
    def tokens(cls) -> List[str]:
        """Wire tokens of every state, in declaration order."""
        return [state.value for state in cls]

    @classmethod
    def from_value(cls, value: str) -> "DeviceState":
        """
        Parse a wire token into a state, ignoring case.

        Raises:
            InvalidDeviceStateError: If the token names no state
        """
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower()
        for state in cls:
            if state.value == normalized:
                return state
        raise InvalidDeviceStateError(str(value), cls.tokens())

    def __str__(self) -> str:
        return self.value


@dataclass
class Device:
    """
    A managed device.

    ``id``, ``creation_time`` and ``version`` are owned by the persistence
    layer: they stay ``None`` until the device is first saved.
    """

    name: str
    brand: str
    state: DeviceState = DeviceState.AVAILABLE
    id: Optional[int] = None
    creation_time: Optional[datetime] = None
    version: Optional[int] = None

    def is_in_use(self) -> bool:
        """Whether name/brand changes and deletion are currently forbidden."""
        return self.state is DeviceState.IN_USE

    def is_persisted(self) -> bool:
        return self.id is not None
