"""
Device Repository Interface

This module defines the persistence port for device entities following
the repository pattern. It abstracts the data access operations the
device service relies on, decoupling it from specific stores.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from devices_api.domain.entities.device import Device, DeviceState


class IDeviceRepository(ABC):
    """Interface for Device repository implementations."""

    INITIAL_VERSION = 1

    @abstractmethod
    async def find_by_id(self, device_id: int) -> Optional[Device]:
        """
        Find a device by its ID.

        Args:
            device_id: The unique identifier of the device

        Returns:
            The device if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_brand(self, brand: str) -> List[Device]:
        """
        Find the devices of a brand, matching the brand case-insensitively.

        Args:
            brand: Brand to match exactly, ignoring case

        Returns:
            Devices of that brand
        """
        pass

    @abstractmethod
    async def find_by_state(self, state: DeviceState) -> List[Device]:
        """Find every device currently in ``state``."""
        pass

    @abstractmethod
    async def exists_by_name_and_brand(self, name: str, brand: str) -> bool:
        """
        Check whether a device with this name and brand exists.

        Both values are compared case-insensitively.
        """
        pass

    @abstractmethod
    async def count_by_state(self, state: DeviceState) -> int:
        """Count the devices currently in ``state``."""
        pass

    @abstractmethod
    async def list_all_by_creation_desc(self) -> List[Device]:
        """
        List every device, newest first.

        Devices created at the same instant are ordered by id, descending.
        """
        pass

    @abstractmethod
    async def save(self, device: Device) -> Device:
        """
        Insert a new device or update an existing one.

        A device without an id is inserted: the store assigns its id,
        ``creation_time`` and ``INITIAL_VERSION``. A device with an id is
        written only if its ``version`` matches the stored one, and the
        stored version is then incremented.

        Args:
            device: The device to persist

        Returns:
            The persisted device, carrying its fresh version

        Raises:
            ConcurrentModificationError: If the stored version differs
            DeviceNotFoundError: If the device was removed in the meantime
        """
        pass

    @abstractmethod
    async def delete(self, device: Device) -> None:
        """
        Delete a device, only if its ``version`` still matches the stored one.

        Raises:
            ConcurrentModificationError: If the stored version differs
            DeviceNotFoundError: If the device does not exist
        """
        pass
