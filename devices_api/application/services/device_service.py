"""
Device Service - Application Layer

This module orchestrates the device operations: it enforces the business
rules that depend on a device's state, prevents duplicate devices on
creation and turns optimistic locking conflicts into rule violations.

Every operation returns a ServiceResult. Expected failures are returned
as error values; only unexpected failures (e.g. the database being
unreachable) propagate as exceptions.
"""

from dataclasses import replace
from typing import List

from dependency_injector.wiring import Provide, inject

from devices_api.application.dtos.device_dto import (
    DeviceCreateDTO,
    DevicePatchDTO,
    DeviceResponseDTO,
    DeviceStatisticsDTO,
    DeviceUpdateDTO,
)
from devices_api.application.mappers import device_mapper
from devices_api.application.models.result import ServiceResult
from devices_api.domain.entities.device import Device, DeviceState
from devices_api.domain.entities.errors import (
    BusinessRuleViolationError,
    ConcurrentModificationError,
    DeviceNotFoundError,
    DuplicateDeviceError,
)
from devices_api.domain.repositories.device_repository import IDeviceRepository
from devices_api.shared import get_logger

logger = get_logger(__name__)


class DeviceService:
    """Application service for device management."""

    @inject
    def __init__(
        self,
        device_repository: IDeviceRepository = Provide["device_repository"],
    ):
        """
        Initialize the service with its dependencies.

        Args:
            device_repository: Persistence port for devices
        """
        self.device_repository = device_repository

    async def create(
        self, request: DeviceCreateDTO
    ) -> ServiceResult[DeviceResponseDTO]:
        """
        Create a new device.

        Args:
            request: Validated creation request

        Returns:
            The created device, or DuplicateDeviceError if a device with the
            same name and brand (ignoring case) already exists
        """
        logger.info("devices.create.started", name=request.name, brand=request.brand)

        if await self.device_repository.exists_by_name_and_brand(
            request.name, request.brand
        ):
            logger.warning(
                "devices.create.duplicate", name=request.name, brand=request.brand
            )
            return ServiceResult.failure(
                DuplicateDeviceError(request.name, request.brand)
            )

        device = device_mapper.to_entity(request)
        saved = await self.device_repository.save(device)

        logger.info("devices.create.succeeded", device_id=saved.id)
        return ServiceResult.success(device_mapper.to_response(saved))

    async def get(self, device_id: int) -> ServiceResult[DeviceResponseDTO]:
        """Get a device by its ID, or DeviceNotFoundError."""
        logger.debug("devices.get", device_id=device_id)

        device = await self.device_repository.find_by_id(device_id)
        if device is None:
            return self._not_found(device_id)
        return ServiceResult.success(device_mapper.to_response(device))

    async def list_all(self) -> ServiceResult[List[DeviceResponseDTO]]:
        """List every device, newest first."""
        devices = await self.device_repository.list_all_by_creation_desc()
        logger.debug("devices.list", count=len(devices))
        return ServiceResult.success(device_mapper.to_response_list(devices))

    async def list_by_brand(self, brand: str) -> ServiceResult[List[DeviceResponseDTO]]:
        devices = await self.device_repository.find_by_brand(brand)
        logger.debug("devices.list_by_brand", brand=brand, count=len(devices))
        return ServiceResult.success(device_mapper.to_response_list(devices))

    async def list_by_state(
        self, state: DeviceState
    ) -> ServiceResult[List[DeviceResponseDTO]]:
        devices = await self.device_repository.find_by_state(state)
        logger.debug("devices.list_by_state", state=state.value, count=len(devices))
        return ServiceResult.success(device_mapper.to_response_list(devices))

    async def statistics(self) -> ServiceResult[DeviceStatisticsDTO]:
        """Count devices per state."""
        counts = {
            state: await self.device_repository.count_by_state(state)
            for state in DeviceState
        }
        return ServiceResult.success(device_mapper.to_statistics(counts))

    async def update(
        self, device_id: int, request: DeviceUpdateDTO
    ) -> ServiceResult[DeviceResponseDTO]:
        """
        Fully update a device (PUT).

        Name and brand of an in-use device may only be "changed" to their
        current values; the comparison is case-sensitive.

        Returns:
            The updated device, or one of DeviceNotFoundError and
            BusinessRuleViolationError (UPDATE_IN_USE_DEVICE,
            OPTIMISTIC_LOCK_FAILURE)
        """
        logger.info("devices.update.started", device_id=device_id)

        device = await self.device_repository.find_by_id(device_id)
        if device is None:
            return self._not_found(device_id)

        if device.is_in_use():
            name_changed = device.name != request.name
            brand_changed = device.brand != request.brand
            if name_changed or brand_changed:
                return self._in_use_update_rejected(device_id)

        original = replace(device)
        device_mapper.update_entity(device, request)
        return await self._save_changes(device, original, "devices.update")

    async def patch(
        self, device_id: int, request: DevicePatchDTO
    ) -> ServiceResult[DeviceResponseDTO]:
        """
        Partially update a device (PATCH).

        Same rules as update(), but only the fields present in the request
        are checked and applied.
        """
        logger.info(
            "devices.patch.started",
            device_id=device_id,
            fields=sorted(request.model_fields_set),
        )

        device = await self.device_repository.find_by_id(device_id)
        if device is None:
            return self._not_found(device_id)

        if device.is_in_use():
            name_changed = request.has_name() and device.name != request.name
            brand_changed = request.has_brand() and device.brand != request.brand
            if name_changed or brand_changed:
                return self._in_use_update_rejected(device_id)

        original = replace(device)
        device_mapper.patch_entity(device, request)
        return await self._save_changes(device, original, "devices.patch")

    async def delete(self, device_id: int) -> ServiceResult[None]:
        """
        Delete a device.

        The delete only goes through if the device was not modified after it
        was read, so a device switched to InUse in between is never removed.

        Returns:
            An empty success, or DeviceNotFoundError, or
            BusinessRuleViolationError (DELETE_IN_USE_DEVICE,
            OPTIMISTIC_LOCK_FAILURE)
        """
        logger.info("devices.delete.started", device_id=device_id)

        device = await self.device_repository.find_by_id(device_id)
        if device is None:
            return self._not_found(device_id)

        if device.is_in_use():
            logger.warning("devices.delete.in_use_rejected", device_id=device_id)
            return ServiceResult.failure(
                BusinessRuleViolationError.cannot_delete_in_use_device(device_id)
            )

        try:
            await self.device_repository.delete(device)
        except ConcurrentModificationError as e:
            # Changed since it was read, possibly into InUse
            logger.warning(
                "devices.delete.optimistic_lock_failure",
                device_id=device_id,
                expected_version=e.expected_version,
                actual_version=e.actual_version,
            )
            return ServiceResult.failure(
                BusinessRuleViolationError.optimistic_lock_failure(device_id)
            )
        except DeviceNotFoundError as e:
            return ServiceResult.failure(e)

        logger.info("devices.delete.succeeded", device_id=device_id)
        return ServiceResult.success()

    async def _save_changes(
        self, device: Device, original: Device, event: str
    ) -> ServiceResult[DeviceResponseDTO]:
        if device == original:
            # Nothing changed, so the version stays as it is
            logger.debug(f"{event}.unchanged", device_id=device.id)
            return ServiceResult.success(device_mapper.to_response(device))

        try:
            saved = await self.device_repository.save(device)
        except ConcurrentModificationError as e:
            logger.warning(
                f"{event}.optimistic_lock_failure",
                device_id=device.id,
                expected_version=e.expected_version,
                actual_version=e.actual_version,
            )
            return ServiceResult.failure(
                BusinessRuleViolationError.optimistic_lock_failure(device.id)
            )
        except DeviceNotFoundError as e:
            return ServiceResult.failure(e)

        logger.info(f"{event}.succeeded", device_id=saved.id, version=saved.version)
        return ServiceResult.success(device_mapper.to_response(saved))

    def _in_use_update_rejected(self, device_id: int) -> ServiceResult:
        logger.warning("devices.update.in_use_rejected", device_id=device_id)
        return ServiceResult.failure(
            BusinessRuleViolationError.cannot_update_in_use_device(device_id)
        )

    def _not_found(self, device_id: int) -> ServiceResult:
        logger.debug("devices.not_found", device_id=device_id)
        return ServiceResult.failure(DeviceNotFoundError(device_id))
