"""HTTP implementation of the OwnerDirectory port."""

import logging

from pydantic import ValidationError

from care_sync.application.interfaces import OwnerDirectory
from care_sync.application.schemas import ResidentResponse, StaffResponse
from care_sync.domain.entities import Resident, StaffMember

from .care_api_client import CareApiClient

logger = logging.getLogger(__name__)


class HttpOwnerDirectory(OwnerDirectory):
    """Loads residents and staff from ``/api/residents`` and ``/api/staff-management``."""

    def __init__(self, client: CareApiClient):
        self._client = client

    async def list_residents(self) -> list[Resident]:
        residents = []
        for row in await self._client.request("GET", "residents") or []:
            try:
                dto = ResidentResponse.model_validate(row)
            except ValidationError:
                logger.warning("Skipping malformed resident row: %r", row)
                continue
            residents.append(
                Resident(
                    id=dto.id,
                    name=dto.name,
                    room_number=dto.room_number,
                    floor=dto.floor,
                    bath_weekdays=dto.bath_weekdays(),
                    is_admitted=bool(dto.is_admitted),
                )
            )
        return residents

    async def list_staff(self) -> list[StaffMember]:
        staff = []
        for row in await self._client.request("GET", "staff-management") or []:
            try:
                dto = StaffResponse.model_validate(row)
            except ValidationError:
                logger.warning("Skipping malformed staff row: %r", row)
                continue
            staff.append(
                StaffMember(
                    id=dto.id,
                    staff_id=dto.staff_id or "",
                    staff_name=dto.staff_name or "",
                    floor=dto.floor,
                    job_role=dto.job_role,
                    sort_order=dto.sort_order or 0,
                )
            )
        return staff
