"""Abstract interface (port) for record owner master data."""

from abc import ABC, abstractmethod

from care_sync.domain.entities import Resident, StaffMember


class OwnerDirectory(ABC):
    """Port for resident and staff master data."""

    @abstractmethod
    async def list_residents(self) -> list[Resident]:
        ...

    @abstractmethod
    async def list_staff(self) -> list[StaffMember]:
        ...
