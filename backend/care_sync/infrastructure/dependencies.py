"""Dependency wiring — builds the sync core and exposes it to FastAPI.

One ``SyncContainer`` lives on ``app.state`` for the lifetime of the app: the
record store is the shared query cache, so it must not be rebuilt per request.
"""

import logging
from collections.abc import Mapping

import httpx
from fastapi import Request

from care_sync.application.interfaces import OwnerDirectory, RecordGateway
from care_sync.application.resources import RESOURCES, ResourceConfig
from care_sync.application.services import (
    OptimisticMutationExecutor,
    PlaceholderGenerator,
    ProjectionService,
    RecordQueryService,
    RecordStore,
)
from care_sync.config import Settings, get_settings
from care_sync.domain.entities import Owner, Record, StaffMember
from care_sync.domain.exceptions import EntityNotFoundError
from care_sync.infrastructure.http import CareApiClient, HttpOwnerDirectory, HttpRecordGateway
from care_sync.infrastructure.logging.notifiers import RecordingNotifier

logger = logging.getLogger(__name__)


class SyncContainer:
    """Holds the record store plus one executor, query and projection per resource."""

    def __init__(
        self,
        gateways: Mapping[str, RecordGateway],
        owners: OwnerDirectory,
        *,
        settings: Settings | None = None,
        notifier: RecordingNotifier | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        settings = settings or get_settings()
        self.store = RecordStore()
        self.notifier = notifier or RecordingNotifier()
        self.owners = owners
        self._http_client = http_client
        placeholders = PlaceholderGenerator()

        self.executors: dict[str, OptimisticMutationExecutor] = {}
        self.queries: dict[str, RecordQueryService] = {}
        self.projections: dict[str, ProjectionService] = {}
        for name, gateway in gateways.items():
            resource = RESOURCES[name]
            self.executors[name] = OptimisticMutationExecutor(
                self.store, gateway, resource, placeholders=placeholders, notifier=self.notifier
            )
            self.queries[name] = RecordQueryService(self.store, gateway, resource)
            self.projections[name] = ProjectionService(
                resource,
                placeholders=placeholders,
                synthesize_future_dates=settings.synthesize_future_dates,
            )

    def resource(self, name: str) -> ResourceConfig:
        if name not in self.executors:
            raise EntityNotFoundError("Resource", name)
        return RESOURCES[name]

    async def expected_owners(self, resource: ResourceConfig, records: tuple[Record, ...]) -> list[Owner]:
        """Owners the grid of ``resource`` is laid out for."""
        if resource.owner_field == "id":
            # Self-owned rows: the collection itself is the master data
            return [_staff_from_record(r) for r in records if not r.pending]
        return await self.owners.list_residents()

    async def aclose(self) -> None:
        if self._http_client is not None:
            await self._http_client.aclose()


def _staff_from_record(record: Record) -> StaffMember:
    return StaffMember(
        id=record.id,
        staff_id=record.get("staff_id") or "",
        staff_name=record.get("staff_name") or "",
        floor=record.get("floor"),
        job_role=record.get("job_role"),
        sort_order=record.get("sort_order") or 0,
    )


def build_container(settings: Settings | None = None) -> SyncContainer:
    """Wire the HTTP adapters to the care records backend."""
    settings = settings or get_settings()
    http_client = httpx.AsyncClient(timeout=settings.api_timeout_seconds)
    client = CareApiClient(
        settings.api_base_url,
        token=settings.api_token,
        timeout=settings.api_timeout_seconds,
        http_client=http_client,
    )
    gateways = {name: HttpRecordGateway(client, resource) for name, resource in RESOURCES.items()}
    logger.info("Care backend at %s (%d resources)", settings.api_base_url, len(gateways))
    return SyncContainer(
        gateways,
        HttpOwnerDirectory(client),
        settings=settings,
        http_client=http_client,
    )


def get_container(request: Request) -> SyncContainer:
    """Provides the application's SyncContainer."""
    return request.app.state.container
