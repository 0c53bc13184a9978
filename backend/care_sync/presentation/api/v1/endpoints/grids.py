"""Grid endpoints — the data bindings of the vitals, bathing, rounds and staff pages.

Reads return the projected rows (real records plus synthesized placeholders);
writes go through the optimistic mutation executor and answer with its outcome.
Row ids travel in the body or query string since placeholder ids are not
path-safe.
"""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from care_sync.application.resources import ResourceConfig
from care_sync.application.schemas import (
    GridCreateRequest,
    GridEditRequest,
    GridRowsResponse,
    NotificationSchema,
    OutcomeResponse,
)
from care_sync.application.services import facility_today
from care_sync.domain.entities import MutationOutcome, MutationStatus, ProjectionFilters, RecordScope
from care_sync.domain.exceptions import (
    EntityNotFoundError,
    ServerError,
    SessionExpiredError,
    SyncError,
)
from care_sync.infrastructure.dependencies import SyncContainer, get_container

router = APIRouter(prefix="/grids", tags=["Grids"])

_OUTCOME_STATUS = {
    MutationStatus.RECONCILED: status.HTTP_200_OK,
    MutationStatus.REJECTED: 422,
    MutationStatus.DISCARDED: status.HTTP_409_CONFLICT,
    MutationStatus.ROLLED_BACK: status.HTTP_502_BAD_GATEWAY,
    MutationStatus.SESSION_EXPIRED: status.HTTP_401_UNAUTHORIZED,
}


def _resource(container: SyncContainer, name: str) -> ResourceConfig:
    try:
        return container.resource(name)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


def _scope(resource: ResourceConfig, date_from: date | None, date_to: date | None) -> RecordScope:
    return resource.scope_for(ProjectionFilters(date_from or facility_today(), date_to))


def _raise_for_fetch(error: SyncError) -> None:
    if isinstance(error, SessionExpiredError):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=error.message)
    if isinstance(error, ServerError):
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=error.message)
    raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(error))


async def _ensure_loaded(container: SyncContainer, resource: ResourceConfig, scope: RecordScope) -> None:
    try:
        await container.queries[resource.name].ensure(scope)
    except SyncError as e:
        _raise_for_fetch(e)


def _notifications(container: SyncContainer) -> list[NotificationSchema]:
    return [
        NotificationSchema(
            level=n.level, title=n.title, message=n.message, retryable=n.retryable
        )
        for n in container.notifier.drain()
    ]


def _outcome_response(
    container: SyncContainer,
    outcome: MutationOutcome,
    response: Response,
    *,
    success_status: int = status.HTTP_200_OK,
) -> OutcomeResponse:
    if outcome.ok:
        response.status_code = success_status
    elif outcome.status == MutationStatus.REJECTED and isinstance(outcome.error, EntityNotFoundError):
        response.status_code = status.HTTP_404_NOT_FOUND
    else:
        response.status_code = _OUTCOME_STATUS[outcome.status]
    return OutcomeResponse(
        status=outcome.status.value,
        row=outcome.record.to_dict() if outcome.record is not None else None,
        message=outcome.message,
        notifications=_notifications(container),
    )


@router.get("/{resource_name}", response_model=GridRowsResponse)
async def list_rows(
    resource_name: str,
    date_from: date | None = Query(None, description="First day shown (defaults to today)"),
    date_to: date | None = Query(None, description="Last day shown (defaults to date_from)"),
    floor: str | None = Query(None, description="Floor filter; 'all' for every floor"),
    timing: str | None = Query(None, description="Timing filter, e.g. 午前"),
    resident_id: str | None = Query(None, description="Restrict to one resident"),
    refresh: bool = Query(False, description="Refetch instead of using the cached collection"),
    container: SyncContainer = Depends(get_container),
) -> GridRowsResponse:
    """Retrieve the visible rows of a grid, placeholders included."""
    resource = _resource(container, resource_name)
    filters = ProjectionFilters(
        date_from=date_from or facility_today(),
        date_to=date_to,
        floor=floor,
        timing=timing,
        resident_id=resident_id,
    )
    scope = resource.scope_for(filters)
    query = container.queries[resource.name]
    try:
        records = await query.fetch(scope) if refresh else await query.ensure(scope)
        owners = await container.expected_owners(resource, records)
    except SyncError as e:
        _raise_for_fetch(e)

    rows = container.projections[resource.name].project(records, filters, owners)
    return GridRowsResponse(
        resource=resource.name,
        rows=[row.to_dict() for row in rows],
        notifications=_notifications(container),
    )


@router.patch("/{resource_name}/rows", response_model=OutcomeResponse)
async def edit_row(
    resource_name: str,
    data: GridEditRequest,
    response: Response,
    container: SyncContainer = Depends(get_container),
) -> OutcomeResponse:
    """Apply a cell edit optimistically and report how it ended."""
    resource = _resource(container, resource_name)
    scope = _scope(resource, data.date_from, data.date_to)
    await _ensure_loaded(container, resource, scope)
    outcome = await container.executors[resource.name].apply_changes(
        scope, data.row_id, data.as_changes()
    )
    return _outcome_response(container, outcome, response)


@router.post("/{resource_name}/rows", response_model=OutcomeResponse)
async def create_row(
    resource_name: str,
    data: GridCreateRequest,
    response: Response,
    container: SyncContainer = Depends(get_container),
) -> OutcomeResponse:
    """Add a row explicitly and persist it."""
    resource = _resource(container, resource_name)
    scope = _scope(resource, data.date_from, data.date_to)
    await _ensure_loaded(container, resource, scope)
    outcome = await container.executors[resource.name].create(
        scope, data.owner_id, tuple(data.dimension), data.fields
    )
    return _outcome_response(container, outcome, response, success_status=status.HTTP_201_CREATED)


@router.delete("/{resource_name}/rows", response_model=OutcomeResponse)
async def delete_row(
    resource_name: str,
    response: Response,
    row_id: str = Query(..., min_length=1),
    date_from: date | None = Query(None),
    date_to: date | None = Query(None),
    container: SyncContainer = Depends(get_container),
) -> OutcomeResponse:
    """Delete a row; unsaved placeholders are dropped without a backend call."""
    resource = _resource(container, resource_name)
    scope = _scope(resource, date_from, date_to)
    await _ensure_loaded(container, resource, scope)
    outcome = await container.executors[resource.name].delete(scope, row_id)
    return _outcome_response(container, outcome, response)
