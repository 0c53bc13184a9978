"""Unit tests for the httpx-based care backend adapters."""

import json
from datetime import date

import httpx
import pytest

from care_sync.application.resources import VITAL_SIGNS
from care_sync.domain.entities import RecordScope
from care_sync.domain.exceptions import NetworkError, ServerError, SessionExpiredError
from care_sync.infrastructure.http import CareApiClient, HttpOwnerDirectory, HttpRecordGateway


# ── Helpers ──


def _client(handler, token: str = "") -> CareApiClient:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return CareApiClient("http://care.test/api", token=token, http_client=http_client)


def _fixed(status_code: int, **kwargs):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, **kwargs)

    return handler


# ── CareApiClient ──


@pytest.mark.asyncio
async def test_request_sends_token_and_decodes_json():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[{"id": "r1"}])

    data = await _client(handler, token="secret").request("GET", "residents")

    assert data == [{"id": "r1"}]
    assert str(seen[0].url) == "http://care.test/api/residents"
    assert seen[0].headers["Authorization"] == "Bearer secret"


@pytest.mark.asyncio
async def test_unauthorized_raises_session_expired():
    with pytest.raises(SessionExpiredError) as exc_info:
        await _client(_fixed(401, json={"message": "Unauthorized"})).request("GET", "residents")
    assert exc_info.value.retryable is False


@pytest.mark.asyncio
async def test_error_message_taken_from_json_body():
    handler = _fixed(500, json={"message": "Database unavailable"})
    with pytest.raises(ServerError) as exc_info:
        await _client(handler).request("PATCH", "vital-signs/v-1", json={})
    assert exc_info.value.status_code == 500
    assert exc_info.value.message == "Database unavailable"


@pytest.mark.asyncio
async def test_error_without_json_uses_text():
    with pytest.raises(ServerError) as exc_info:
        await _client(_fixed(503, text="Service Unavailable")).request("GET", "residents")
    assert exc_info.value.message == "Service Unavailable"


@pytest.mark.asyncio
async def test_html_answer_is_a_server_error():
    handler = _fixed(200, text="<!DOCTYPE html><html><body>login</body></html>")
    with pytest.raises(ServerError, match="HTML"):
        await _client(handler).request("GET", "vital-signs")


@pytest.mark.asyncio
async def test_empty_body_returns_none():
    assert await _client(_fixed(204)).request("DELETE", "vital-signs/v-1") is None


@pytest.mark.asyncio
async def test_transport_failure_raises_network_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(NetworkError) as exc_info:
        await _client(handler).request("GET", "residents")
    assert exc_info.value.retryable is True


# ── HttpRecordGateway ──


@pytest.mark.asyncio
async def test_gateway_list_passes_date_range():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[{"id": "v-1", "residentId": "r1"}])

    gateway = HttpRecordGateway(_client(handler), VITAL_SIGNS)
    rows = await gateway.list(RecordScope("vital-signs", date(2024, 1, 1), date(2024, 1, 7)))

    assert rows == [{"id": "v-1", "residentId": "r1"}]
    assert seen[0].url.path == "/api/vital-signs"
    assert dict(seen[0].url.params) == {"dateFrom": "2024-01-01", "dateTo": "2024-01-07"}


@pytest.mark.asyncio
async def test_gateway_create_sends_camel_case_body():
    bodies: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(201, json={"id": "v-123", **bodies[-1]})

    gateway = HttpRecordGateway(_client(handler), VITAL_SIGNS)
    row = await gateway.create(
        {"resident_id": "r1", "record_date": date(2024, 1, 1), "timing": "午前", "temperature": 36.5}
    )

    assert bodies == [
        {"residentId": "r1", "recordDate": "2024-01-01", "timing": "午前", "temperature": 36.5}
    ]
    assert row["id"] == "v-123"


@pytest.mark.asyncio
async def test_gateway_update_patches_single_record():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"id": "v-1", "pulseRate": 72})

    gateway = HttpRecordGateway(_client(handler), VITAL_SIGNS)
    await gateway.update("v-1", {"pulse_rate": 72})

    assert seen[0].method == "PATCH"
    assert seen[0].url.path == "/api/vital-signs/v-1"
    assert json.loads(seen[0].content) == {"pulseRate": 72}


@pytest.mark.asyncio
async def test_gateway_rejects_response_without_id():
    gateway = HttpRecordGateway(_client(_fixed(200, json={"ok": True})), VITAL_SIGNS)
    with pytest.raises(ServerError):
        await gateway.update("v-1", {"pulse_rate": 72})


# ── HttpOwnerDirectory ──


@pytest.mark.asyncio
async def test_residents_carry_bath_weekdays():
    residents_json = [
        {
            "id": "r1",
            "name": "Tanaka",
            "roomNumber": "101",
            "floor": "1階",
            "bathMonday": True,
            "bathThursday": True,
            "isAdmitted": True,
        },
        {"id": "r2"},  # no name: skipped
    ]
    directory = HttpOwnerDirectory(_client(_fixed(200, json=residents_json)))

    (resident,) = await directory.list_residents()

    assert resident.room_number == "101"
    assert resident.bath_weekdays == frozenset({0, 3})
    assert resident.is_admitted is True


@pytest.mark.asyncio
async def test_staff_loaded_from_staff_management():
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url.path)
        return httpx.Response(
            200, json=[{"id": "s-1", "staffId": "yamada", "staffName": "山田", "sortOrder": 3}]
        )

    (member,) = await HttpOwnerDirectory(_client(handler)).list_staff()

    assert seen == ["/api/staff-management"]
    assert (member.staff_name, member.sort_order) == ("山田", 3)
