"""HTTP implementation of the RecordGateway port."""

from typing import Any
from urllib.parse import quote

from care_sync.application.interfaces import RecordGateway
from care_sync.application.resources import ResourceConfig
from care_sync.domain.entities import RecordScope
from care_sync.domain.exceptions import ServerError

from .care_api_client import CareApiClient


class HttpRecordGateway(RecordGateway):
    """REST gateway for one resource collection (``/api/{resource.name}``).

    Request bodies are serialized with the resource's field schema, so
    Python names become camelCase and dates become ``YYYY-MM-DD``.
    """

    def __init__(self, client: CareApiClient, resource: ResourceConfig):
        self._client = client
        self._resource = resource

    def _item_path(self, record_id: str) -> str:
        return f"{self._resource.name}/{quote(record_id, safe='')}"

    async def list(self, scope: RecordScope) -> list[dict[str, Any]]:
        data = await self._client.request(
            "GET", self._resource.name, params=scope.query_params() or None
        )
        if data is None:
            return []
        if not isinstance(data, list):
            raise ServerError(200, f"Expected a list of {self._resource.label} records")
        return data

    async def create(self, payload: dict[str, Any]) -> dict[str, Any]:
        body = self._resource.wire_payload(payload)
        return self._expect_record(await self._client.request("POST", self._resource.name, json=body))

    async def update(self, record_id: str, changes: dict[str, Any]) -> dict[str, Any]:
        body = self._resource.wire_payload(changes)
        return self._expect_record(
            await self._client.request("PATCH", self._item_path(record_id), json=body)
        )

    async def delete(self, record_id: str) -> None:
        await self._client.request("DELETE", self._item_path(record_id))

    def _expect_record(self, data: Any) -> dict[str, Any]:
        if not isinstance(data, dict) or "id" not in data:
            raise ServerError(200, f"The server did not return the saved {self._resource.label} record")
        return data
