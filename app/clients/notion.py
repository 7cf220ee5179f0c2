from __future__ import annotations

import httpx

from app.clients.http import bearer_headers, sink_result_from_response
from app.domain.contracts import RECORD_STORE_SINK
from app.domain.dto import CreateRecordRequest
from app.domain.errors import DomainDependencyError
from app.domain.models import SinkResult

NOTION_VERSION = "2022-06-28"


class NotionRecordStore:
    """Writes one page per submission into a Notion database.

    The database is expected to have an "Email" property of type email and a
    "Status" select property. Notion does not enforce uniqueness, so repeated
    submissions create repeated pages.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        *,
        token: str,
        database_id: str,
        api_base: str = "https://api.notion.com",
    ) -> None:
        self._client = http_client
        self._token = token
        self._database_id = database_id
        self._api_base = api_base.rstrip("/")

    def build_payload(self, request: CreateRecordRequest) -> dict[str, object]:
        return {
            "parent": {"database_id": self._database_id},
            "properties": {
                "Email": {"email": request.email},
                "Status": {"select": {"name": request.status}},
            },
        }

    async def create_record(self, request: CreateRecordRequest) -> SinkResult:
        headers = bearer_headers(self._token)
        headers["Notion-Version"] = NOTION_VERSION
        try:
            response = await self._client.post(
                f"{self._api_base}/v1/pages",
                json=self.build_payload(request),
                headers=headers,
            )
        except httpx.HTTPError as exc:
            raise DomainDependencyError(f"notion request failed: {exc}", sink=RECORD_STORE_SINK) from exc
        return sink_result_from_response(RECORD_STORE_SINK, response)
