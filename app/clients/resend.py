from __future__ import annotations

import httpx

from app.clients.http import bearer_headers, sink_result_from_response
from app.domain.contracts import NOTIFIER_SINK
from app.domain.dto import SendMessageRequest
from app.domain.errors import DomainDependencyError
from app.domain.models import SinkResult


class ResendNotifier:
    """Sends transactional email through the Resend REST API."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        *,
        api_key: str,
        api_base: str = "https://api.resend.com",
    ) -> None:
        self._client = http_client
        self._api_key = api_key
        self._api_base = api_base.rstrip("/")

    async def send_message(self, request: SendMessageRequest) -> SinkResult:
        try:
            response = await self._client.post(
                f"{self._api_base}/emails",
                json={
                    "from": request.from_address,
                    "to": request.to,
                    "subject": request.subject,
                    "html": request.html_body,
                },
                headers=bearer_headers(self._api_key),
            )
        except httpx.HTTPError as exc:
            raise DomainDependencyError(f"resend request failed: {exc}", sink=NOTIFIER_SINK) from exc
        return sink_result_from_response(NOTIFIER_SINK, response)
