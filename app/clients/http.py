from __future__ import annotations

import httpx

from app.domain.models import SinkResult

USER_AGENT = "waitlist-signup/0.1.0"
# Error bodies are only logged; keep them short.
MAX_DETAIL_CHARS = 500


def build_async_client(*, timeout_seconds: float) -> httpx.AsyncClient:
    """Shared client for all outbound collaborator calls."""
    return httpx.AsyncClient(
        timeout=httpx.Timeout(timeout_seconds),
        headers={"User-Agent": USER_AGENT},
    )


def bearer_headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def sink_result_from_response(sink: str, response: httpx.Response) -> SinkResult:
    if response.is_success:
        return SinkResult(sink=sink, ok=True, status_code=response.status_code)
    return SinkResult(
        sink=sink,
        ok=False,
        status_code=response.status_code,
        detail=response.text[:MAX_DETAIL_CHARS],
    )
