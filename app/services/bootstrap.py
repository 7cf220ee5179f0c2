from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from functools import partial

import httpx

from app.api.handlers.deps import ApiDeps
from app.clients.http import build_async_client
from app.clients.notion import NotionRecordStore
from app.clients.resend import ResendNotifier
from app.clients.stub import StubNotifier, StubRecordStore
from app.domain.contracts import Notifier, RecordStore
from app.domain.welcome_email import build_welcome_email
from app.services.settings import WaitlistSettings, waitlist_settings_from_env


@dataclass
class RuntimeContainer:
    settings: WaitlistSettings
    record_store: RecordStore
    notifier: Notifier
    api_deps: ApiDeps
    http_client: httpx.AsyncClient | None
    on_shutdown: Callable[[], Awaitable[None]] | None


def build_runtime_container(settings: WaitlistSettings | None = None) -> RuntimeContainer:
    settings = settings or waitlist_settings_from_env()
    http_client: httpx.AsyncClient | None = None
    on_shutdown: Callable[[], Awaitable[None]] | None = None
    record_store: RecordStore
    notifier: Notifier
    if settings.client_mode == "http":
        http_client = build_async_client(timeout_seconds=settings.http_timeout_seconds)
        record_store = NotionRecordStore(
            http_client,
            token=settings.notion_token,
            database_id=settings.notion_database_id,
            api_base=settings.notion_api_base,
        )
        notifier = ResendNotifier(
            http_client,
            api_key=settings.resend_api_key,
            api_base=settings.resend_api_base,
        )
        on_shutdown = http_client.aclose
    else:
        record_store = StubRecordStore()
        notifier = StubNotifier()

    api_deps = ApiDeps(
        record_store=record_store,
        notifier=notifier,
        message_factory=partial(
            build_welcome_email,
            from_address=settings.from_address,
            subject=settings.subject,
            site_url=settings.site_url,
        ),
        concurrent_fanout=settings.concurrent_fanout,
        client_mode=settings.client_mode,
    )

    return RuntimeContainer(
        settings=settings,
        record_store=record_store,
        notifier=notifier,
        api_deps=api_deps,
        http_client=http_client,
        on_shutdown=on_shutdown,
    )
