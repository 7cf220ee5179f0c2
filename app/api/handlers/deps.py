from __future__ import annotations

from dataclasses import dataclass

from app.domain.contracts import Notifier, RecordStore
from app.domain.use_cases.waitlist import MessageFactory


@dataclass(frozen=True)
class ApiDeps:
    record_store: RecordStore
    notifier: Notifier
    message_factory: MessageFactory
    concurrent_fanout: bool = False
    client_mode: str = "http"
