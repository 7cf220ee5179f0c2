from __future__ import annotations

from typing import Protocol, runtime_checkable

from app.domain.dto import CreateRecordRequest, SendMessageRequest
from app.domain.models import SinkResult

RECORD_STORE_SINK = "record_store"
NOTIFIER_SINK = "notifier"


@runtime_checkable
class RecordStore(Protocol):
    """Persistence collaborator: one record per submission, no uniqueness.

    Non-success responses come back as a failed SinkResult; transport faults
    may be raised and are handled by the caller.
    """

    async def create_record(self, request: CreateRecordRequest) -> SinkResult: ...


@runtime_checkable
class Notifier(Protocol):
    """Messaging collaborator for transactional email."""

    async def send_message(self, request: SendMessageRequest) -> SinkResult: ...
