from __future__ import annotations

from dataclasses import dataclass, field

from app.domain.contracts import NOTIFIER_SINK, RECORD_STORE_SINK
from app.domain.dto import CreateRecordRequest, SendMessageRequest
from app.domain.errors import DomainDependencyError
from app.domain.models import SinkResult


@dataclass
class StubRecordStore:
    records: list[CreateRecordRequest] = field(default_factory=list)
    # Simulated non-2xx status; None means success.
    fail_status: int | None = None
    raise_error: bool = False

    async def create_record(self, request: CreateRecordRequest) -> SinkResult:
        self.records.append(request)
        if self.raise_error:
            raise DomainDependencyError("stub record store unavailable", sink=RECORD_STORE_SINK)
        if self.fail_status is not None:
            return SinkResult(
                sink=RECORD_STORE_SINK,
                ok=False,
                status_code=self.fail_status,
                detail="stub record store rejected the record",
            )
        return SinkResult(sink=RECORD_STORE_SINK, ok=True, status_code=200)


@dataclass
class StubNotifier:
    messages: list[SendMessageRequest] = field(default_factory=list)
    fail_status: int | None = None
    raise_error: bool = False

    async def send_message(self, request: SendMessageRequest) -> SinkResult:
        self.messages.append(request)
        if self.raise_error:
            raise DomainDependencyError("stub notifier unavailable", sink=NOTIFIER_SINK)
        if self.fail_status is not None:
            return SinkResult(
                sink=NOTIFIER_SINK,
                ok=False,
                status_code=self.fail_status,
                detail="stub notifier rejected the message",
            )
        return SinkResult(sink=NOTIFIER_SINK, ok=True, status_code=200)
