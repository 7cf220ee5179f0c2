from __future__ import annotations

from dataclasses import dataclass, field

from app.domain.models import WAITLIST_STATUS_LABEL, HandlerState, SinkResult, SubmissionOutcome


@dataclass(frozen=True)
class SubmitEmailCommand:
    # Raw value from the request body; may be missing or of any JSON type.
    email: object


@dataclass(frozen=True)
class CreateRecordRequest:
    email: str
    status: str = WAITLIST_STATUS_LABEL


@dataclass(frozen=True)
class SendMessageRequest:
    from_address: str
    to: str
    subject: str
    html_body: str


@dataclass(frozen=True)
class SubmitEmailResult:
    outcome: SubmissionOutcome
    normalized_email: str
    record_result: SinkResult
    notify_result: SinkResult
    transitions: tuple[HandlerState, ...] = field(default_factory=tuple)
