from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

# Fixed label attached to every record written to the record store.
WAITLIST_STATUS_LABEL = "Waitlist"


class SubmissionOutcome(StrEnum):
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    INTERNAL_ERROR = "internal_error"


class HandlerState(StrEnum):
    RECEIVED = "received"
    VALIDATED = "validated"
    PERSIST_ATTEMPTED = "persist_attempted"
    NOTIFY_ATTEMPTED = "notify_attempted"
    RESPONDED = "responded"


@dataclass(frozen=True)
class SinkResult:
    """Outcome of a single best-effort call to a downstream collaborator."""

    sink: str
    ok: bool
    status_code: int | None = None
    detail: str = ""
