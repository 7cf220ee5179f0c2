from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import cast

from app.domain.contracts import NOTIFIER_SINK, RECORD_STORE_SINK, Notifier, RecordStore
from app.domain.dto import CreateRecordRequest, SendMessageRequest, SubmitEmailCommand, SubmitEmailResult
from app.domain.error_taxonomy import resolve_sink_error
from app.domain.errors import DomainValidationError
from app.domain.models import HandlerState, SinkResult, SubmissionOutcome
from app.domain.welcome_email import build_welcome_email

COMPONENT_ID = "domain.waitlist.submit"

MessageFactory = Callable[[str], SendMessageRequest]

logger = logging.getLogger("domain.waitlist")


def is_valid_email(value: object) -> bool:
    # Intentionally weak: presence of "@" and "." only.
    if not isinstance(value, str) or not value:
        return False
    return "@" in value and "." in value


def normalize_email(email: str) -> str:
    return email.lower().strip()


async def submit_email(
    cmd: SubmitEmailCommand,
    *,
    record_store: RecordStore,
    notifier: Notifier,
    message_factory: MessageFactory = build_welcome_email,
    concurrent_fanout: bool = False,
) -> SubmitEmailResult:
    """Validate, normalize and fan the email out to both collaborators.

    Raises DomainValidationError before any downstream call when the email
    fails the syntactic check. Failures of the record store or the notifier
    are logged and reported in the result, but never change the outcome.
    Anything raised outside those two calls propagates to the caller.
    """
    transitions: list[HandlerState] = [HandlerState.RECEIVED]
    if not is_valid_email(cmd.email):
        raise DomainValidationError("email must be a non-empty string containing '@' and '.'")

    email = normalize_email(cast(str, cmd.email))
    transitions.append(HandlerState.VALIDATED)

    record_request = CreateRecordRequest(email=email)
    message = message_factory(email)

    if concurrent_fanout:
        record_result, notify_result = await asyncio.gather(
            _attempt(RECORD_STORE_SINK, lambda: record_store.create_record(record_request)),
            _attempt(NOTIFIER_SINK, lambda: notifier.send_message(message)),
        )
    else:
        record_result = await _attempt(RECORD_STORE_SINK, lambda: record_store.create_record(record_request))
        notify_result = await _attempt(NOTIFIER_SINK, lambda: notifier.send_message(message))
    transitions.extend(
        (
            HandlerState.PERSIST_ATTEMPTED,
            HandlerState.NOTIFY_ATTEMPTED,
            HandlerState.RESPONDED,
        )
    )

    return SubmitEmailResult(
        outcome=SubmissionOutcome.ACCEPTED,
        normalized_email=email,
        record_result=record_result,
        notify_result=notify_result,
        transitions=tuple(transitions),
    )


async def _attempt(sink: str, call: Callable[[], Awaitable[SinkResult]]) -> SinkResult:
    try:
        result = await call()
    except Exception as exc:
        result = SinkResult(sink=sink, ok=False, detail=f"{type(exc).__name__}: {exc}")

    if not result.ok:
        logger.warning(
            "downstream call failed",
            extra={
                "component": COMPONENT_ID,
                "sink": sink,
                "status_code": result.status_code,
                "error_code": resolve_sink_error(sink),
                "detail": result.detail,
            },
        )
    return result
