from __future__ import annotations

import logging

from app.api.handlers.deps import ApiDeps
from app.api.schemas import WaitlistAcceptedResponse
from app.domain.dto import SubmitEmailCommand
from app.domain.use_cases.waitlist import submit_email

COMPONENT_ID = "api.join_waitlist"

logger = logging.getLogger("api.waitlist")


async def join_waitlist_handler(*, email: object, api_deps: ApiDeps) -> WaitlistAcceptedResponse:
    result = await submit_email(
        SubmitEmailCommand(email=email),
        record_store=api_deps.record_store,
        notifier=api_deps.notifier,
        message_factory=api_deps.message_factory,
        concurrent_fanout=api_deps.concurrent_fanout,
    )
    logger.info(
        "waitlist submission accepted",
        extra={
            "component": COMPONENT_ID,
            "outcome": result.outcome,
            "record_ok": result.record_result.ok,
            "notify_ok": result.notify_result.ok,
        },
    )
    return WaitlistAcceptedResponse()
