from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Literal

# Canonical error vocabulary for the waitlist flow.
ErrorCode = Literal[
    "invalid_input",
    "record_store_failed",
    "notification_failed",
    "internal_error",
]

# Downstream failures are logged only and never reach the caller.
DOWNSTREAM_ERROR_CODES: frozenset[ErrorCode] = frozenset(
    {
        "record_store_failed",
        "notification_failed",
    }
)

SINK_ERROR_MAP: Mapping[str, ErrorCode] = {
    "record_store": "record_store_failed",
    "notifier": "notification_failed",
}


@dataclass(frozen=True)
class PublicError:
    status_code: int
    message: str


PUBLIC_ERRORS: Mapping[ErrorCode, PublicError] = {
    "invalid_input": PublicError(400, "Please provide a valid email address."),
    "internal_error": PublicError(500, "Something went wrong. Please try again in a moment."),
}


def is_caller_visible(code: ErrorCode) -> bool:
    return code not in DOWNSTREAM_ERROR_CODES


def resolve_sink_error(sink: str) -> ErrorCode:
    return SINK_ERROR_MAP.get(sink, "internal_error")


def public_error(code: ErrorCode) -> PublicError:
    if is_caller_visible(code) and code in PUBLIC_ERRORS:
        return PUBLIC_ERRORS[code]
    return PUBLIC_ERRORS["internal_error"]
