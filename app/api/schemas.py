from __future__ import annotations

from pydantic import BaseModel

ACCEPTED_MESSAGE = "You're on the list! Check your inbox for a welcome email."
METHOD_NOT_ALLOWED_MESSAGE = "Method not allowed"


class ErrorResponse(BaseModel):
    error: str


class WaitlistAcceptedResponse(BaseModel):
    success: bool = True
    message: str = ACCEPTED_MESSAGE


class HealthResponse(BaseModel):
    status: str
    service: str


class ReadyResponse(BaseModel):
    status: str
    service: str
    client_mode: str
    concurrent_fanout: bool
