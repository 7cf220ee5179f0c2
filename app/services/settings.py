from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Literal

from app.domain.welcome_email import DEFAULT_FROM_ADDRESS, DEFAULT_SITE_URL, DEFAULT_SUBJECT

ClientMode = Literal["http", "stub"]

SUPPORTED_CLIENT_MODES: tuple[ClientMode, ...] = ("http", "stub")


@dataclass(frozen=True)
class WaitlistSettings:
    # Secrets are passed through as-is; empty values make downstream calls fail.
    notion_token: str = ""
    notion_database_id: str = ""
    resend_api_key: str = ""
    notion_api_base: str = "https://api.notion.com"
    resend_api_base: str = "https://api.resend.com"
    from_address: str = DEFAULT_FROM_ADDRESS
    subject: str = DEFAULT_SUBJECT
    site_url: str = DEFAULT_SITE_URL
    http_timeout_seconds: float = 10.0
    concurrent_fanout: bool = False
    client_mode: ClientMode = "http"


def waitlist_settings_from_env() -> WaitlistSettings:
    return WaitlistSettings(
        notion_token=os.getenv("NOTION_TOKEN", ""),
        notion_database_id=os.getenv("NOTION_DATABASE_ID", ""),
        resend_api_key=os.getenv("RESEND_API_KEY", ""),
        notion_api_base=os.getenv("NOTION_API_BASE", "https://api.notion.com").rstrip("/"),
        resend_api_base=os.getenv("RESEND_API_BASE", "https://api.resend.com").rstrip("/"),
        from_address=os.getenv("WAITLIST_FROM_ADDRESS", DEFAULT_FROM_ADDRESS),
        subject=os.getenv("WAITLIST_SUBJECT", DEFAULT_SUBJECT),
        site_url=os.getenv("WAITLIST_SITE_URL", DEFAULT_SITE_URL),
        http_timeout_seconds=_env_float("WAITLIST_HTTP_TIMEOUT_SECONDS", 10.0),
        concurrent_fanout=_env_bool("WAITLIST_CONCURRENT_FANOUT", False),
        client_mode=_env_client_mode("WAITLIST_CLIENTS", "http"),
    )


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default

    try:
        parsed = float(value)
    except ValueError:
        return default

    return parsed if parsed > 0 else default


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_client_mode(name: str, default: ClientMode) -> ClientMode:
    value = os.getenv(name, default).strip().lower()
    if value == "stub":
        return "stub"
    if value == "http":
        return "http"
    supported = ", ".join(SUPPORTED_CLIENT_MODES)
    raise ValueError(f"Unsupported {name} value '{value}'. Supported values: {supported}.")
