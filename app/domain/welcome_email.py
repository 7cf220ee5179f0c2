from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from string import Template
from urllib.parse import urlparse

from app.domain.dto import SendMessageRequest

TEMPLATES_DIR = Path(__file__).with_name("templates")

DEFAULT_FROM_ADDRESS = "Ayo from VibeCode <onboarding@resend.dev>"
DEFAULT_SUBJECT = "You're on the VibeCode waitlist 🚀"
DEFAULT_SITE_URL = "https://vibecode.vercel.app"


@lru_cache(maxsize=None)
def load_template(name: str) -> Template:
    return Template((TEMPLATES_DIR / name).read_text(encoding="utf-8"))


def render_welcome_html(*, site_url: str = DEFAULT_SITE_URL) -> str:
    site_host = urlparse(site_url).netloc or site_url
    return load_template("welcome_email.html").substitute(site_url=site_url, site_host=site_host)


def build_welcome_email(
    to: str,
    *,
    from_address: str = DEFAULT_FROM_ADDRESS,
    subject: str = DEFAULT_SUBJECT,
    site_url: str = DEFAULT_SITE_URL,
) -> SendMessageRequest:
    """Build the welcome notification for an already normalized address."""
    return SendMessageRequest(
        from_address=from_address,
        to=to,
        subject=subject,
        html_body=render_welcome_html(site_url=site_url),
    )
