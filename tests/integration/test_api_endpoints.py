import json
import logging

import httpx
from fastapi.testclient import TestClient
import pytest
import respx

from app.api.handlers.deps import ApiDeps
from app.api.http_app import WAITLIST_PATH, build_app
from app.api.schemas import ACCEPTED_MESSAGE
from app.clients.stub import StubNotifier, StubRecordStore
from app.services.bootstrap import RuntimeContainer, build_runtime_container
from app.services.settings import WaitlistSettings

INVALID_EMAIL_ERROR = {"error": "Please provide a valid email address."}
INTERNAL_ERROR = {"error": "Something went wrong. Please try again in a moment."}


def _stub_container(**overrides: object) -> RuntimeContainer:
    return build_runtime_container(WaitlistSettings(client_mode="stub", **overrides))


def _client(container: RuntimeContainer) -> TestClient:
    app = build_app(
        run_id="integration-api",
        api_deps=container.api_deps,
        on_shutdown=container.on_shutdown,
    )
    return TestClient(app)


@pytest.mark.integration
def test_system_endpoints_are_available() -> None:
    with _client(_stub_container(concurrent_fanout=True)) as client:
        health = client.get("/health")
        ready = client.get("/ready")

    assert health.status_code == 200
    assert health.json()["status"] == "ok"
    assert ready.status_code == 200
    assert ready.json()["client_mode"] == "stub"
    assert ready.json()["concurrent_fanout"] is True


@pytest.mark.integration
@pytest.mark.parametrize("method", ["GET", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE", "PROPFIND", "FOO"])
def test_non_post_methods_are_rejected(method: str) -> None:
    container = _stub_container()
    with _client(container) as client:
        response = client.request(method, WAITLIST_PATH)

    assert response.status_code == 405
    assert response.json() == {"error": "Method not allowed"}
    assert response.headers["allow"] == "POST"
    assert isinstance(container.record_store, StubRecordStore)
    assert container.record_store.records == []


@pytest.mark.integration
def test_head_is_rejected() -> None:
    with _client(_stub_container()) as client:
        response = client.head(WAITLIST_PATH)

    assert response.status_code == 405
    assert response.headers["allow"] == "POST"


@pytest.mark.integration
def test_unknown_paths_keep_default_error_body() -> None:
    with _client(_stub_container()) as client:
        missing = client.get("/api/unknown")
        wrong_method = client.post("/health")

    assert missing.status_code == 404
    assert missing.json() == {"detail": "Not Found"}
    assert wrong_method.status_code == 405
    assert wrong_method.json() == {"detail": "Method Not Allowed"}


@pytest.mark.integration
def test_rejected_and_failed_submissions_log_outcome(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="runtime")
    container = _stub_container()
    with _client(container) as client:
        client.post(WAITLIST_PATH, json={"email": "nope"})
        client.post(WAITLIST_PATH, content=b"{broken", headers={"content-type": "application/json"})

    outcomes = {
        record.message: getattr(record, "outcome")
        for record in caplog.records
        if record.message.startswith("waitlist submission")
    }
    assert outcomes == {
        "waitlist submission rejected": "rejected",
        "waitlist submission failed": "internal_error",
    }


    assert container.record_store.records == []


@pytest.mark.integration
@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"email": None},
        {"email": ""},
        {"email": "no-at-sign.example.com"},
        {"email": "no-dot@example"},
        {"email": 7},
    ],
)
def test_invalid_email_returns_400_without_downstream_calls(payload: dict[str, object]) -> None:
    container = _stub_container()
    with _client(container) as client:
        response = client.post(WAITLIST_PATH, json=payload)

    assert response.status_code == 400
    assert response.json() == INVALID_EMAIL_ERROR
    assert isinstance(container.record_store, StubRecordStore)
    assert isinstance(container.notifier, StubNotifier)
    assert container.record_store.records == []
    assert container.notifier.messages == []


@pytest.mark.integration
def test_valid_email_is_normalized_and_accepted() -> None:
    container = _stub_container()
    with _client(container) as client:
        response = client.post(WAITLIST_PATH, json={"email": "User@Example.COM "})

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": ACCEPTED_MESSAGE}
    assert isinstance(container.record_store, StubRecordStore)
    assert isinstance(container.notifier, StubNotifier)
    assert [record.email for record in container.record_store.records] == ["user@example.com"]
    assert [message.to for message in container.notifier.messages] == ["user@example.com"]


@pytest.mark.integration
@pytest.mark.parametrize(
    ("record_store", "notifier"),
    [
        (StubRecordStore(fail_status=500), StubNotifier()),
        (StubRecordStore(raise_error=True), StubNotifier()),
        (StubRecordStore(), StubNotifier(fail_status=422)),
        (StubRecordStore(), StubNotifier(raise_error=True)),
        (StubRecordStore(raise_error=True), StubNotifier(fail_status=500)),
    ],
)
def test_downstream_failures_still_return_success(record_store: StubRecordStore, notifier: StubNotifier) -> None:
    container = _stub_container()
    app = build_app(
        run_id="integration-api-failures",
        api_deps=ApiDeps(
            record_store=record_store,
            notifier=notifier,
            message_factory=container.api_deps.message_factory,
        ),
    )
    with TestClient(app) as client:
        response = client.post(WAITLIST_PATH, json={"email": "user@example.com"})

    assert response.status_code == 200
    assert response.json()["success"] is True
    assert len(record_store.records) == 1
    assert len(notifier.messages) == 1


@pytest.mark.integration
@pytest.mark.parametrize(
    "content",
    [
        b"{not json",
        b"",
        b'["user@example.com"]',
        b"null",
    ],
)
def test_unparseable_body_returns_500(content: bytes) -> None:
    container = _stub_container()
    with _client(container) as client:
        response = client.post(
            WAITLIST_PATH,
            content=content,
            headers={"content-type": "application/json"},
        )

    assert response.status_code == 500
    assert response.json() == INTERNAL_ERROR


@pytest.mark.integration
def test_duplicate_submissions_are_both_accepted() -> None:
    container = _stub_container()
    with _client(container) as client:
        first = client.post(WAITLIST_PATH, json={"email": "user@example.com"})
        second = client.post(WAITLIST_PATH, json={"email": "user@example.com"})

    assert first.status_code == 200
    assert second.status_code == 200
    assert isinstance(container.record_store, StubRecordStore)
    assert len(container.record_store.records) == 2


@pytest.mark.integration
def test_http_collaborators_receive_normalized_email() -> None:
    container = build_runtime_container(
        WaitlistSettings(
            notion_token="secret_notion",
            notion_database_id="db123",
            resend_api_key="re_key",
        )
    )
    with respx.mock(assert_all_called=True) as router:
        notion = router.post("https://api.notion.com/v1/pages").mock(return_value=httpx.Response(200, json={}))
        resend = router.post("https://api.resend.com/emails").mock(return_value=httpx.Response(200, json={}))

        with _client(container) as client:
            response = client.post(WAITLIST_PATH, json={"email": "  User@Example.COM"})

    assert response.status_code == 200
    notion_payload = json.loads(notion.calls.last.request.content)
    resend_payload = json.loads(resend.calls.last.request.content)
    assert notion_payload["properties"]["Email"] == {"email": "user@example.com"}
    assert resend_payload["to"] == "user@example.com"
    assert container.http_client is not None
    assert container.http_client.is_closed


@pytest.mark.integration
def test_http_collaborators_failing_outright_still_return_success() -> None:
    container = build_runtime_container(WaitlistSettings())
    with respx.mock:
        respx.post("https://api.notion.com/v1/pages").mock(side_effect=httpx.ConnectError("refused"))
        respx.post("https://api.resend.com/emails").mock(return_value=httpx.Response(401, json={}))

        with _client(container) as client:
            response = client.post(WAITLIST_PATH, json={"email": "user@example.com"})

    assert response.status_code == 200
    assert response.json()["success"] is True
