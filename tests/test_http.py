"""Tests for the HTTP transport and error classification."""

from __future__ import annotations
import json
import httpx
import pytest
import respx
from quome.api.models import CreateSecretRequest, Organization, Secret
from quome.errors import (
    ApiError,
    InvalidResponseError,
    NotFoundError,
    RateLimitedError,
    TransportError,
    TransportTimeoutError,
    UnauthorizedError,
)
from quome.http import USER_AGENT, Transport, classify_error


BASE_URL = "http://api.test"
ORG = {
    "id": "11111111-1111-1111-1111-111111111111",
    "name": "Acme",
    "created_at": "2024-01-01T00:00:00Z",
    "updated_at": "2024-01-02T00:00:00Z",
}


def test_get_sends_auth_headers_and_parses_model() -> None:
    with respx.mock(assert_all_called=True) as router:
        route = router.get(f"{BASE_URL}/api/v1/orgs/x").mock(
            return_value=httpx.Response(200, json=ORG)
        )
        with Transport("tok", base_url=f"{BASE_URL}/") as transport:
            org = transport.get("/api/v1/orgs/x", Organization)

    assert isinstance(org, Organization)
    assert org.name == "Acme"
    request = route.calls[0].request
    assert request.headers["Authorization"] == "Bearer tok"
    assert request.headers["User-Agent"] == USER_AGENT
    assert request.headers["Accept"] == "application/json"


def test_no_authorization_header_without_token() -> None:
    with respx.mock(assert_all_called=True) as router:
        route = router.get(f"{BASE_URL}/ping").mock(
            return_value=httpx.Response(200, json=ORG)
        )
        with Transport(base_url=BASE_URL) as transport:
            transport.get("/ping", Organization)

    assert "Authorization" not in route.calls[0].request.headers


def test_post_omits_unset_fields() -> None:
    secret = {
        "id": "55555555-5555-5555-5555-555555555555",
        "name": "DB_URL",
        "created_at": "2024-01-01T00:00:00Z",
        "updated_at": "2024-01-01T00:00:00Z",
    }
    with respx.mock(assert_all_called=True) as router:
        route = router.post(f"{BASE_URL}/secrets").mock(
            return_value=httpx.Response(201, json=secret)
        )
        with Transport("tok", base_url=BASE_URL) as transport:
            created = transport.post(
                "/secrets",
                CreateSecretRequest(name="DB_URL", value="postgres://"),
                Secret,
            )

    assert created.value is None
    body = json.loads(route.calls[0].request.content)
    assert body == {"name": "DB_URL", "value": "postgres://"}


def test_delete_ignores_response_body() -> None:
    with respx.mock(assert_all_called=True) as router:
        router.delete(f"{BASE_URL}/thing").mock(
            return_value=httpx.Response(200, text="not json")
        )
        with Transport("tok", base_url=BASE_URL) as transport:
            assert transport.delete("/thing") is None


def test_not_found_uses_server_message() -> None:
    with respx.mock() as router:
        router.get(f"{BASE_URL}/secret").mock(
            return_value=httpx.Response(404, json={"message": "secret not found"})
        )
        with Transport("tok", base_url=BASE_URL) as transport:
            with pytest.raises(NotFoundError) as excinfo:
                transport.get("/secret", Secret)

    assert excinfo.value.detail == "secret not found"
    assert str(excinfo.value) == "Not found: secret not found"


def test_server_error_without_json_body() -> None:
    with respx.mock() as router:
        router.get(f"{BASE_URL}/boom").mock(
            return_value=httpx.Response(500, text="<html>oops</html>")
        )
        with Transport("tok", base_url=BASE_URL) as transport:
            with pytest.raises(ApiError) as excinfo:
                transport.get("/boom", Secret)

    assert excinfo.value.status_code == 500
    assert excinfo.value.detail == "Request failed with status 500"


@pytest.mark.parametrize(
    ("status", "payload", "expected"),
    [
        (401, {"message": "expired"}, UnauthorizedError),
        (404, None, NotFoundError),
        (429, None, RateLimitedError),
        (400, {"message": "bad name"}, ApiError),
        (403, {"error": "nope"}, ApiError),
    ],
)
def test_classify_error(
    status: int, payload: object, expected: type[Exception]
) -> None:
    assert isinstance(classify_error(status, payload), expected)


def test_classify_error_details() -> None:
    not_found = classify_error(404, None)
    assert isinstance(not_found, NotFoundError)
    assert not_found.detail == "Resource not found"

    bad_request = classify_error(400, {"message": "bad name"})
    assert isinstance(bad_request, ApiError)
    assert bad_request.detail == "bad name"
    assert bad_request.status_code == 400

    unauthorized = classify_error(401, {"message": "expired"})
    assert unauthorized.hint is not None
    assert "quome login" in unauthorized.hint


def test_timeout_is_reported_distinctly() -> None:
    with respx.mock() as router:
        router.get(f"{BASE_URL}/slow").mock(side_effect=httpx.ReadTimeout("slow"))
        with Transport("tok", base_url=BASE_URL, timeout=0.1) as transport:
            with pytest.raises(TransportTimeoutError):
                transport.get("/slow", Secret)


def test_connection_failure_is_transport_error() -> None:
    with respx.mock() as router:
        router.get(f"{BASE_URL}/down").mock(side_effect=httpx.ConnectError("refused"))
        with Transport("tok", base_url=BASE_URL) as transport:
            with pytest.raises(TransportError) as excinfo:
                transport.get("/down", Secret)

    assert not isinstance(excinfo.value, TransportTimeoutError)


def test_unexpected_success_body_is_invalid_response() -> None:
    with respx.mock() as router:
        router.get(f"{BASE_URL}/weird").mock(
            return_value=httpx.Response(200, json={"unexpected": True})
        )
        with Transport("tok", base_url=BASE_URL) as transport:
            with pytest.raises(InvalidResponseError):
                transport.get("/weird", Secret)


def test_injected_transport_is_used() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/v1/orgs/x"
        return httpx.Response(200, json=ORG)

    with Transport(
        "tok", base_url=BASE_URL, transport=httpx.MockTransport(handler)
    ) as transport:
        assert transport.get("/api/v1/orgs/x", Organization).name == "Acme"
