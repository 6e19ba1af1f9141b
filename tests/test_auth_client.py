import json

import httpx
import pytest

from fantasyleague.auth_client import (
    AuthClient,
    AuthError,
    CircuitBreakerConfig,
    DependencyUnavailableError,
    TransientAuthError,
    UnauthorizedError,
    build_url,
    default_circuit_breaker_config,
    hash_token,
    normalize_circuit_breaker_config,
)
from fantasyleague.models import Principal

BASE_URL = "http://auth.example.com"
PATH = "/v1/auth/introspect"


def make_client(handler, breaker=None, admin_key="secret"):
    http = httpx.Client(transport=httpx.MockTransport(handler))
    return AuthClient(
        BASE_URL,
        PATH,
        admin_key,
        breaker if breaker is not None else CircuitBreakerConfig(enabled=False),
        http_client=http,
    )


def test_sends_admin_key_and_parses_response():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={
                "active": True,
                "user_id": "user-123",
                "app_id": "app-001",
                "roles": ["viewer"],
                "permissions": ["users.read"],
                "exp": 1730000000,
                "iat": 1729990000,
                "jti": "jti-001",
            },
        )

    client = make_client(handler)
    principal = client.verify_access_token("token")

    assert principal == Principal(user_id="user-123", email="")
    assert len(seen) == 1
    request = seen[0]
    assert request.method == "POST"
    assert request.url.path == "/v1/auth/introspect"
    assert request.headers["x-admin-key"] == "secret"
    assert json.loads(request.content) == {"token": "token"}


def test_inactive_token_is_unauthorized():
    client = make_client(lambda request: httpx.Response(200, json={"active": False}))
    with pytest.raises(UnauthorizedError):
        client.verify_access_token("token")


def test_forbidden_mapped_to_dependency_unavailable():
    client = make_client(
        lambda request: httpx.Response(403, json={"error": "forbidden"}),
        admin_key="placeholder",
    )
    with pytest.raises(DependencyUnavailableError):
        client.verify_access_token("token")


def test_uses_in_memory_cache():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json={"active": True, "user_id": "user-cache"})

    client = make_client(handler)
    for _ in range(2):
        assert client.verify_access_token("token").user_id == "user-cache"
    assert len(calls) == 1


def test_empty_token_is_unauthorized_without_request():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json={"active": True, "user_id": "u"})

    client = make_client(handler)
    with pytest.raises(UnauthorizedError):
        client.verify_access_token("   ")
    assert calls == []


def test_no_admin_key_header_when_blank():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"active": True, "user_id": "u"})

    client = make_client(handler, admin_key="  ")
    principal = client.verify_access_token("token")
    assert principal == Principal(user_id="u", email="")
    assert len(seen) == 1
    assert "x-admin-key" not in seen[0].headers


@pytest.mark.parametrize(
    "status, error",
    [
        (401, UnauthorizedError),
        (429, TransientAuthError),
        (500, TransientAuthError),
        (503, TransientAuthError),
    ],
)
def test_status_mapping(status, error):
    client = make_client(lambda request: httpx.Response(status, text="x"))
    with pytest.raises(error):
        client.verify_access_token("token")


def test_other_status_is_plain_auth_error():
    client = make_client(lambda request: httpx.Response(404, text="x"))
    with pytest.raises(AuthError) as info:
        client.verify_access_token("token")
    assert type(info.value) is AuthError
    assert "404" in str(info.value)


def test_invalid_json_is_transient():
    client = make_client(lambda request: httpx.Response(200, text="not json"))
    with pytest.raises(TransientAuthError):
        client.verify_access_token("token")


def test_empty_user_id_is_transient():
    client = make_client(lambda request: httpx.Response(200, json={"active": True, "user_id": " "}))
    with pytest.raises(TransientAuthError):
        client.verify_access_token("token")


def test_transport_error_is_transient():
    def handler(request):
        raise httpx.ConnectError("connection refused")

    client = make_client(handler)
    with pytest.raises(TransientAuthError):
        client.verify_access_token("token")


def test_circuit_opens_after_transient_failures():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(500, text="boom")

    breaker = CircuitBreakerConfig(enabled=True, failure_threshold=2, open_timeout=60)
    client = make_client(handler, breaker=breaker)

    for _ in range(2):
        with pytest.raises(TransientAuthError):
            client.verify_access_token("token")
    with pytest.raises(DependencyUnavailableError):
        client.verify_access_token("token")
    assert len(calls) == 2


def test_unauthorized_does_not_open_circuit():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(401, text="denied")

    breaker = CircuitBreakerConfig(enabled=True, failure_threshold=1, open_timeout=60)
    client = make_client(handler, breaker=breaker)
    for _ in range(3):
        with pytest.raises(UnauthorizedError):
            client.verify_access_token("token")
    assert len(calls) == 3


def test_hash_token_is_sha256_hex():
    assert hash_token("abc") == "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"


@pytest.mark.parametrize(
    "base, path, expected",
    [
        ("http://a.example.com/", "/v1/x", "http://a.example.com/v1/x"),
        (" http://a.example.com ", "v1/x", "http://a.example.com/v1/x"),
        ("http://a.example.com/", "  ", "http://a.example.com"),
        ("http://a.example.com", "https://b.example.com/y", "https://b.example.com/y"),
    ],
)
def test_build_url(base, path, expected):
    assert build_url(base, path) == expected


def test_default_circuit_breaker_config():
    cfg = default_circuit_breaker_config()
    assert cfg == CircuitBreakerConfig(
        enabled=True, failure_threshold=5, open_timeout=15.0, half_open_max_req=2
    )


def test_normalize_fills_defaults_and_keeps_enabled():
    cfg = normalize_circuit_breaker_config(CircuitBreakerConfig(enabled=False))
    assert cfg == CircuitBreakerConfig(
        enabled=False, failure_threshold=5, open_timeout=15.0, half_open_max_req=2
    )


def test_normalize_keeps_valid_values():
    given = CircuitBreakerConfig(enabled=True, failure_threshold=3, open_timeout=1.5, half_open_max_req=4)
    assert normalize_circuit_breaker_config(given) == given