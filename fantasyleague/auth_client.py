"""Client that verifies access tokens against the account service."""

from __future__ import annotations

import hashlib
import json
import logging
import threading
import time
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable, Optional

import httpx

from fantasyleague.cache import PrincipalCache
from fantasyleague.models import Principal

_MAX_BODY_BYTES = 1 << 20


class AuthError(Exception):
    """Token verification failed."""


class UnauthorizedError(AuthError):
    """The token is missing, inactive or was refused."""


class DependencyUnavailableError(AuthError):
    """The account service cannot be used right now."""


class TransientAuthError(AuthError):
    """A failure of the account service that may pass; counts against the circuit."""


@dataclass
class CircuitBreakerConfig:
    """Circuit breaker settings; non-positive values fall back to the defaults."""

    enabled: bool = False
    failure_threshold: int = 0
    open_timeout: float = 0.0
    half_open_max_req: int = 0


def default_circuit_breaker_config() -> CircuitBreakerConfig:
    """Return the standard circuit breaker settings."""
    return CircuitBreakerConfig(
        enabled=True,
        failure_threshold=5,
        open_timeout=15.0,
        half_open_max_req=2,
    )


def normalize_circuit_breaker_config(cfg: CircuitBreakerConfig) -> CircuitBreakerConfig:
    """Return ``cfg`` with out-of-range values replaced by the defaults."""
    defaults = default_circuit_breaker_config()
    return replace(
        cfg,
        failure_threshold=cfg.failure_threshold if cfg.failure_threshold >= 1 else defaults.failure_threshold,
        open_timeout=cfg.open_timeout if cfg.open_timeout > 0 else defaults.open_timeout,
        half_open_max_req=cfg.half_open_max_req if cfg.half_open_max_req >= 1 else defaults.half_open_max_req,
    )


def hash_token(token: str) -> str:
    """Return the hex SHA-256 digest of ``token``."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def build_url(base_url: str, path: str) -> str:
    """Join ``base_url`` and ``path``; an absolute http(s) ``path`` is used as is."""
    base_url = base_url.strip().removesuffix("/")
    path = path.strip()
    if not path:
        return base_url
    if path.startswith(("http://", "https://")):
        return path
    if not path.startswith("/"):
        path = "/" + path
    return base_url + path


class _CircuitState(str, Enum):
    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half-open"


class _CircuitBreaker:
    def __init__(
        self,
        failure_threshold: int,
        open_timeout: float,
        half_open_max_req: int,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._failure_threshold = failure_threshold
        self._open_timeout = open_timeout
        self._half_open_max_req = half_open_max_req
        self._clock = clock
        self._lock = threading.Lock()
        self._state = _CircuitState.CLOSED
        self._failures = 0
        self._opened_at = 0.0
        self._half_open_requests = 0
        self._half_open_successes = 0

    @property
    def state(self) -> _CircuitState:
        with self._lock:
            return self._state

    def allow(self) -> bool:
        with self._lock:
            if self._state is _CircuitState.OPEN:
                if self._clock() - self._opened_at < self._open_timeout:
                    return False
                self._state = _CircuitState.HALF_OPEN
                self._half_open_requests = 0
                self._half_open_successes = 0
            if self._state is _CircuitState.HALF_OPEN:
                if self._half_open_requests >= self._half_open_max_req:
                    return False
                self._half_open_requests += 1
            return True

    def record_success(self) -> None:
        with self._lock:
            if self._state is _CircuitState.HALF_OPEN:
                self._half_open_successes += 1
                if self._half_open_successes >= self._half_open_max_req:
                    self._close()
            else:
                self._failures = 0

    def record_failure(self) -> None:
        with self._lock:
            if self._state is _CircuitState.HALF_OPEN:
                self._open()
                return
            self._failures += 1
            if self._failures >= self._failure_threshold:
                self._open()

    def _open(self) -> None:
        self._state = _CircuitState.OPEN
        self._opened_at = self._clock()
        self._failures = 0

    def _close(self) -> None:
        self._state = _CircuitState.CLOSED
        self._failures = 0


@dataclass
class _Call:
    done: threading.Event = field(default_factory=threading.Event)
    value: Any = None
    error: Optional[BaseException] = None


class _SingleFlight:
    """Run one call per key at a time; concurrent callers share its result."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._calls: dict[str, _Call] = {}

    def do(self, key: str, fn: Callable[[], Any]) -> Any:
        with self._lock:
            call = self._calls.get(key)
            leader = call is None
            if call is None:
                call = _Call()
                self._calls[key] = call
        if not leader:
            call.done.wait()
            if call.error is not None:
                raise call.error
            return call.value
        try:
            call.value = fn()
            return call.value
        except BaseException as exc:
            call.error = exc
            raise
        finally:
            with self._lock:
                self._calls.pop(key, None)
            call.done.set()


class AuthClient:
    """Verifies access tokens through the account service's introspection endpoint."""

    def __init__(
        self,
        base_url: str,
        introspect_path: str,
        admin_key: str = "",
        breaker_config: Optional[CircuitBreakerConfig] = None,
        http_client: Optional[httpx.Client] = None,
        timeout: float = 5.0,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        if breaker_config is None:
            breaker_config = default_circuit_breaker_config()
        breaker_config = normalize_circuit_breaker_config(breaker_config)

        self._owns_http = http_client is None
        self._http = http_client if http_client is not None else httpx.Client(timeout=timeout)
        self._introspect_url = build_url(base_url, introspect_path)
        self._admin_key = admin_key.strip()
        self._logger = logger or logging.getLogger(__name__)
        self._cache = PrincipalCache(30.0, 10_000)
        self._breaker = _CircuitBreaker(
            breaker_config.failure_threshold,
            breaker_config.open_timeout,
            breaker_config.half_open_max_req,
        )
        self._circuit_enabled = breaker_config.enabled
        self._flights = _SingleFlight()

    def close(self) -> None:
        """Close the HTTP client when this object created it."""
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> "AuthClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def verify_access_token(self, token: str) -> Principal:
        """Return the principal owning ``token``; raise an AuthError when it cannot."""
        token = token.strip()
        if not token:
            raise UnauthorizedError("token is required")
        token_key = hash_token(token)
        cached = self._cache.get(token_key)
        if cached is not None:
            return cached

        if self._circuit_enabled and not self._breaker.allow():
            self._logger.warning(
                "anubis circuit breaker rejected request (state=%s)",
                self._breaker.state.value,
            )
            raise DependencyUnavailableError("auth service is temporarily unavailable")

        return self._flights.do(token_key, lambda: self._verify_and_cache(token_key, token))

    def _verify_and_cache(self, token_key: str, token: str) -> Principal:
        cached = self._cache.get(token_key)
        if cached is not None:
            return cached
        try:
            principal = self._verify_by_http(token)
        except TransientAuthError:
            if self._circuit_enabled:
                self._breaker.record_failure()
            raise
        except AuthError:
            if self._circuit_enabled:
                self._breaker.record_success()
            raise
        if self._circuit_enabled:
            self._breaker.record_success()
        self._cache.set(token_key, principal)
        return principal

    def _verify_by_http(self, token: str) -> Principal:
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if self._admin_key:
            headers["x-admin-key"] = self._admin_key
        encoded = json.dumps({"token": token}).encode("utf-8")

        try:
            response = self._http.post(self._introspect_url, content=encoded, headers=headers)
        except httpx.HTTPError as exc:
            raise TransientAuthError(f"request introspection to anubis: {exc}") from exc

        status = response.status_code
        if status == 403:
            raise DependencyUnavailableError("introspection forbidden, verify ANUBIS_ADMIN_KEY")
        if status == 401:
            raise UnauthorizedError("introspection denied")

        try:
            body = response.content[:_MAX_BODY_BYTES]
        except httpx.HTTPError as exc:
            raise TransientAuthError(f"read introspect response: {exc}") from exc

        if status == 429 or status >= 500:
            self._logger.warning("anubis introspection transient failure (status_code=%d)", status)
            raise TransientAuthError(f"anubis introspection failed with status {status}")
        if status != 200:
            self._logger.warning("anubis introspection non-200 (status_code=%d)", status)
            raise AuthError(f"anubis introspection failed with status {status}")

        try:
            decoded = json.loads(body)
        except ValueError as exc:
            raise TransientAuthError(f"unmarshal introspect response: {exc}") from exc
        if not isinstance(decoded, dict):
            raise TransientAuthError("unmarshal introspect response: expected an object")

        if decoded.get("active") is not True:
            raise UnauthorizedError("inactive token")
        user_id = decoded.get("user_id")
        if not isinstance(user_id, str) or not user_id.strip():
            raise TransientAuthError("invalid introspect response: user_id is empty")

        return Principal(user_id=user_id, email="")