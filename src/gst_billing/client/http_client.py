"""
REST transport for the hosted billing backend
A pooled requests session with bounded retries, a circuit breaker and
redacted audit entries
"""

import logging
import time
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional, Union

import requests
from requests.adapters import HTTPAdapter

from gst_billing.client.circuit_breaker import (
    CircuitBreaker,
    CircuitBreakerConfig,
    CircuitState,
)
from gst_billing.config.billing_config import BillingConfig
from gst_billing.exceptions import BillingError, NetworkError, StorageError


logger = logging.getLogger(__name__)

RETRYABLE_STATUSES = frozenset({408, 429, 500, 502, 503, 504})
MAX_BACKOFF_SECONDS = 16.0

REDACTED = "[REDACTED]"
SENSITIVE_KEYS = ("authorization", "apikey", "access_token", "refresh_token", "password")


@dataclass
class HttpRequestOptions:
    """Per-request overrides"""
    headers: Optional[Dict[str, str]] = None
    params: Optional[Dict[str, Union[str, int, bool]]] = None
    timeout: Optional[int] = None  # milliseconds
    skip_retry: bool = False


@dataclass
class HttpResponse:
    """Decoded backend response"""
    data: Any
    status: int
    headers: Dict[str, str]
    request_id: str


@dataclass
class HttpAuditEntry:
    """One attempt against the backend, with credentials masked"""
    timestamp: str
    request_id: str
    method: str
    url: str
    headers: Dict[str, str]
    body: Any = None
    status_code: Optional[int] = None
    response_body: Any = None
    elapsed_ms: int = 0
    attempt: int = 0
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None


def _is_sensitive(key: Any) -> bool:
    lowered = str(key).lower()
    return any(marker in lowered for marker in SENSITIVE_KEYS)


def redact(value: Any) -> Any:
    """Copy of value with credential-like keys masked at any depth"""
    if isinstance(value, dict):
        return {
            key: REDACTED if _is_sensitive(key) else redact(item)
            for key, item in value.items()
        }
    if isinstance(value, list):
        return [redact(item) for item in value]
    return value


def _decode_body(response: requests.Response) -> Any:
    # 204 and return=minimal writes come back without a body
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def _should_retry(error: requests.exceptions.RequestException) -> bool:
    if isinstance(error, requests.exceptions.HTTPError):
        response = error.response
        return response is not None and response.status_code in RETRYABLE_STATUSES
    return True


def to_billing_error(error: requests.exceptions.RequestException) -> BillingError:
    """
    Map a requests failure onto the package's error hierarchy

    Transient statuses become retryable NetworkErrors; any other HTTP
    status is a StorageError carrying the PostgREST error fields.
    """
    if isinstance(error, requests.exceptions.Timeout):
        return NetworkError.timeout()
    if isinstance(error, requests.exceptions.ConnectionError):
        return NetworkError.connection_refused(f"Connection error: {error}")

    response = error.response
    if response is None:
        return NetworkError(f"Request error: {error}")

    body = _decode_body(response)
    postgrest = body if isinstance(body, dict) else {}
    message = postgrest.get("message") or str(error)

    if response.status_code in RETRYABLE_STATUSES:
        return NetworkError(
            message,
            status_code=response.status_code,
            network_code="NET06",
            retryable=True,
        )

    details = None
    if postgrest:
        details = {
            "backend_code": postgrest.get("code"),
            "hint": postgrest.get("hint"),
            "details": postgrest.get("details"),
        }
    return StorageError(
        message,
        code="STORAGE_HTTP_ERROR",
        status_code=response.status_code,
        details=details,
    )


class HttpClient:
    """
    Session-based client for the backend's PostgREST API

    Paths are relative to the REST root, e.g. "/customers". Transport
    failures and transient statuses are retried with doubling delays;
    every attempt can be reported through an audit callback.

    Example:
        >>> with HttpClient(config) as client:
        ...     options = HttpRequestOptions(params={"select": "*"})
        ...     rows = client.get("/customers", options).data
    """

    def __init__(
        self,
        config: BillingConfig,
        circuit_breaker_config: Optional[CircuitBreakerConfig] = None,
    ) -> None:
        self.config = config
        self._breaker = CircuitBreaker(circuit_breaker_config or CircuitBreakerConfig())
        self._audit_callback: Optional[Callable[[HttpAuditEntry], None]] = None
        self._session = self._create_session()

    def _create_session(self) -> requests.Session:
        session = requests.Session()

        # Row-level security keys off the bearer token; the anon key alone
        # only reaches public rows
        token = self.config.access_token or self.config.supabase_anon_key
        session.headers.update({
            "Content-Type": "application/json",
            "Accept": "application/json",
            "apikey": self.config.supabase_anon_key,
            "Authorization": f"Bearer {token}",
        })

        # Retries happen in _request, not in urllib3
        adapter = HTTPAdapter(pool_connections=10, pool_maxsize=10, max_retries=0)
        for scheme in ("http://", "https://"):
            session.mount(scheme, adapter)
        return session

    @staticmethod
    def _new_request_id() -> str:
        return f"gstb-{int(time.time() * 1000):x}-{uuid.uuid4().hex[:8]}"

    def _backoff(self, attempt: int) -> float:
        """Seconds to wait after failed attempt number `attempt` (0-based)"""
        return min(self.config.retry_delay * 2 ** attempt / 1000.0, MAX_BACKOFF_SECONDS)

    def set_audit_log_callback(self, callback: Callable[[HttpAuditEntry], None]) -> None:
        self._audit_callback = callback

    def _audit(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        body: Any,
        request_id: str,
        started: float,
        attempt: int,
        response: Optional[requests.Response] = None,
        error: Optional[Exception] = None,
    ) -> None:
        if not (self.config.enable_audit_log and self._audit_callback):
            return

        self._audit_callback(HttpAuditEntry(
            timestamp=datetime.now(timezone.utc).isoformat(),
            request_id=request_id,
            method=method,
            url=url,
            headers=redact(headers),
            body=redact(body),
            status_code=response.status_code if response is not None else None,
            response_body=redact(_decode_body(response)) if response is not None else None,
            elapsed_ms=int((time.monotonic() - started) * 1000),
            attempt=attempt,
            error=str(error) if error else None,
        ))

    def _request(
        self,
        method: str,
        path: str,
        data: Optional[Any] = None,
        options: Optional[HttpRequestOptions] = None,
    ) -> HttpResponse:
        """
        Send one logical request, retrying transient failures

        Raises:
            NetworkError: On timeouts, connection failures, transient
                statuses that outlast the retries, or an open circuit
            StorageError: When the backend rejects the request
        """
        options = options or HttpRequestOptions()
        self._breaker.before_request()

        url = f"{self.base_url}{path}"
        timeout = (options.timeout or self.config.timeout) / 1000.0
        attempts = 1 if options.skip_retry else self.config.retry_attempts + 1

        for attempt in range(attempts):
            request_id = self._new_request_id()
            headers = {**self._session.headers, "X-Request-ID": request_id}
            headers.update(options.headers or {})

            started = time.monotonic()
            response: Optional[requests.Response] = None
            try:
                prepared = self._session.prepare_request(requests.Request(
                    method, url, headers=headers, params=options.params, json=data
                ))
                response = self._session.send(prepared, timeout=timeout)
                response.raise_for_status()
            except requests.exceptions.RequestException as e:
                self._breaker.record_failure()
                self._audit(method, url, headers, data, request_id, started, attempt,
                            response=response, error=e)

                if attempt + 1 < attempts and _should_retry(e):
                    delay = self._backoff(attempt)
                    logger.warning(
                        f"{method} {path} failed ({attempt + 1}/{attempts}), "
                        f"retrying in {delay:.2f}s: {e}"
                    )
                    time.sleep(delay)
                    continue
                raise to_billing_error(e) from e

            self._breaker.record_success()
            self._audit(method, url, headers, data, request_id, started, attempt,
                        response=response)
            return HttpResponse(
                data=_decode_body(response),
                status=response.status_code,
                headers=dict(response.headers),
                request_id=request_id,
            )

        raise BillingError(f"{method} {path} was never attempted")

    def get(self, path: str, options: Optional[HttpRequestOptions] = None) -> HttpResponse:
        return self._request("GET", path, None, options)

    def post(
        self,
        path: str,
        data: Optional[Any] = None,
        options: Optional[HttpRequestOptions] = None,
    ) -> HttpResponse:
        """Insert rows; pass a Prefer header in options for upserts"""
        return self._request("POST", path, data, options)

    def patch(
        self,
        path: str,
        data: Optional[Any] = None,
        options: Optional[HttpRequestOptions] = None,
    ) -> HttpResponse:
        """Update the rows matched by the filters in options.params"""
        return self._request("PATCH", path, data, options)

    def delete(self, path: str, options: Optional[HttpRequestOptions] = None) -> HttpResponse:
        return self._request("DELETE", path, None, options)

    @property
    def circuit_state(self) -> CircuitState:
        return self._breaker.state

    def reset_circuit_breaker(self) -> None:
        self._breaker.reset()

    @property
    def base_url(self) -> str:
        """REST root URL"""
        return self.config.get_rest_url()

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
