"""Resilient Employee Client — wraps httpx.Client with retry, backoff, and error mapping.

Invariants:
    - Rate limits (429): at most max_attempts total calls, exponential backoff between them
      (base_delay_ms × multiplier^(n-1) before retry n), then RATE_LIMIT_EXCEEDED
    - Not found (404): immediate NOT_FOUND carrying the resource id, no retry
    - Any other HTTP error or transport failure: immediate UPSTREAM error, no retry
    - Success: envelope unwrapped; missing or malformed payload is UPSTREAM, never NOT_FOUND
    - Retries are local to one HTTP call — composite operations are never re-run
    - Employee ids are percent-encoded as one path segment: "/", "?", "#" never change the resource
    - All failures mapped to EmployeeAPIError (core/errors.py)

Design Decisions:
    - Synchronous client with blocking time.sleep between attempts: callers block until a
      result or error, and the FastAPI layer runs routes in its threadpool
    - No jitter on backoff: the delay schedule is part of the upstream contract
    - Retry-After is recorded on the error for diagnostics but does not drive the delay
    - Module-level employee_client initialized on startup: FastAPI lifespan manages lifecycle
"""

import logging
import time
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from employee_api.core.domain_types import EmployeeId
from employee_api.core.errors import EmployeeAPIError, ErrorContext
from employee_api.schemas.employee import (
    DeleteEmployeeRequest,
    Employee,
    EmployeeCreate,
    Envelope,
)

logger = logging.getLogger(__name__)

_RATE_LIMITED_STATUS = 429
_NOT_FOUND_STATUS = 404
_JSON_HEADERS = {"Content-Type": "application/json"}


class ResilientEmployeeClient:
    """Talks to the upstream employee API; owns retry policy and error translation."""

    def __init__(
        self,
        base_url: str,
        max_attempts: int = 3,
        base_delay_ms: int = 1000,
        backoff_multiplier: float = 2.0,
        max_delay_ms: int = 60_000,
        timeout_seconds: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.base_url = base_url.rstrip("/")
        self.max_attempts = max_attempts
        self.base_delay_ms = base_delay_ms
        self.backoff_multiplier = backoff_multiplier
        self.max_delay_ms = max_delay_ms
        self.http = httpx.Client(
            timeout=httpx.Timeout(timeout_seconds), transport=transport,
        )

    def __enter__(self) -> "ResilientEmployeeClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self.http.close()

    # ─── Operations ──────────────────────────────────────────────

    def fetch_all(self) -> list[Employee]:
        """GET {base} → every employee."""
        logger.info("Fetching all employees")
        response = self._send("GET", self.base_url, operation="fetch_all")
        return self._unwrap(response, list[Employee], operation="fetch_all")

    def fetch_by_id(self, employee_id: EmployeeId | str) -> Employee:
        """GET {base}/{id} → one employee, or NOT_FOUND."""
        logger.debug(f"Fetching employee with id: {employee_id}")
        response = self._send(
            "GET", self._resource_url(employee_id),
            operation="fetch_by_id", resource_id=str(employee_id),
        )
        return self._unwrap(
            response, Employee,
            operation="fetch_by_id", resource_id=str(employee_id),
        )

    def create(self, request: EmployeeCreate) -> Employee:
        """POST {base} → the created employee."""
        logger.debug(f"Creating new employee: {request.name}")
        response = self._send(
            "POST", self.base_url,
            operation="create", body=request.model_dump(),
        )
        return self._unwrap(response, Employee, operation="create")

    def delete_by_name(self, name: str) -> bool:
        """DELETE {base} with {"name": name} → upstream's success flag.

        False means upstream accepted the call but removed nothing; deciding
        what that means is left to the caller.
        """
        logger.debug(f"Deleting employee by name: {name}")
        response = self._send(
            "DELETE", self.base_url,
            operation="delete_by_name", resource_id=name,
            body=DeleteEmployeeRequest(name=name).model_dump(),
        )
        return self._unwrap(
            response, bool, operation="delete_by_name", resource_id=name,
        )

    def _resource_url(self, employee_id: EmployeeId | str) -> str:
        """{base}/{id} with the id encoded as exactly one path segment."""
        return f"{self.base_url}/{quote(str(employee_id), safe='')}"

    # ─── Retry loop ──────────────────────────────────────────────

    def _send(
        self,
        method: str,
        url: str,
        *,
        operation: str,
        resource_id: str | None = None,
        body: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """Issue one logical call, retrying only on rate limits."""
        for attempt in range(self.max_attempts):
            response = self._request(
                method, url, body, operation=operation, resource_id=resource_id,
            )
            status = response.status_code

            if status == _RATE_LIMITED_STATUS:
                self._handle_rate_limit(response, attempt, operation, resource_id)
                continue

            if status == _NOT_FOUND_STATUS:
                logger.warning(
                    f"Upstream {operation}: not found",
                    extra={"operation": operation, "resource_id": resource_id},
                )
                raise EmployeeAPIError.not_found(
                    resource_id or url,
                    context=ErrorContext(
                        operation=operation, upstream_status=status,
                        attempts=attempt + 1,
                    ),
                )

            if response.is_error:
                message = _error_message(response)
                logger.error(
                    f"Upstream {operation} failed with HTTP {status}: {message}",
                    extra={
                        "operation": operation, "resource_id": resource_id,
                        "upstream_status": status,
                    },
                )
                raise EmployeeAPIError.upstream(
                    status, message,
                    context=ErrorContext(
                        operation=operation, resource_id=resource_id,
                        attempts=attempt + 1,
                    ),
                )

            self._log_success(operation, attempt)
            return response

        # Unreachable: the final rate-limited attempt raises in _handle_rate_limit.
        raise EmployeeAPIError.rate_limit_exceeded(
            self.max_attempts, context=ErrorContext(operation=operation),
        )

    def _request(
        self,
        method: str,
        url: str,
        body: dict[str, Any] | None,
        *,
        operation: str,
        resource_id: str | None,
    ) -> httpx.Response:
        """Single HTTP exchange; transport failures become UPSTREAM errors."""
        try:
            if body is None:
                return self.http.request(method, url)
            return self.http.request(method, url, json=body, headers=_JSON_HEADERS)
        except httpx.TransportError as e:
            logger.error(
                f"Transport failure during {operation}: {e}",
                extra={"operation": operation, "resource_id": resource_id},
            )
            raise EmployeeAPIError.upstream(
                None, f"{type(e).__name__}: {e}",
                context=ErrorContext(operation=operation, resource_id=resource_id),
            ) from e

    def _handle_rate_limit(
        self,
        response: httpx.Response,
        attempt: int,
        operation: str,
        resource_id: str | None,
    ) -> None:
        """Sleep before the next attempt, or raise when none are left."""
        if attempt + 1 >= self.max_attempts:
            logger.error(
                f"Rate limit exceeded after {self.max_attempts} attempts ({operation})",
                extra={"operation": operation, "attempt": attempt + 1},
            )
            raise EmployeeAPIError.rate_limit_exceeded(
                self.max_attempts,
                retry_after_ms=_extract_retry_after(response),
                context=ErrorContext(
                    operation=operation, resource_id=resource_id,
                    upstream_status=response.status_code,
                ),
            )
        delay = self._backoff(attempt)
        logger.warning(
            f"Rate limit hit, retry after {delay}ms (attempt {attempt + 1})",
            extra={"operation": operation, "attempt": attempt + 1, "delay_ms": delay},
        )
        time.sleep(delay / 1000)

    def _backoff(self, attempt: int) -> int:
        """Delay in ms after a failed attempt (0-based): base × multiplier^attempt, capped."""
        delay = self.base_delay_ms * (self.backoff_multiplier ** attempt)
        return int(min(self.max_delay_ms, delay))

    # ─── Envelope handling ───────────────────────────────────────

    def _unwrap(
        self,
        response: httpx.Response,
        payload_type: Any,
        *,
        operation: str,
        resource_id: str | None = None,
    ) -> Any:
        """Validate Envelope[payload_type] and return its data, or raise UPSTREAM."""
        context = ErrorContext(
            operation=operation, resource_id=resource_id,
            upstream_status=response.status_code,
        )
        try:
            envelope = Envelope[payload_type].model_validate_json(response.content)
        except ValidationError as e:
            logger.error(
                f"Malformed upstream envelope for {operation}: {e}",
                extra={"operation": operation, "resource_id": resource_id},
            )
            raise EmployeeAPIError.upstream(
                response.status_code, "malformed response envelope", context=context,
            ) from e
        if envelope.data is None:
            logger.error(
                f"Upstream envelope for {operation} has no data",
                extra={"operation": operation, "resource_id": resource_id},
            )
            raise EmployeeAPIError.upstream(
                response.status_code, "response envelope is missing data",
                context=context,
            )
        return envelope.data

    def _log_success(self, operation: str, attempt: int) -> None:
        logger.info(
            f"Upstream {operation} succeeded",
            extra={"operation": operation, "attempt": attempt + 1},
        )


def _error_message(response: httpx.Response) -> str:
    """Best-effort message from an error response: envelope error/status, else body text."""
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict):
        for key in ("error", "status", "message"):
            if payload.get(key):
                return str(payload[key])
    return response.text or response.reason_phrase


def _extract_retry_after(response: httpx.Response) -> int | None:
    """Retry-After header in milliseconds, when it is a whole number of seconds."""
    val = response.headers.get("retry-after")
    if val and val.strip().isdigit():
        return int(val) * 1000
    return None


# ─── Process-wide instance ───────────────────────────────────────

employee_client: ResilientEmployeeClient | None = None


def init_employee_client(
    base_url: str, **kwargs: Any,
) -> ResilientEmployeeClient:
    """Create the process-wide client. Called from the FastAPI lifespan."""
    global employee_client
    employee_client = ResilientEmployeeClient(base_url, **kwargs)
    logger.info(f"Employee client initialized for {employee_client.base_url}")
    return employee_client


def close_employee_client() -> None:
    global employee_client
    if employee_client is not None:
        employee_client.close()
        employee_client = None


def get_employee_client() -> ResilientEmployeeClient:
    """FastAPI dependency — the client created on startup."""
    if employee_client is None:
        raise RuntimeError("Employee client not initialized")
    return employee_client
