"""
Upstream employee API adapter (httpx).

Implements EmployeeUpstreamPort against the mock employee service.

Key behaviors:
- Responses are wrapped in an envelope: {"data": ..., "status": "..."}
- 429 is retried through the retry policy; nothing else is
- 404 on an id lookup means absent (None), not an error
- Timeouts and connection failures surface as NetworkError
- Anything else that is not 2xx, or a body that is not an envelope, is UpstreamError
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any
from urllib.parse import quote

import httpx

from employee_api.components.employees import (
    DEFAULT_POLICY,
    CreateEmployeeInput,
    Employee,
    NetworkError,
    RateLimited,
    RetryPolicy,
    SleepFn,
    UpstreamError,
    call_with_retry,
)

logger = logging.getLogger(__name__)

JSON_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}


def build_http_client(
    connect_timeout: float,
    read_timeout: float,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Shared client for the upstream. Timeouts in seconds."""
    return httpx.AsyncClient(
        timeout=httpx.Timeout(read_timeout, connect=connect_timeout),
        headers=JSON_HEADERS,
        transport=transport,
    )


# --- Decoding ---


def _optional_str(raw: dict[str, Any], key: str) -> str | None:
    value = raw.get(key)
    if value is None:
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool) and key == "id":
        return str(value)
    if not isinstance(value, str):
        raise UpstreamError(f"Malformed employee payload: {key} is not a string")
    return value


def _optional_int(raw: dict[str, Any], key: str) -> int | None:
    value = raw.get(key)
    if value is None:
        return None
    if isinstance(value, bool):
        raise UpstreamError(f"Malformed employee payload: {key} is not an integer")
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if not isinstance(value, int):
        raise UpstreamError(f"Malformed employee payload: {key} is not an integer")
    return value


def decode_employee(raw: Any) -> Employee:
    """Map an upstream employee object onto Employee. Unknown keys are ignored."""
    if not isinstance(raw, dict):
        raise UpstreamError("Malformed employee payload: expected an object")
    return Employee(
        id=_optional_str(raw, "id"),
        name=_optional_str(raw, "employee_name"),
        salary=_optional_int(raw, "employee_salary"),
        age=_optional_int(raw, "employee_age"),
        title=_optional_str(raw, "employee_title"),
        email=_optional_str(raw, "employee_email"),
    )


def decode_envelope(response: httpx.Response) -> dict[str, Any]:
    try:
        body = response.json()
    except ValueError as e:
        raise UpstreamError(
            "Upstream returned a body that is not JSON", status_code=response.status_code
        ) from e
    if not isinstance(body, dict):
        raise UpstreamError(
            "Upstream returned JSON that is not an envelope", status_code=response.status_code
        )
    return body


# --- Adapter ---


class HttpEmployeeUpstream:
    """EmployeeUpstreamPort over HTTP."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        base_url: str,
        policy: RetryPolicy = DEFAULT_POLICY,
        sleep: SleepFn = asyncio.sleep,
    ) -> None:
        self._client = client
        self._base_url = base_url.rstrip("/")
        self._policy = policy
        self._sleep = sleep

    def _item_url(self, employee_id: str) -> str:
        return f"{self._base_url}/{quote(employee_id, safe='')}"

    async def _request(
        self, method: str, url: str, json: dict[str, Any] | None = None
    ) -> httpx.Response:
        """One HTTP exchange, with transport failures and 429 classified."""
        try:
            response = await self._client.request(method, url, json=json)
        except httpx.TimeoutException as e:
            raise NetworkError(f"Timed out calling upstream: {method} {url}") from e
        except httpx.TransportError as e:
            raise NetworkError(f"Could not reach upstream: {method} {url}: {e}") from e

        if response.status_code == httpx.codes.TOO_MANY_REQUESTS:
            raise RateLimited(response.headers.get("Retry-After"))
        return response

    async def _exchange(
        self,
        method: str,
        url: str,
        description: str,
        json: dict[str, Any] | None = None,
        allow_not_found: bool = False,
    ) -> dict[str, Any] | None:
        """Request with retry; returns the decoded envelope, or None on an allowed 404."""

        async def attempt() -> dict[str, Any] | None:
            response = await self._request(method, url, json=json)
            if allow_not_found and response.status_code == httpx.codes.NOT_FOUND:
                return None
            if not response.is_success:
                raise UpstreamError(
                    f"Upstream {method} {url} returned {response.status_code}",
                    status_code=response.status_code,
                )
            return decode_envelope(response)

        return await call_with_retry(attempt, self._policy, self._sleep, description)

    async def fetch_all(self) -> list[Employee]:
        logger.info("Fetching all employees from upstream")
        try:
            envelope = await self._exchange("GET", self._base_url, "fetch all employees")
            assert envelope is not None
            data = envelope.get("data")
            if data is None:
                return []
            if not isinstance(data, list):
                raise UpstreamError("Upstream employee list is not an array")
            employees = [decode_employee(item) for item in data]
        except Exception:
            logger.error("Error fetching all employees")
            raise
        logger.info("Successfully fetched %d employees", len(employees))
        return employees

    async def fetch_by_id(self, employee_id: str) -> Employee | None:
        logger.info("Fetching employee by id: %s", employee_id)
        try:
            envelope = await self._exchange(
                "GET",
                self._item_url(employee_id),
                f"fetch employee {employee_id}",
                allow_not_found=True,
            )
            if envelope is None:
                logger.warning("Employee not found with id: %s", employee_id)
                return None
            data = envelope.get("data")
            if data is None:
                raise UpstreamError(f"Upstream returned no data for employee {employee_id}")
            employee = decode_employee(data)
        except Exception:
            logger.error("Error fetching employee by id: %s", employee_id)
            raise
        logger.info("Successfully fetched employee with id: %s", employee_id)
        return employee

    async def create(self, request: CreateEmployeeInput) -> Employee:
        body = {
            "name": request.name,
            "salary": request.salary,
            "age": request.age,
            "title": request.title,
        }
        try:
            envelope = await self._exchange(
                "POST", self._base_url, f"create employee {request.name}", json=body
            )
            assert envelope is not None
            data = envelope.get("data")
            if data is None:
                raise UpstreamError("Upstream returned no data for created employee")
            employee = decode_employee(data)
        except Exception:
            logger.error("Error creating employee: %s", request.name)
            raise
        logger.info("Successfully created employee with id: %s", employee.id)
        return employee

    async def delete_by_name(self, name: str) -> bool:
        try:
            envelope = await self._exchange(
                "DELETE", self._base_url, f"delete employee {name}", json={"name": name}
            )
        except Exception:
            logger.error("Error deleting employee: %s", name)
            raise
        assert envelope is not None
        # Only a literal true counts; "true", 1 and null are failures
        return envelope.get("data") is True
