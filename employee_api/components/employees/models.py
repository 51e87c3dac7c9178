"""
Employees component - Data models and error types.

Employee values are fetched per request from the upstream service and are never
mutated in place. Create input is a separate shape with its own constraints.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

# --- Domain Models ---


@dataclass(frozen=True)
class Employee:
    """Employee as reported by the upstream service."""

    id: str | None
    name: str | None
    salary: int | None
    age: int | None
    title: str | None
    email: str | None = None


@dataclass(frozen=True)
class CreateEmployeeInput:
    """Input for creating an employee."""

    name: str | None
    salary: int | None
    age: int | None
    title: str | None


# --- Validation Errors ---


@dataclass(frozen=True)
class EmployeeValidationError:
    """Single create-input validation failure."""

    code: str
    message: str
    field: str | None = None


# --- Delete State ---


class DeleteState(str, Enum):
    """Delete orchestration states."""

    RESOLVING = "resolving"
    NOT_FOUND = "not_found"
    DELETING = "deleting"
    DELETED = "deleted"
    DELETE_FAILED = "delete_failed"


@dataclass(frozen=True)
class DeleteOutcome:
    """Terminal state of a delete plus the resolved name, if any."""

    state: DeleteState
    employee_id: str
    name: str | None = None
    history: tuple[DeleteState, ...] = field(default_factory=tuple)


# --- Error Types ---


class EmployeeServiceError(Exception):
    """Base employee service error."""

    pass


class ValidationError(EmployeeServiceError):
    """Create input failed validation; nothing was sent upstream."""

    def __init__(self, errors: list[EmployeeValidationError]) -> None:
        self.errors = errors
        summary = "; ".join(e.message for e in errors)
        super().__init__(f"Invalid employee input: {summary}")


class NotFound(EmployeeServiceError):
    """Employee does not exist upstream."""

    def __init__(self, employee_id: str) -> None:
        self.employee_id = employee_id
        super().__init__(f"Employee not found with id: {employee_id}")


class UpstreamError(EmployeeServiceError):
    """Upstream answered with an unexpected status or payload."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class RateLimited(UpstreamError):
    """A single rate-limited (429) response. Consumed by the retry policy."""

    def __init__(self, retry_after: str | None = None) -> None:
        self.retry_after = retry_after
        super().__init__("Upstream rate limit hit", status_code=429)


class RateLimitExhausted(EmployeeServiceError):
    """Every retry attempt was rate limited."""

    def __init__(self, attempts: int) -> None:
        self.attempts = attempts
        super().__init__(f"Service unavailable after {attempts} retry attempts")


class NetworkError(EmployeeServiceError):
    """Timeout or connection failure talking to the upstream."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class DeleteFailed(EmployeeServiceError):
    """Upstream accepted the delete call but reported failure."""

    def __init__(self, employee_id: str, name: str) -> None:
        self.employee_id = employee_id
        self.name = name
        super().__init__(f"Failed to delete employee '{name}' with id: {employee_id}")
