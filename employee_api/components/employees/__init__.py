"""
Employees component - Upstream-backed employee directory.
"""

from ._aggregate import TOP_EARNERS_LIMIT, filter_by_name, max_salary, rank_top_earners
from ._retry import (
    DEFAULT_POLICY,
    RetryPolicy,
    calculate_backoff,
    call_with_retry,
    should_retry,
)
from ._validation import MAX_AGE, MIN_AGE, validate_create_input
from .component import EmployeeService
from .models import (
    CreateEmployeeInput,
    DeleteFailed,
    DeleteOutcome,
    DeleteState,
    Employee,
    EmployeeServiceError,
    EmployeeValidationError,
    NetworkError,
    NotFound,
    RateLimited,
    RateLimitExhausted,
    UpstreamError,
    ValidationError,
)
from .ports import EmployeeUpstreamPort, SleepFn

__all__ = [
    # Service
    "EmployeeService",
    # Models
    "CreateEmployeeInput",
    "DeleteOutcome",
    "DeleteState",
    "Employee",
    "EmployeeValidationError",
    # Errors
    "DeleteFailed",
    "EmployeeServiceError",
    "NetworkError",
    "NotFound",
    "RateLimited",
    "RateLimitExhausted",
    "UpstreamError",
    "ValidationError",
    # Ports
    "EmployeeUpstreamPort",
    "SleepFn",
    # Retry
    "DEFAULT_POLICY",
    "RetryPolicy",
    "calculate_backoff",
    "call_with_retry",
    "should_retry",
    # Pure helpers
    "MAX_AGE",
    "MIN_AGE",
    "TOP_EARNERS_LIMIT",
    "filter_by_name",
    "max_salary",
    "rank_top_earners",
    "validate_create_input",
]
