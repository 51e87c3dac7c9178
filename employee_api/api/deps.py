from functools import lru_cache

import httpx
from fastapi import Depends, Request

from employee_api.adapters.upstream_http import HttpEmployeeUpstream
from employee_api.components.employees import EmployeeService, RetryPolicy
from employee_api.config import RetrySettings, Settings, load_from_environment


# --- Settings ---
@lru_cache
def get_settings() -> Settings:
    return load_from_environment()


def retry_policy_from_settings(retry: RetrySettings) -> RetryPolicy:
    """Map millisecond config values onto the component's RetryPolicy."""
    return RetryPolicy(
        max_attempts=retry.max_attempts,
        initial_delay=retry.initial_delay,
        max_delay=retry.max_delay,
        multiplier=retry.multiplier,
    )


def get_retry_policy(settings: Settings = Depends(get_settings)) -> RetryPolicy:
    return retry_policy_from_settings(settings.upstream.retry)


# --- Upstream ---
def get_http_client(request: Request) -> httpx.AsyncClient:
    # Opened and closed by the application lifespan
    return request.app.state.http_client


def get_upstream(
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
    policy: RetryPolicy = Depends(get_retry_policy),
) -> HttpEmployeeUpstream:
    return HttpEmployeeUpstream(client, settings.upstream.base_url, policy)


# --- Services ---
def get_employee_service(
    upstream: HttpEmployeeUpstream = Depends(get_upstream),
) -> EmployeeService:
    """Get employee component service."""
    return EmployeeService(upstream=upstream)
