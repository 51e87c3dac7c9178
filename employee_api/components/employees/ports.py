"""
Employees component - Port interfaces.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Protocol

from .models import CreateEmployeeInput, Employee


class EmployeeUpstreamPort(Protocol):
    """Access to the upstream employee collection."""

    async def fetch_all(self) -> list[Employee]:
        """Fetch every employee. Null data yields an empty list."""
        ...

    async def fetch_by_id(self, employee_id: str) -> Employee | None:
        """Fetch one employee. None when the upstream reports 404."""
        ...

    async def create(self, request: CreateEmployeeInput) -> Employee:
        """Create an employee and return it with its upstream id."""
        ...

    async def delete_by_name(self, name: str) -> bool:
        """Delete by name. True only when the upstream data is exactly true."""
        ...


# Non-blocking wait used between retry attempts (asyncio.sleep in production)
SleepFn = Callable[[float], Awaitable[None]]
