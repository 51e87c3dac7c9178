"""
Employees component - Aggregation and mutation over the upstream directory.

Shell Layer - sequences upstream calls and delegates to the pure helpers.

Invariants:
- I1: Each aggregate reads exactly one fresh collection; nothing is cached
- I2: Create input is validated before any upstream call
- I3: Delete resolves the id first; an unknown id issues no DELETE call
- I4: A refused delete is reported separately from an unknown id
"""

from __future__ import annotations

import logging

from ._aggregate import TOP_EARNERS_LIMIT, filter_by_name, max_salary, rank_top_earners
from ._validation import validate_create_input
from .models import (
    CreateEmployeeInput,
    DeleteFailed,
    DeleteOutcome,
    DeleteState,
    Employee,
    NotFound,
    UpstreamError,
    ValidationError,
)
from .ports import EmployeeUpstreamPort

logger = logging.getLogger(__name__)


class EmployeeService:
    """Employee read, aggregate and mutation operations."""

    def __init__(self, upstream: EmployeeUpstreamPort) -> None:
        self._upstream = upstream

    # --- Reads ---

    async def list_employees(self) -> list[Employee]:
        return await self._upstream.fetch_all()

    async def get_employee(self, employee_id: str) -> Employee | None:
        """Employee by id, or None when the upstream does not know it."""
        return await self._upstream.fetch_by_id(employee_id)

    # --- Aggregates ---

    async def search_by_name(self, query: str) -> list[Employee]:
        logger.info("Searching employees by name: %s", query)
        matches = filter_by_name(await self._upstream.fetch_all(), query)
        logger.info("Found %d employees matching search criteria", len(matches))
        return matches

    async def highest_salary(self) -> int:
        logger.info("Finding highest salary among all employees")
        highest = max_salary(await self._upstream.fetch_all())
        logger.info("Highest salary found: %d", highest)
        return highest

    async def top_earning_names(self, n: int = TOP_EARNERS_LIMIT) -> list[str | None]:
        logger.info("Finding top %d highest earning employees", n)
        names = rank_top_earners(await self._upstream.fetch_all(), n)
        logger.info("Found %d top earners", len(names))
        return names

    # --- Mutations ---

    async def create_employee(self, inp: CreateEmployeeInput) -> Employee:
        """
        Validate and create an employee.

        Raises:
            ValidationError: input rejected; the upstream was not called
        """
        errors = validate_create_input(inp)
        if errors:
            logger.warning("Validation failed for create employee request: %s", errors)
            raise ValidationError(errors)

        logger.info("Creating new employee: %s", inp.name)
        return await self._upstream.create(inp)

    async def resolve_and_delete(self, employee_id: str) -> DeleteOutcome:
        """
        Run the delete state machine and report where it stopped.

        RESOLVING -> NOT_FOUND
        RESOLVING -> DELETING -> DELETED | DELETE_FAILED

        Upstream failures during either step propagate as exceptions.
        """
        history = [DeleteState.RESOLVING]
        logger.info("Attempting to delete employee by id: %s", employee_id)

        employee = await self._upstream.fetch_by_id(employee_id)
        if employee is None:
            history.append(DeleteState.NOT_FOUND)
            return DeleteOutcome(DeleteState.NOT_FOUND, employee_id, None, tuple(history))
        if employee.name is None:
            # The upstream deletes by name, so a nameless record cannot be targeted
            raise UpstreamError(f"Employee {employee_id} has no name to delete by")

        name = employee.name
        history.append(DeleteState.DELETING)
        logger.info(
            "Found employee '%s' with id '%s', proceeding with deletion", name, employee_id
        )

        deleted = await self._upstream.delete_by_name(name)
        final = DeleteState.DELETED if deleted else DeleteState.DELETE_FAILED
        history.append(final)
        return DeleteOutcome(final, employee_id, name, tuple(history))

    async def delete_employee(self, employee_id: str) -> str:
        """
        Delete an employee by id and return the deleted name.

        Raises:
            NotFound: no employee with that id
            DeleteFailed: the upstream refused the delete
        """
        outcome = await self.resolve_and_delete(employee_id)

        if outcome.state is DeleteState.NOT_FOUND:
            logger.warning("Employee not found with id: %s", employee_id)
            raise NotFound(employee_id)

        assert outcome.name is not None
        if outcome.state is DeleteState.DELETE_FAILED:
            logger.error("Upstream refused to delete employee '%s'", outcome.name)
            raise DeleteFailed(employee_id, outcome.name)

        logger.info("Successfully deleted employee '%s' with id '%s'", outcome.name, employee_id)
        return outcome.name
