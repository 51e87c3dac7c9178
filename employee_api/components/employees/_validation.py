"""Create-input validation. Runs before any upstream call."""

from __future__ import annotations

from .models import CreateEmployeeInput, EmployeeValidationError

MIN_AGE = 16
MAX_AGE = 75


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_create_input(inp: CreateEmployeeInput) -> list[EmployeeValidationError]:
    """Validate create input, returning every failure found."""
    errors: list[EmployeeValidationError] = []

    if inp.name is None or not inp.name.strip():
        errors.append(
            EmployeeValidationError(
                code="name_required",
                message="Name cannot be blank",
                field="name",
            )
        )

    if inp.salary is None:
        errors.append(
            EmployeeValidationError(
                code="salary_required",
                message="Salary is required",
                field="salary",
            )
        )
    elif not _is_int(inp.salary) or inp.salary <= 0:
        errors.append(
            EmployeeValidationError(
                code="salary_not_positive",
                message="Salary must be greater than zero",
                field="salary",
            )
        )

    if inp.age is None:
        errors.append(
            EmployeeValidationError(
                code="age_required",
                message="Age is required",
                field="age",
            )
        )
    elif not _is_int(inp.age) or inp.age < MIN_AGE:
        errors.append(
            EmployeeValidationError(
                code="age_too_low",
                message=f"Age must be at least {MIN_AGE}",
                field="age",
            )
        )
    elif inp.age > MAX_AGE:
        errors.append(
            EmployeeValidationError(
                code="age_too_high",
                message=f"Age cannot exceed {MAX_AGE}",
                field="age",
            )
        )

    if inp.title is None or not inp.title.strip():
        errors.append(
            EmployeeValidationError(
                code="title_required",
                message="Title cannot be blank",
                field="title",
            )
        )

    return errors
