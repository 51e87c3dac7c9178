from pydantic import BaseModel, Field

from employee_api.components.employees import Employee


# --- Employees ---
class EmployeeResponse(BaseModel):
    """Employee in the upstream's wire shape."""

    id: str | None = None
    employee_name: str | None = None
    employee_salary: int | None = None
    employee_age: int | None = None
    employee_title: str | None = None
    employee_email: str | None = None

    @classmethod
    def from_employee(cls, employee: Employee) -> "EmployeeResponse":
        return cls(
            id=employee.id,
            employee_name=employee.name,
            employee_salary=employee.salary,
            employee_age=employee.age,
            employee_title=employee.title,
            employee_email=employee.email,
        )


class CreateEmployeeRequest(BaseModel):
    # Range and blank checks happen in the component so they share one set of messages.
    # Numbers are strict: JSON true must not arrive as 1.
    name: str | None = Field(None, description="Employee name")
    salary: int | None = Field(None, strict=True, description="Salary, greater than zero")
    age: int | None = Field(None, strict=True, description="Age, 16 to 75 inclusive")
    title: str | None = Field(None, description="Job title")


# --- Errors ---
class ErrorItem(BaseModel):
    code: str
    message: str
    field: str | None = None


class ValidationErrorResponse(BaseModel):
    detail: list[ErrorItem]
