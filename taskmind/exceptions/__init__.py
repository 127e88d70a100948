"""
Domain exceptions for the task service.

Handlers at the MCP boundary convert every one of these into a result
string; the HTTP layer maps them through exceptions.handlers.
"""


class TaskNotFoundError(LookupError):
    """Raised when a task id does not exist in the store."""

    def __init__(self, task_id):
        self.task_id = task_id
        super().__init__(f"Task not found with ID: {task_id}")


class InvalidEnumValueError(ValueError):
    """Raised when a status or priority string is not one of the allowed values."""

    def __init__(self, field: str, value, allowed):
        self.field = field
        self.value = value
        self.allowed = list(allowed)
        super().__init__(
            f"Invalid {field} '{value}'. Must be one of: {', '.join(self.allowed)}"
        )


class DueDateParseError(ValueError):
    """Raised when a due date is not an ISO-8601 local date-time."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(
            f"Invalid due date '{value}'. "
            f"Must be ISO 8601 local date-time (e.g., '2024-01-01T09:00:00')"
        )


class OracleError(RuntimeError):
    """Raised when the completion oracle call fails."""


class OracleUnavailableError(OracleError):
    """Raised when no completion oracle is configured."""


class RegistryError(ValueError):
    """Raised when the tool/prompt/resource catalogue is malformed."""


class ParameterError(ValueError):
    """Raised when a tool parameter is missing or cannot be coerced."""


__all__ = [
    "TaskNotFoundError",
    "InvalidEnumValueError",
    "DueDateParseError",
    "OracleError",
    "OracleUnavailableError",
    "RegistryError",
    "ParameterError",
]
