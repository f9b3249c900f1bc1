class DomainError(Exception):
    """Base exception class for all domain-specific exceptions."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class ResourceNotFoundError(DomainError):
    """Exception raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        self.resource_type = resource_type
        self.resource_id = resource_id
        message = f"{resource_type} not found"
        super().__init__(message)


class ValidationError(DomainError):
    """Exception raised when validation fails."""

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


class ConflictError(DomainError):
    """Exception raised when a write collides with an existing record."""


class ProgressConflictError(ConflictError):
    """Two first toggles raced on the same (user, problem) pair.

    The losing request gets this instead of a second record; the current
    state can be recovered by reading it again.
    """

    def __init__(self, problem_id: object) -> None:
        self.problem_id = problem_id
        super().__init__("Progress entry already exists")
