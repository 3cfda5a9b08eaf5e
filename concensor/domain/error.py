"""Domain layer errors.

``NotFoundError``, ``ForbiddenError`` and ``InvalidArgumentError`` are terminal.
``ConflictError`` may be retried by the caller when ``retryable`` is set.
"""


class DomainError(Exception):
    """Base domain error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ConflictError(DomainError):
    """Raised when a write collides with existing state.

    Duplicate votes are permanent conflicts. Contention on a locked row is
    retryable; the engine itself never retries.
    """

    def __init__(self, message: str, retryable: bool = False):
        self.retryable = retryable
        super().__init__(message)


class ForbiddenError(DomainError):
    """Raised when a user attempts an action they are not allowed to take."""

    def __init__(self, message: str):
        super().__init__(message)


class InvalidArgumentError(DomainError):
    """Raised when an input value is outside the accepted domain."""

    def __init__(self, message: str):
        super().__init__(message)
