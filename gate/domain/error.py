"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class NotAuthenticatedError(DomainError):
    """Raised when an operation needs an authenticated session and has none."""

    pass


class InviteStorageError(DomainError):
    """Raised when an invite store cannot complete a write.

    Covers disk and permission failures, homeserver errors and deadlines.
    Reads never raise this: an unreadable store reads as empty.
    """

    def __init__(self, operation: str, message: str):
        self.operation = operation
        super().__init__(f"Invite store {operation} failed: {message}")


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class NotAuthorizedError(DomainError):
    """Raised when an authenticated principal lacks the required role."""

    def __init__(self, principal: str, action: str):
        self.principal = principal
        super().__init__(f"{principal} is not authorized to {action}")
