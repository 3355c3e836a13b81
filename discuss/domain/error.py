"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Raised when a reply cannot be submitted as given.

    Covers an empty body and a missing session identity. Nothing is
    written and the local thread is left untouched.
    """

    pass


class PersistenceError(DomainError):
    """Raised when the comment store rejects or fails a write.

    Network failures, access-policy denials and server errors all surface
    as this error. It is recoverable: the caller may let the user retry.
    """

    pass


class NotAuthorizedError(DomainError):
    """Raised when a user attempts to delete content they don't own."""

    def __init__(self, resource: str, resource_id: str, user_id: str):
        super().__init__(
            f"User {user_id} is not authorized to delete {resource} {resource_id}"
        )


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")
