"""Domain-specific errors for the addon catalog."""


class DomainError(Exception):
    """Base class for domain-specific errors."""
    pass


class ValidationError(DomainError, ValueError):
    """Raised when validation fails."""
    pass


class NotFoundError(DomainError):
    """Raised when a resource is not found."""
    pass


class AlreadyExistsError(DomainError):
    """Raised when a resource with the same identity already exists."""
    pass
