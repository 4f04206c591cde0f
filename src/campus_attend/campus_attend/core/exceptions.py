class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class DataUnavailableError(DomainError):
    """Raised when the backing store cannot be reached or a query fails.

    The original driver error is kept as ``__cause__``.
    """
