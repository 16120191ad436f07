class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when no authenticated principal is available."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""


class SheetLockedError(DomainError):
    """Raised when a paid (finalized) month sheet would be modified."""


class ConcurrentUpdateError(DomainError):
    """Raised when stored data changed between read and guarded write."""


class AllocationIntegrityError(AssertionError):
    """Installment amounts do not add up to the project value.

    This is a defect in the allocator, not a user error, and is never mapped
    to an HTTP response.
    """
