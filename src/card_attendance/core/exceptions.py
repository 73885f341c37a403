class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidIdentifier(ValidationError):
    """Raised when a card identifier is empty after trimming."""


class DuplicateIdentifier(DomainError):
    """Raised when a card identifier is already registered."""


class UnknownCard(DomainError):
    """Raised when a scanned card does not belong to any registered user."""


class StoreUnavailable(Exception):
    """Raised when the persistent store cannot complete an operation."""
