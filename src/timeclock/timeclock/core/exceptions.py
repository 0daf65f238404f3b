class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials or bearer tokens are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""


class InconsistentSequence(DomainError):
    """Raised when clock events do not alternate open/close per pair type."""


class AlreadyClockedIn(InconsistentSequence):
    """Raised on a clock-in while a work session is already open."""


class NoActiveSession(InconsistentSequence):
    """Raised on a clock-out (or break) with no open work session."""


class PeriodBeforeAnchor(DomainError):
    """Raised when a date precedes the pay period anchor date."""


class InvalidConfiguration(DomainError):
    """Raised when engine configuration values are missing or out of range."""
