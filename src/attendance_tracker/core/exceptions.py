class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when caller input is malformed or refers to an unknown entity."""


class IntegrityViolation(DomainError):
    """Raised when attendance data breaks a record invariant.

    Covers duplicate (user, date) records, check-out before check-in and
    attempts to mutate a record that is already checked out.
    """


class NotFoundError(DomainError):
    """Raised when an operation needs a record that does not exist."""


class EmptyResultError(DomainError):
    """Raised when a report query matches no rows."""


class UpstreamFailure(DomainError):
    """Raised when the data store fails; the driver error is chained as __cause__."""
