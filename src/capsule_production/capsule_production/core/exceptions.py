class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidShiftEntryError(ValidationError):
    """Raised when a shift entry cannot be handed to the work-unit calculator."""


class InvalidQueryError(ValidationError):
    """Raised for bad paging, sorting or filter parameters."""


class NotFoundError(DomainError):
    """Raised when an order or worklog does not exist."""


class DegradedOrderingWarning(UserWarning):
    """An order's secondary sort date was missing or unparsable.

    Never raised. The prioritizer attaches an instance to its WARNING log
    record as ``record.ordering_warning`` so handlers can filter on it.
    """
