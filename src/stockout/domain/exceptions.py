"""Domain-level exceptions.

Every failure in the stock-out workflow is expressed as a subclass of
DomainException so the CLI layer can catch them uniformly and display
user-friendly messages.  None of them is fatal: each one is recovered
by operator action.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class InvalidQuantity(ValidationError):
    """A quantity entered by the operator is not a positive integer."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class EmptyCartError(DomainException):
    """Checkout was invoked with nothing in the cart."""


class AlreadyInFlightError(DomainException):
    """A batch commit is already outstanding."""


class CommitError(DomainException):
    """The inventory service rejected a batch commit or movement."""


class NetworkError(DomainException):
    """The inventory service could not be reached."""
