"""Errors the order lifecycle and notification core can raise.

Everything derives from DomainException; the CLI turns any of them into
a one-line error message.  Bad timestamps or prices in backend records
are not errors here: they fall back to a default and are recorded as
data-quality issues.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ConfigurationError(DomainException):
    """The system is fed values it was never configured to understand."""


class UnknownStatusError(ConfigurationError):
    """A status string does not name any known order stage."""

    def __init__(self, raw_status: object) -> None:
        super().__init__(f"Unknown order status {raw_status!r}")
        self.raw_status = raw_status


class StorageError(DomainException):
    """The underlying key-value store is unavailable or corrupted."""


class DealSourceUnavailable(DomainException):
    """The active-deals snapshot could not be fetched."""
