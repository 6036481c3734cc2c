"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the HTTP and CLI layers can catch them uniformly and display
user-friendly messages.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Input was malformed or violated an invariant."""


class EntityNotFoundError(DomainException):
    """A requested product or row does not exist."""

    def __init__(self, message: str, item=None) -> None:
        super().__init__(message)
        self.item = item


class InsufficientStockError(DomainException):
    """The requested quantity exceeds the stock on hand."""

    def __init__(self, message: str, current_stock: int, item=None) -> None:
        super().__init__(message)
        self.current_stock = current_stock
        self.item = item


class RevisionMismatchError(DomainException):
    """The store rejected a write because the document changed since it was read."""


class StockConflictError(DomainException):
    """Revision conflicts persisted after every retry."""

    def __init__(self, message: str, current_stock: int | None = None) -> None:
        super().__init__(message)
        self.current_stock = current_stock


class UpstreamError(DomainException):
    """The document store failed in a way that is not a revision conflict."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ConfigurationError(DomainException):
    """Required server configuration is missing."""
