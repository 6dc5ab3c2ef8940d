"""Domain-level exception hierarchy for the catalog services."""


class CatalogDomainError(Exception):
    """Base class for expected, caller-recoverable catalog failures."""

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class NotFoundError(CatalogDomainError):
    """Raised when a requested entity does not exist or is deleted."""


class ConflictError(CatalogDomainError):
    """Raised when a uniqueness or child-record rule would be broken."""


class ReferentialIntegrityError(ConflictError):
    """Raised when a product would point at a missing or deleted category."""


class ValidationFailedError(CatalogDomainError):
    """Raised when a field-level business rule or a patch operation fails."""
