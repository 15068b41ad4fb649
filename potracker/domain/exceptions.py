"""Domain exceptions for the PO Tracker search service.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class PoTrackerException(Exception):
    """Base exception for all PO Tracker application errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, entity_type).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the API error envelope for this exception."""
        return {
            "success": False,
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
            },
        }


class InvalidQueryException(PoTrackerException):
    """Raised when a search query is too short to be executed."""

    def __init__(self, min_length: int) -> None:
        super().__init__(
            f"Search query must be at least {min_length} characters",
            "INVALID_QUERY",
            {"min_length": min_length},
        )


class UnknownEntityTypeException(PoTrackerException):
    """Raised when a caller names entity types the registry does not know."""

    def __init__(self, entity_types: list[str]) -> None:
        """Initialize with the unknown names.

        Args:
            entity_types: Entity type names that have no registry descriptor.
        """
        super().__init__(
            f"Unknown entity type(s): {', '.join(entity_types)}",
            "UNKNOWN_ENTITY_TYPE",
            {"entity_types": entity_types},
        )


class SearchQueryException(PoTrackerException):
    """Raised when the search index collection cannot be queried.

    The index may not be provisioned yet, or the store may be unreachable.
    Callers catch this to switch to the fallback collection scan.
    """

    def __init__(self, message: str = "Search index query failed") -> None:
        super().__init__(message, "SEARCH_QUERY_FAILED")


class DocumentStoreNotConfiguredException(PoTrackerException):
    """Raised when a request needs the document store but none was initialized."""

    def __init__(self, backend: str) -> None:
        super().__init__(
            f"Document store is not configured (backend: {backend})",
            "STORE_NOT_CONFIGURED",
            {"backend": backend},
        )
