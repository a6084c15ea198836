"""
Exception hierarchy for the Quantum5ocial search service.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class Q5SearchException(Exception):
    """Base exception for all search service errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(Q5SearchException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class ProfileNotFoundError(Q5SearchException):
    """Raised when a user profile cannot be found."""

    def __init__(self, user_id: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize profile not found error.

        Args:
            user_id: ID of the missing profile
            details: Additional context
        """
        details = details or {}
        details["user_id"] = user_id
        super().__init__(f"Profile not found: {user_id}", details)


class ProviderError(Q5SearchException):
    """Base exception for embedding and generation provider failures."""

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize provider error.

        Args:
            message: Error message
            provider: Provider identifier (openai, google)
            details: Additional context
        """
        details = details or {}
        if provider:
            details["provider"] = provider
        super().__init__(message, details)


class EmbeddingError(ProviderError):
    """Raised when embedding generation fails."""

    pass


class GenerationError(ProviderError):
    """Raised when text generation fails."""

    pass


class DocumentStoreError(Q5SearchException):
    """Raised when search_documents operations fail."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize document store error.

        Args:
            message: Error message
            operation: Operation that failed (exists, insert, delete, match)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class RetrievalError(Q5SearchException):
    """Raised when query-time retrieval fails."""

    pass


class ProviderMismatchError(RetrievalError):
    """Raised when indexed documents were embedded by a different provider than the query."""

    def __init__(
        self,
        expected: str,
        found: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize provider mismatch error.

        Args:
            expected: Provider used for the query embedding
            found: Provider recorded on the matched document
            details: Additional context
        """
        details = details or {}
        details.update({"expected": expected, "found": found})
        super().__init__(
            f"Index was embedded with '{found}' but the query uses '{expected}'",
            details,
        )
