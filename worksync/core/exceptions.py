"""
Exception hierarchy for the Work Session sync application.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging, plus an
ErrorCode that routers and the sync client use to decide how to react.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

import enum
from typing import Any


class ErrorCode(str, enum.Enum):
    """
    Error taxonomy shared by server and client.

    VALIDATION_ERROR: Bad or missing input; non-retryable
    NOT_FOUND: Target row absent; non-retryable without a corrective create
    CONFLICT: Invalid state transition (e.g. re-completing a session)
    TRANSIENT_NETWORK: Client-observed request failure or timeout; retryable
    STORAGE_UNAVAILABLE: Client-observed local store failure; degrade gracefully
    """

    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    TRANSIENT_NETWORK = "TRANSIENT_NETWORK"
    STORAGE_UNAVAILABLE = "STORAGE_UNAVAILABLE"


class WorkSyncException(Exception):
    """Base exception for all Work Session sync errors."""

    code: ErrorCode = ErrorCode.VALIDATION_ERROR

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


class ValidationError(WorkSyncException):
    """Raised when input validation fails."""

    code = ErrorCode.VALIDATION_ERROR

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


class SessionNotFoundError(WorkSyncException):
    """Raised when a work session cannot be found."""

    code = ErrorCode.NOT_FOUND

    def __init__(self, session_id: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize session not found error.

        Args:
            session_id: ID of the missing session
            details: Additional context
        """
        details = details or {}
        details["session_id"] = session_id
        super().__init__(f"Work session not found: {session_id}", details)


class SessionItemNotFoundError(WorkSyncException):
    """Raised when no item exists for a (session, document) pair."""

    code = ErrorCode.NOT_FOUND

    def __init__(
        self,
        session_id: str,
        document_id: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        details["session_id"] = session_id
        details["document_id"] = document_id
        super().__init__(
            f"Work session item not found for session {session_id} "
            f"and document {document_id}",
            details,
        )


class SessionConflictError(WorkSyncException):
    """Raised when a state transition is not allowed from the current state."""

    code = ErrorCode.CONFLICT

    def __init__(
        self,
        message: str,
        session_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if session_id:
            details["session_id"] = session_id
        super().__init__(message, details)


class TransientNetworkError(WorkSyncException):
    """Raised by the sync transport when a request failed and may be retried."""

    code = ErrorCode.TRANSIENT_NETWORK

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize transient network error.

        Args:
            message: Error message
            status_code: HTTP status when the server answered, None otherwise
            details: Additional context
        """
        details = details or {}
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(message, details)


class StorageUnavailableError(WorkSyncException):
    """Raised when the device-local progress store cannot be used."""

    code = ErrorCode.STORAGE_UNAVAILABLE

    def __init__(
        self,
        message: str,
        path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if path:
            details["path"] = path
        super().__init__(message, details)


class NoActiveSessionError(WorkSyncException):
    """Raised when an owner has no ACTIVE work session."""

    code = ErrorCode.NOT_FOUND

    def __init__(self, owner_id: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["owner_id"] = owner_id
        super().__init__(f"No active work session for owner: {owner_id}", details)
