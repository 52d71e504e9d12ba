"""Domain error classes.

Protocol-agnostic errors that represent business and upstream failures.
These errors are translated to user-facing messages by the feed controller
and to HTTP responses by the HTTP entrypoint.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain errors.

    Protocol-agnostic. Contains error information that can be translated
    to an HTTP response or a message shown to the user.
    """

    # Default error code (can be used as i18n key)
    error_code: str = "DOMAIN_ERROR"

    def __init__(self, message: str, **context: Any) -> None:
        """Create a domain error.

        Args:
            message: Human-readable error message (default locale)
            **context: Additional context for error (e.g., field names, values)
        """
        self.message = message
        self.context = context
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert to structured format for protocol translation."""
        return {
            "message": self.message,
            "code": self.error_code,
            **self.context,
        }


class ValidationError(DomainError):
    """Malformed caller input.

    Raised before any network call is made.

    Examples:
        - Blank breed id for a breed-image query
        - Upload without file content
        - Unsupported mime type

    Protocol mappings:
        - REST: 422 Unprocessable Entity
    """

    error_code: str = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str | None = None,
        errors: list[dict[str, str]] | None = None,
        **context: Any,
    ) -> None:
        """Create a validation error.

        Args:
            message: Overall validation error message (optional if errors provided)
            errors: List of field-specific errors, each with 'field' and 'message'
                   Example: [{"field": "breed_id", "message": "Must not be blank"}]
            **context: Additional context
        """
        self.errors: list[dict[str, str]] | None
        if errors:
            self.errors = errors
            msg = message or "Validation failed"
        else:
            self.errors = None
            msg = message or "Validation error"

        super().__init__(msg, **context)

    def to_dict(self) -> dict[str, Any]:
        """Convert to structured format."""
        if self.errors:
            return {
                "message": self.message,
                "code": self.error_code,
                "errors": self.errors,
                **self.context,
            }
        return super().to_dict()


class NotFoundError(DomainError):
    """Resource not found.

    Examples:
        - Cat image with ID not found upstream
        - Breed id not present in the loaded breed list

    Protocol mappings:
        - REST: 404 Not Found
    """

    error_code: str = "NOT_FOUND"

    def __init__(self, resource: str, identifier: str | None = None, **context: Any) -> None:
        """Create a not found error.

        Args:
            resource: Type of resource (e.g., "Cat image", "Breed")
            identifier: Resource identifier
            **context: Additional context
        """
        if identifier:
            message = f"{resource} with identifier '{identifier}' not found"
        else:
            message = f"{resource} not found"

        super().__init__(message, resource=resource, identifier=identifier, **context)


# ==============================================================================
# Upstream (Cat API) errors
# ==============================================================================


class CatApiError(DomainError):
    """Base class for failures talking to the remote cat API.

    Adapters classify every failure into one of the subclasses below so
    callers never see transport-library exceptions.
    """

    error_code: str = "UPSTREAM_ERROR"


class HttpError(CatApiError):
    """The remote API answered with a non-2xx status.

    Protocol mappings:
        - REST: 502 Bad Gateway (upstream status kept in context)
    """

    error_code: str = "UPSTREAM_HTTP_ERROR"

    def __init__(self, code: int, message: str | None = None, **context: Any) -> None:
        self.code = code
        text = f"HTTP {code}: {message}" if message else f"HTTP {code}"
        super().__init__(text, status_code=code, **context)


class TransportError(CatApiError):
    """Connectivity or timeout failure below the HTTP layer.

    Protocol mappings:
        - REST: 503 Service Unavailable
    """

    error_code: str = "UPSTREAM_UNREACHABLE"


class UnknownError(CatApiError):
    """Anything else that went wrong, e.g. an undecodable response body."""

    error_code: str = "UPSTREAM_UNKNOWN"
