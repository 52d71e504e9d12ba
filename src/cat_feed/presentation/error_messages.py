from __future__ import annotations

from cat_feed.domain.errors import DomainError, HttpError, TransportError, UnknownError

HTTP_STATUS_MESSAGES: dict[int, str] = {
    401: "Invalid API key. Please check your configuration.",
    403: "Access forbidden. Check your API permissions.",
    404: "Requested resource not found.",
    429: "Too many requests. Please try again later.",
}
SERVER_ERROR_MESSAGE = "Server error. Please try again later."
NETWORK_ERROR_MESSAGE = "Network error. Please check your internet connection."
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred. Please try again."
FALLBACK_MESSAGE = "Unknown error occurred"


def user_message(exc: BaseException) -> str:
    """Map a fetch failure to the string shown to the user."""
    if isinstance(exc, HttpError):
        if exc.code in HTTP_STATUS_MESSAGES:
            return HTTP_STATUS_MESSAGES[exc.code]
        if 500 <= exc.code <= 599:
            return SERVER_ERROR_MESSAGE
        return f"HTTP error: {exc.code}"
    if isinstance(exc, TransportError):
        return NETWORK_ERROR_MESSAGE
    if isinstance(exc, UnknownError):
        return UNEXPECTED_ERROR_MESSAGE
    if isinstance(exc, DomainError):
        return exc.message or FALLBACK_MESSAGE
    return str(exc) or FALLBACK_MESSAGE
