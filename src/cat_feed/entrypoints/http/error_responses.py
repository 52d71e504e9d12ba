"""REST API error response models.

Structured error responses that provide consistent format for all HTTP errors.
"""

from pydantic import BaseModel, ConfigDict


class ErrorDetail(BaseModel):
    """Individual error detail for field-level errors."""

    field: str
    message: str
    code: str | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "field": "breed_id",
                "message": "Breed ID cannot be blank",
                "code": "BLANK_BREED_ID",
            }
        }
    )


class ErrorResponse(BaseModel):
    """Structured error response format.

    Examples:
        Upstream failure:
            {
                "detail": "HTTP 503: Service Unavailable",
                "code": "UPSTREAM_HTTP_ERROR",
                "upstream_status": 503
            }

        Validation error with fields:
            {
                "detail": "Validation failed",
                "code": "VALIDATION_ERROR",
                "errors": [{"field": "file", "message": "...", "code": "EMPTY_FILE"}]
            }
    """

    detail: str
    code: str | None = None
    errors: list[ErrorDetail] | None = None
    upstream_status: int | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"detail": "Cat image with identifier 'abc' not found", "code": "NOT_FOUND"},
                {
                    "detail": "HTTP 429: Too Many Requests",
                    "code": "UPSTREAM_HTTP_ERROR",
                    "upstream_status": 429,
                },
                {
                    "detail": "Validation failed",
                    "code": "VALIDATION_ERROR",
                    "errors": [
                        {
                            "field": "filename",
                            "message": "Must end with one of ['.gif', '.jpeg', '.jpg', '.png']",
                            "code": "UNSUPPORTED_FILE_TYPE",
                        }
                    ],
                },
            ]
        }
    )


ERROR_RESPONSES: dict[int | str, dict] = {
    404: {"model": ErrorResponse, "description": "Resource not found"},
    422: {"model": ErrorResponse, "description": "Validation error"},
    502: {"model": ErrorResponse, "description": "The cat API answered with an error"},
    503: {"model": ErrorResponse, "description": "The cat API is unreachable"},
}
