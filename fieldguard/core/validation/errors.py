"""
Validation error types for the fieldguard request validation layer.

Validators signal rejection by raising ValidationError; the dispatcher turns
it into a structured response. QueryParseError is raised by the host's query
string decoder and is treated as a transport fault rather than a user-input
fault.
"""

from enum import Enum
from typing import Any, Dict, Optional

from fastapi import status


class ValidationErrorType(str, Enum):
    """Enumeration of failure kinds the dispatcher can report."""

    VALIDATION_FAILED = "validation_failed"
    QUERY_PARSE_FAILED = "query_parse_failed"
    RESPONSE_ENCODING_FAILED = "response_encoding_failed"
    VALIDATOR_FAULT = "validator_fault"


class ValidationError(Exception):
    """
    Raised by a validator to reject a field value.

    Carries the HTTP status code to answer with (400 unless the validator
    says otherwise) and a human-readable message that is sent back to the
    client as-is.
    """

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        details: Optional[Dict[str, Any]] = None,
        error_type: ValidationErrorType = ValidationErrorType.VALIDATION_FAILED,
    ):
        """
        Initialize validation error.

        Args:
            message: Human-readable error message
            status_code: HTTP status code of the error response
            details: Optional extra context serialized with the response
            error_type: Kind of failure
        """
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.error_type = error_type

    @property
    def error_code(self) -> str:
        return self.error_type.value.upper()

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        error_dict = {
            "status_code": self.status_code,
            "message": self.message,
            "error_code": self.error_code,
        }
        if self.details:
            error_dict["details"] = self.details
        return error_dict

    def __repr__(self) -> str:
        return f"ValidationError(status_code={self.status_code}, message={self.message!r})"


class QueryParseError(ValidationError):
    """Raised when the raw query string cannot be decoded."""

    def __init__(self, message: str, query_string: Optional[str] = None):
        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details={"query_string": query_string} if query_string is not None else None,
            error_type=ValidationErrorType.QUERY_PARSE_FAILED,
        )
        self.query_string = query_string
