"""
Common Pydantic schemas for fieldguard responses.

Error bodies produced by the validation middleware are built from these
models so they are encoded the same way as regular endpoint payloads.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


def _utcnow_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class BaseResponse(BaseModel):
    """Base response model with common fields."""

    success: bool = Field(True, description="Indicates if the request was successful")
    message: Optional[str] = Field(None, description="Optional message or description")
    timestamp: str = Field(default_factory=_utcnow_iso, description="Response timestamp")


class ErrorResponse(BaseResponse):
    """Error response model for failures not tied to a single field."""

    success: bool = Field(False, description="Always false for error responses")
    error_code: str = Field(..., description="Machine-readable error code")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error details")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": False,
                "message": "cannot read query parameters: bad query field: 'flag'",
                "error_code": "QUERY_PARSE_FAILED",
                "details": {"query_string": "flag"},
                "timestamp": "2025-01-01T00:00:00+00:00",
            }
        }
    )


class FieldErrorResponse(ErrorResponse):
    """Error response for a request field rejected by a validator."""

    status_code: int = Field(..., description="HTTP status code reported by the validator")
    source: str = Field(..., description="Request source of the field (path_param, query_param, header, cookie)")
    field: str = Field(..., description="Name of the rejected field")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": False,
                "message": "'abc' is not a valid number",
                "error_code": "VALIDATION_FAILED",
                "status_code": 400,
                "source": "path_param",
                "field": "n",
                "timestamp": "2025-01-01T00:00:00+00:00",
            }
        }
    )


class HealthResponse(BaseModel):
    """Health check payload."""

    status: str = "healthy"
    version: str
    timestamp: str = Field(default_factory=_utcnow_iso)
