"""Pydantic response schemas."""

from .common import BaseResponse, ErrorResponse, FieldErrorResponse, HealthResponse

__all__ = ["BaseResponse", "ErrorResponse", "FieldErrorResponse", "HealthResponse"]
