"""
fieldguard

Request field validation middleware for FastAPI/Starlette applications.
Validators are registered per (source, name) field and run before the
request reaches the route handler.
"""

from fieldguard.core.validation import (
    FieldKey,
    FieldSource,
    ValidationError,
    ValidatorRegistry,
    is_bool,
    is_number,
    min_length,
)
from fieldguard.middleware.validation import FieldValidationMiddleware, validated_route_class

__version__ = "0.1.0"

__all__ = [
    "FieldKey",
    "FieldSource",
    "FieldValidationMiddleware",
    "ValidationError",
    "ValidatorRegistry",
    "is_bool",
    "is_number",
    "min_length",
    "validated_route_class",
]
