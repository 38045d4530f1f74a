"""
Middleware package for fieldguard.

Contains the Starlette binding of the request field validation engine.
"""

from .validation import (
    FieldValidationMiddleware,
    StarletteFieldAccessor,
    add_field_validation_middleware,
    decode_query_string,
    validated_route_class,
)

__all__ = [
    "FieldValidationMiddleware",
    "StarletteFieldAccessor",
    "add_field_validation_middleware",
    "decode_query_string",
    "validated_route_class",
]
