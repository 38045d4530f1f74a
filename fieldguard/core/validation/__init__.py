"""
Core validation package for fieldguard.

Components:
- registry: field keys and the validator registry
- dispatcher: per-request evaluation of validator chains
- errors: validation error classes
- validators: ready-made field validators
"""

from .dispatcher import RequestFieldAccessor, ValidationDispatcher
from .errors import QueryParseError, ValidationError, ValidationErrorType
from .registry import FieldKey, FieldSource, ValidatorFn, ValidatorRegistry
from .validators import is_bool, is_number, min_length

__all__ = [
    "FieldKey",
    "FieldSource",
    "QueryParseError",
    "RequestFieldAccessor",
    "ValidationDispatcher",
    "ValidationError",
    "ValidationErrorType",
    "ValidatorFn",
    "ValidatorRegistry",
    "is_bool",
    "is_number",
    "min_length",
]
