"""
Ready-made field validators.

Each validator takes the raw string value of a request field and raises
ValidationError when the value is rejected.
"""

import re

from .errors import ValidationError
from .registry import ValidatorFn

# Sign, then the digits with leading zeros dropped.
_INTEGER_PATTERN = re.compile(r"([+-]?)0*([0-9]+)")

_INT64_MIN = -(2 ** 63)
_INT64_MAX = 2 ** 63 - 1
_INT64_DIGITS = len(str(_INT64_MAX))


def is_number(value: str) -> None:
    """Accept signed 64-bit integers written in plain decimal."""
    match = _INTEGER_PATTERN.fullmatch(value)
    if (
        match is None
        or len(match.group(2)) > _INT64_DIGITS
        or not _INT64_MIN <= int(match.group(1) + match.group(2)) <= _INT64_MAX
    ):
        raise ValidationError(f"'{value}' is not a valid number")


def is_bool(value: str) -> None:
    """Accept exactly "true" or "false"."""
    if value not in ("true", "false"):
        raise ValidationError(f"'{value}' is not a valid boolean")


def min_length(length: int) -> ValidatorFn:
    """
    Build a validator rejecting values shorter than length characters.

    Args:
        length: Minimal accepted number of characters

    Returns:
        Validator closing over the configured length
    """

    def validate(value: str) -> None:
        if len(value) < length:
            raise ValidationError(
                f"'{value}' does not have the minimal length of {length}",
                details={"min_length": length, "actual_length": len(value)},
            )

    validate.__name__ = f"min_length_{length}"
    return validate
