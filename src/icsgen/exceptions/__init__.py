"""Custom exceptions for icsgen."""

from icsgen.exceptions.errors import (
    IcsGenError,
    EncodeError,
    OptionsError,
    TimezoneResolutionError,
    DateExpressionError,
)

__all__ = [
    "IcsGenError",
    "EncodeError",
    "OptionsError",
    "TimezoneResolutionError",
    "DateExpressionError",
]
