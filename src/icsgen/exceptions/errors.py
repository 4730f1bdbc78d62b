"""Exception types raised by icsgen."""

from typing import Any, Optional


class IcsGenError(Exception):
    """Base class for all icsgen errors."""


class EncodeError(IcsGenError):
    """Raised in strict mode when a node tree cannot be encoded."""

    def __init__(self, message: str, node: Any = None):
        self.node = node
        super().__init__(message)


class OptionsError(IcsGenError):
    """Raised when generator options are unreadable or invalid."""

    def __init__(self, message: str, key: Optional[str] = None):
        self.key = key
        if key:
            message = f"Invalid option '{key}': {message}"
        super().__init__(message)


class TimezoneResolutionError(IcsGenError):
    """Raised when a timezone id cannot be resolved or its definition loaded."""

    def __init__(self, tzid: str, reason: str = "unknown timezone"):
        self.tzid = tzid
        self.reason = reason
        super().__init__(f"Cannot resolve timezone '{tzid}': {reason}")


class DateExpressionError(IcsGenError, ValueError):
    """Raised when a start date expression cannot be understood."""

    def __init__(self, expression: str):
        self.expression = expression
        super().__init__(f"Unrecognized date expression: '{expression}'")
