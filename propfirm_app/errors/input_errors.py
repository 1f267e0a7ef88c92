"""
Input error classifications for requests reaching the engine boundary.

These exceptions describe caller mistakes. They are detected before the
engine runs and are reported back to the caller as client errors.
"""

from typing import Optional, Dict, Any


class InputError(Exception):
    """Base class for malformed or incomplete caller input."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = True


class MissingFieldError(InputError):
    """One or more required top-level fields are absent."""

    def __init__(self, message: str, missing_fields: Optional[list] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.missing_fields = missing_fields or []


class MalformedStrategyError(InputError):
    """Parsed strategy payload exists but is in an incorrect format."""

    def __init__(self, message: str, field: Optional[str] = None,
                 raw_data: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.field = field
        self.raw_data = raw_data
