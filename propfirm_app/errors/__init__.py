"""
Error classification for the firm rules engine.

Lookup misses (unknown firm, unknown account size) are not errors: they are
returned as ``NotFound`` values. The exceptions below cover malformed caller
input at the boundary and corrupted reference data or configuration.
"""

from .input_errors import (
    InputError,
    MissingFieldError,
    MalformedStrategyError,
)
from .system_failures import (
    SystemFailureError,
    RuleDataError,
    ConfigurationError,
)

__all__ = [
    # Input Errors
    "InputError",
    "MissingFieldError",
    "MalformedStrategyError",
    # System Failures
    "SystemFailureError",
    "RuleDataError",
    "ConfigurationError",
]
