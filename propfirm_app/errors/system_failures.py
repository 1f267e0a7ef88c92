"""
System failure error classifications for unrecoverable errors.

These exceptions represent deploy-time problems with reference data or
configuration. They require fixing the shipped files, not the request.
"""

from typing import Optional, Dict, Any


class SystemFailureError(Exception):
    """Base class for unrecoverable system failures."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class RuleDataError(SystemFailureError):
    """A firm rule data file is unreadable or structurally invalid."""

    def __init__(self, message: str, firm_slug: Optional[str] = None,
                 source: Optional[str] = None,
                 errors: Optional[list] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.firm_slug = firm_slug
        self.source = source
        self.errors = errors or []


class ConfigurationError(SystemFailureError):
    """Threshold configuration failed validation."""

    def __init__(self, message: str, errors: Optional[list] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.errors = errors or []
