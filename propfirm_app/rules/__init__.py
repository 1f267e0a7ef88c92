"""Firm rule reference data: repository, firm detection and tier resolution"""

from .repository import (
    FirmRuleRepository,
    detect_firm_from_message,
    firm_rule_repository,
    is_supported_firm,
    list_supported_firms,
    normalize_firm_name,
)
from .tiers import resolve_tier

__all__ = [
    "FirmRuleRepository",
    "detect_firm_from_message",
    "firm_rule_repository",
    "is_supported_firm",
    "list_supported_firms",
    "normalize_firm_name",
    "resolve_tier",
]
