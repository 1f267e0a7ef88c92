"""Strategy rule checks and compliance report assembly"""

from .checks import StrategyRuleValidator
from .report import (
    ReportStatus,
    Severity,
    TierSummary,
    ValidationReport,
    ValidationWarning,
    WarningType,
    build_report,
)

__all__ = [
    "ReportStatus",
    "Severity",
    "StrategyRuleValidator",
    "TierSummary",
    "ValidationReport",
    "ValidationWarning",
    "WarningType",
    "build_report",
]
