"""
Validation warnings and the compliance report returned to callers.

``to_dict`` renders the report in the camelCase shape consumed by the
strategy-builder front end.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Sequence

from ..data.models import AccountTier, FirmRuleBundle


class WarningType(str, Enum):
    """Which rule a warning relates to."""
    POSITION_LIMIT = "position_limit"
    RISK_LIMIT = "risk_limit"
    CONSISTENCY = "consistency"
    INFO = "info"


class Severity(str, Enum):
    """How a warning affects the verdict."""
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class ReportStatus(str, Enum):
    """Overall outcome of a validation."""
    INVALID = "invalid"
    WARNINGS = "warnings"
    VALID = "valid"


@dataclass(frozen=True)
class ValidationWarning:
    """A single finding produced by a rule check."""
    type: WarningType
    severity: Severity
    message: str
    suggestion: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        result = {
            "type": self.type.value,
            "severity": self.severity.value,
            "message": self.message,
        }
        if self.suggestion is not None:
            result["suggestion"] = self.suggestion
        return result


@dataclass(frozen=True)
class TierSummary:
    """Normalized echo of the tier the strategy was validated against."""
    firm_name: str
    account_size: int
    profit_target: float
    daily_loss_limit: Optional[float]
    max_drawdown: float
    drawdown_type: str
    max_contracts: tuple[tuple[str, int], ...]
    consistency_rule: float
    automation_policy: str

    @classmethod
    def from_tier(cls, bundle: FirmRuleBundle, account_size: int, tier: AccountTier) -> "TierSummary":
        return cls(
            firm_name=bundle.firm_name,
            account_size=account_size,
            profit_target=tier.profit_target,
            daily_loss_limit=tier.daily_loss_limit,
            max_drawdown=tier.max_drawdown,
            drawdown_type=tier.drawdown_type.value,
            max_contracts=tuple(
                (instrument.value, limit) for instrument, limit in tier.max_contracts.items()
            ),
            consistency_rule=tier.consistency_rule,
            automation_policy=bundle.automation_policy.value,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "firmName": self.firm_name,
            "accountSize": self.account_size,
            "profitTarget": self.profit_target,
            "dailyLossLimit": self.daily_loss_limit,
            "maxDrawdown": self.max_drawdown,
            "drawdownType": self.drawdown_type,
            "maxContracts": dict(self.max_contracts),
            "consistencyRule": self.consistency_rule,
            "automationPolicy": self.automation_policy,
        }


@dataclass(frozen=True)
class ValidationReport:
    """Pass/fail verdict with the ordered warnings that produced it."""
    is_valid: bool
    status: ReportStatus
    warnings: tuple[ValidationWarning, ...]
    tier_summary: TierSummary

    @property
    def errors(self) -> list[ValidationWarning]:
        return [w for w in self.warnings if w.severity is Severity.ERROR]

    def to_dict(self) -> dict[str, Any]:
        return {
            "isValid": self.is_valid,
            "status": self.status.value,
            "warnings": [w.to_dict() for w in self.warnings],
            "firmRules": self.tier_summary.to_dict(),
        }


def build_report(warnings: Sequence[ValidationWarning], tier_summary: TierSummary) -> ValidationReport:
    """
    Aggregate check warnings into a report.

    Any error makes the strategy invalid. Without errors, a warning-severity
    entry yields ``warnings`` status; info entries alone leave it ``valid``.
    """
    has_errors = any(w.severity is Severity.ERROR for w in warnings)
    has_warnings = any(w.severity is Severity.WARNING for w in warnings)

    if has_errors:
        status = ReportStatus.INVALID
    elif has_warnings:
        status = ReportStatus.WARNINGS
    else:
        status = ReportStatus.VALID

    return ValidationReport(
        is_valid=not has_errors,
        status=status,
        warnings=tuple(warnings),
        tier_summary=tier_summary,
    )
