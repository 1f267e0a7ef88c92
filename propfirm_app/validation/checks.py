"""
Rule checks run against a parsed strategy.

Checks run in a fixed order and independently of one another: position
limit, risk limit, consistency rule, drawdown type, automation policy. Each
check has its own applicability guard and emits at most one warning.
"""

import math
from typing import Optional

from ..config.defaults import PositionLimitParams, RiskThresholdParams
from ..data.models import AccountTier, AutomationPolicy, FirmRuleBundle, ParsedStrategy
from ..logging.config import get_validation_logger, log_check_result
from ..risk.calculator import find_stop_loss, total_risk
from .report import Severity, ValidationWarning, WarningType

validation_logger = get_validation_logger(__name__)


def _percent(fraction: float) -> str:
    """Render a fraction as a whole-looking percentage: 0.4 -> ``40``."""
    return f"{fraction * 100:g}"


def _amount(value: float) -> str:
    """Render a dollar limit as written: ``1000`` or ``1000.5``."""
    return f"{value:.0f}" if float(value).is_integer() else str(value)


class StrategyRuleValidator:
    """Runs the rule battery for one tier and collects warnings."""

    def __init__(
        self,
        risk_params: Optional[RiskThresholdParams] = None,
        position_params: Optional[PositionLimitParams] = None
    ) -> None:
        self.risk_params = risk_params or RiskThresholdParams()
        self.position_params = position_params or PositionLimitParams()
        self.logger = validation_logger

    def run(
        self,
        bundle: FirmRuleBundle,
        tier: AccountTier,
        strategy: ParsedStrategy,
        instrument: str
    ) -> list[ValidationWarning]:
        """
        Run every check and return the warnings in check order.

        Args:
            bundle: Firm the strategy will trade under
            tier: Resolved rules for the requested account size
            strategy: Parsed strategy, read but never modified
            instrument: Contract symbol the strategy trades

        Returns:
            Warnings, ordered by the check that produced them
        """
        checks = (
            ("position_limit", lambda: self.check_position_limit(bundle, tier, strategy, instrument)),
            ("risk_limit", lambda: self.check_risk_limit(tier, strategy, instrument)),
            ("consistency", lambda: self.check_consistency(bundle, tier)),
            ("drawdown", lambda: self.check_drawdown(bundle, tier)),
            ("automation_policy", lambda: self.check_automation_policy(bundle)),
        )

        warnings = []
        for check_name, check in checks:
            warning = check()
            log_check_result(
                self.logger,
                check_name=check_name,
                emitted=warning is not None,
                firm_slug=bundle.slug,
                severity=warning.severity.value if warning else None,
                context={"instrument": instrument}
            )
            if warning is not None:
                warnings.append(warning)

        return warnings

    def check_position_limit(
        self,
        bundle: FirmRuleBundle,
        tier: AccountTier,
        strategy: ParsedStrategy,
        instrument: str
    ) -> Optional[ValidationWarning]:
        """Compare the strategy's max contracts with the tier's limit for ``instrument``."""
        limit = tier.contract_limit(instrument)
        if not limit:
            return None

        requested = strategy.position_sizing.max_contracts or 1

        if requested > limit:
            return ValidationWarning(
                type=WarningType.POSITION_LIMIT,
                severity=Severity.ERROR,
                message=(
                    f"Position size exceeds {bundle.firm_name} limit: "
                    f"{requested} contracts > {limit} max for {instrument}"
                ),
                suggestion=f"Reduce max_contracts to {limit} or lower",
            )

        if requested == limit:
            scaled = math.floor(limit * self.position_params.scaling_fraction)
            return ValidationWarning(
                type=WarningType.POSITION_LIMIT,
                severity=Severity.WARNING,
                message=(
                    f"Trading at maximum contract limit ({limit} contracts). "
                    f"Consider leaving room for scaling."
                ),
                suggestion=f"Use {scaled} contracts to allow for position scaling",
            )

        return None

    def check_risk_limit(
        self,
        tier: AccountTier,
        strategy: ParsedStrategy,
        instrument: str
    ) -> Optional[ValidationWarning]:
        """Compare per-trade stop-loss risk with the tier's daily loss limit."""
        daily_limit = tier.daily_loss_limit
        if not daily_limit or find_stop_loss(strategy.exit_conditions) is None:
            return None

        risk = total_risk(
            strategy.exit_conditions,
            strategy.position_sizing.max_contracts,
            instrument
        )
        params = self.risk_params

        if risk > daily_limit * params.error_fraction:
            return ValidationWarning(
                type=WarningType.RISK_LIMIT,
                severity=Severity.ERROR,
                message=(
                    f"Risk per trade (${risk:.2f}) exceeds recommended "
                    f"{_percent(params.error_fraction)}% of daily loss limit (${_amount(daily_limit)})"
                ),
                suggestion=(
                    f"Reduce position size or tighten stop loss to risk max "
                    f"${daily_limit * params.error_fraction:.2f} per trade"
                ),
            )

        if risk > daily_limit * params.warning_fraction:
            return ValidationWarning(
                type=WarningType.RISK_LIMIT,
                severity=Severity.WARNING,
                message=(
                    f"Risk per trade (${risk:.2f}) is "
                    f"{risk / daily_limit * 100:.0f}% of daily loss limit"
                ),
                suggestion=(
                    f"Consider reducing to {_percent(params.recommended_low_fraction)}-"
                    f"{_percent(params.warning_fraction)}% of daily limit for multiple trade attempts"
                ),
            )

        return None

    def check_consistency(self, bundle: FirmRuleBundle, tier: AccountTier) -> Optional[ValidationWarning]:
        """Remind the trader of the firm's best-day cap."""
        if tier.consistency_rule <= 0:
            return None

        return ValidationWarning(
            type=WarningType.CONSISTENCY,
            severity=Severity.INFO,
            message=(
                f"{bundle.firm_name} requires no single day's profit to exceed "
                f"{_percent(tier.consistency_rule)}% of total profit"
            ),
            suggestion="Ensure your strategy distributes profits across multiple trading days",
        )

    def check_drawdown(self, bundle: FirmRuleBundle, tier: AccountTier) -> ValidationWarning:
        """Describe how the firm measures drawdown for this tier."""
        return ValidationWarning(
            type=WarningType.INFO,
            severity=Severity.INFO,
            message=f"{bundle.firm_name} uses {tier.drawdown_type.label} drawdown: {tier.drawdown_notes}",
        )

    def check_automation_policy(self, bundle: FirmRuleBundle) -> Optional[ValidationWarning]:
        """Warn when the firm does not fully allow automated execution."""
        if bundle.automation_policy is AutomationPolicy.ALLOWED:
            return None

        return ValidationWarning(
            type=WarningType.INFO,
            severity=Severity.WARNING,
            message=f"{bundle.firm_name} automation policy: {bundle.automation_policy.value}",
            suggestion=bundle.automation_notes,
        )
