"""
Main validation engine coordinator.

Orchestrates the firm rule validation pipeline: firm lookup, tier
resolution, rule checks and report assembly.
"""

from pathlib import Path
from typing import Any, Optional, Union

import structlog

from .config.defaults import DefaultConfig
from .config.loader import ConfigLoader
from .config.validation import ConfigValidator
from .data.models import FirmRuleBundle, NotFound, ParsedStrategy
from .errors import ConfigurationError
from .rules.repository import FirmRuleRepository, firm_rule_repository
from .rules.tiers import resolve_tier
from .validation.checks import StrategyRuleValidator
from .validation.report import TierSummary, ValidationReport, build_report

logger = structlog.get_logger(__name__)


class FirmRulesEngine:
    """
    Main coordinator for strategy validation against prop firm rules.

    Manages the validation pipeline:
    Firm → Account Tier → Rule Checks → Report

    The engine holds no per-call state. Threshold configuration is resolved
    per firm once and reused.
    """

    def __init__(
        self,
        config_dir: Optional[Path] = None,
        repository: Optional[FirmRuleRepository] = None,
        config_overrides: Optional[dict[str, Any]] = None
    ) -> None:
        """Initialize the validation engine."""
        self.logger = logger
        self.config_loader = ConfigLoader.create(config_dir)
        self.repository = repository or firm_rule_repository
        self.config_overrides = config_overrides or {}

        self._validators: dict[str, StrategyRuleValidator] = {}

        # Fail fast on bad global configuration
        self.config = self._resolve_config(None)

        self.logger.info("Firm rules engine initialized", config_dir=str(self.config_loader.config_dir))

    def validate(
        self,
        firm_name: str,
        account_size: int,
        parsed_strategy: ParsedStrategy,
        instrument: str
    ) -> Union[ValidationReport, NotFound]:
        """
        Validate a parsed strategy against a firm's account-tier rules.

        Args:
            firm_name: Firm display name or slug
            account_size: Funded account size in dollars
            parsed_strategy: Strategy parameters from the upstream parser
            instrument: Contract symbol the strategy trades

        Returns:
            A ValidationReport, or NotFound when the firm or tier is unknown
        """
        bundle = self.repository.load(firm_name)
        if isinstance(bundle, NotFound):
            return bundle

        tier = resolve_tier(bundle, account_size)
        if isinstance(tier, NotFound):
            return tier

        warnings = self._validator_for(bundle).run(bundle, tier, parsed_strategy, instrument)
        report = build_report(warnings, TierSummary.from_tier(bundle, account_size, tier))

        self.logger.info(
            "Strategy validated",
            firm=bundle.slug,
            account_size=account_size,
            instrument=instrument,
            status=report.status.value,
            warning_count=len(report.warnings)
        )
        return report

    def _validator_for(self, bundle: FirmRuleBundle) -> StrategyRuleValidator:
        validator = self._validators.get(bundle.slug)
        if validator is None:
            config = self._resolve_config(bundle.slug)
            validator = StrategyRuleValidator(
                risk_params=config.risk,
                position_params=config.position,
            )
            self._validators[bundle.slug] = validator
        return validator

    def _resolve_config(self, firm_slug: Optional[str]) -> DefaultConfig:
        merged = self.config_loader.merge_config(firm_slug, self.config_overrides)

        validation_errors = ConfigValidator.validate_config(merged)
        if validation_errors:
            error_msgs = [f"{err.field}: {err.message} (got: {err.value})" for err in validation_errors]
            self.logger.error(
                "Configuration validation failed",
                firm=firm_slug,
                errors=error_msgs
            )
            raise ConfigurationError(
                "Invalid threshold configuration",
                errors=error_msgs,
                context={"firm": firm_slug},
            )

        return self.config_loader.build_config(merged)
