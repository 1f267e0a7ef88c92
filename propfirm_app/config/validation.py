"""Configuration and firm rule data validation utilities."""

from dataclasses import dataclass
from typing import Any

from ..data.models import AutomationPolicy, DrawdownType, Instrument

_RISK_KEYS = {"error_fraction", "warning_fraction", "recommended_low_fraction"}
_POSITION_KEYS = {"scaling_fraction"}
_LOGGING_KEYS = {"level", "format_json"}
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

_FIRM_REQUIRED_KEYS = (
    "firm_name", "slug", "website", "automation_policy",
    "automation_notes", "account_sizes", "rules",
)
_TIER_REQUIRED_KEYS = (
    "profit_target", "profit_target_percent", "daily_loss_limit",
    "daily_loss_limit_percent", "max_drawdown", "max_drawdown_percent",
    "drawdown_type", "drawdown_notes", "max_contracts", "consistency_rule",
    "consistency_notes", "minimum_trading_days",
)


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_fraction(value: Any) -> bool:
    return _is_number(value) and 0 < value <= 1


class ConfigValidator:
    """Validates threshold configuration and firm rule documents."""

    @staticmethod
    def validate_risk_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate risk threshold parameters."""
        errors = []

        for key in sorted(set(params) - _RISK_KEYS):
            errors.append(ValidationError(
                field=f"risk.{key}",
                message="Unknown parameter",
                value=params[key]
            ))

        for key in sorted(_RISK_KEYS & set(params)):
            if not _is_fraction(params[key]):
                errors.append(ValidationError(
                    field=f"risk.{key}",
                    message="Must be a positive number between 0 and 1",
                    value=params[key]
                ))

        # Warning band must sit below the error band
        warning = params.get("warning_fraction")
        error = params.get("error_fraction")
        if _is_fraction(warning) and _is_fraction(error) and warning >= error:
            errors.append(ValidationError(
                field="risk.warning_fraction",
                message="Must be less than error_fraction",
                value=warning
            ))

        return errors

    @staticmethod
    def validate_position_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate position limit parameters."""
        errors = []

        for key in sorted(set(params) - _POSITION_KEYS):
            errors.append(ValidationError(
                field=f"position.{key}",
                message="Unknown parameter",
                value=params[key]
            ))

        if "scaling_fraction" in params and not _is_fraction(params["scaling_fraction"]):
            errors.append(ValidationError(
                field="position.scaling_fraction",
                message="Must be a positive number between 0 and 1",
                value=params["scaling_fraction"]
            ))

        return errors

    @staticmethod
    def validate_logging_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate logging parameters."""
        errors = []

        for key in sorted(set(params) - _LOGGING_KEYS):
            errors.append(ValidationError(
                field=f"logging.{key}",
                message="Unknown parameter",
                value=params[key]
            ))

        if "level" in params:
            value = params["level"]
            if not isinstance(value, str) or value.upper() not in _LOG_LEVELS:
                errors.append(ValidationError(
                    field="logging.level",
                    message=f"Must be one of {sorted(_LOG_LEVELS)}",
                    value=value
                ))

        if "format_json" in params and not isinstance(params["format_json"], bool):
            errors.append(ValidationError(
                field="logging.format_json",
                message="Must be a boolean",
                value=params["format_json"]
            ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        if "risk" in config:
            errors.extend(ConfigValidator.validate_risk_params(config["risk"]))

        if "position" in config:
            errors.extend(ConfigValidator.validate_position_params(config["position"]))

        if "logging" in config:
            errors.extend(ConfigValidator.validate_logging_params(config["logging"]))

        return errors

    @staticmethod
    def validate_firm_document(document: Any) -> list[ValidationError]:
        """
        Validate a raw firm rule document before it becomes a bundle.

        Checks required keys, enumerated values, that every tier key is a
        supported account size, and the per-tier value ranges.
        """
        if not isinstance(document, dict):
            return [ValidationError(
                field="<root>",
                message="Firm rule document must be a mapping",
                value=type(document).__name__
            )]

        errors = []

        for key in _FIRM_REQUIRED_KEYS:
            if key not in document:
                errors.append(ValidationError(
                    field=key,
                    message="Missing required field",
                    value=None
                ))
        if errors:
            return errors

        policy = document["automation_policy"]
        if policy not in {p.value for p in AutomationPolicy}:
            errors.append(ValidationError(
                field="automation_policy",
                message=f"Must be one of {[p.value for p in AutomationPolicy]}",
                value=policy
            ))

        sizes = document["account_sizes"]
        if not isinstance(sizes, list) or not all(
            isinstance(size, int) and not isinstance(size, bool) and size > 0
            for size in sizes
        ):
            errors.append(ValidationError(
                field="account_sizes",
                message="Must be a list of positive integers",
                value=sizes
            ))
            sizes = []

        rules = document["rules"]
        if not isinstance(rules, dict):
            errors.append(ValidationError(
                field="rules",
                message="Must be a mapping of account size to tier rules",
                value=type(rules).__name__
            ))
            return errors

        for size_key, tier in rules.items():
            try:
                size = int(size_key)
            except (TypeError, ValueError):
                errors.append(ValidationError(
                    field=f"rules.{size_key}",
                    message="Tier key must be an integer account size",
                    value=size_key
                ))
                continue

            if size not in sizes:
                errors.append(ValidationError(
                    field=f"rules.{size_key}",
                    message="Tier account size is not listed in account_sizes",
                    value=size
                ))

            errors.extend(ConfigValidator.validate_tier(tier, prefix=f"rules.{size_key}"))

        return errors

    @staticmethod
    def validate_tier(tier: Any, prefix: str = "tier") -> list[ValidationError]:
        """Validate the rules for a single account tier."""
        if not isinstance(tier, dict):
            return [ValidationError(
                field=prefix,
                message="Tier rules must be a mapping",
                value=type(tier).__name__
            )]

        errors = []

        for key in _TIER_REQUIRED_KEYS:
            if key not in tier:
                errors.append(ValidationError(
                    field=f"{prefix}.{key}",
                    message="Missing required field",
                    value=None
                ))
        if errors:
            return errors

        for key in ("profit_target", "max_drawdown"):
            if not _is_number(tier[key]) or tier[key] <= 0:
                errors.append(ValidationError(
                    field=f"{prefix}.{key}",
                    message="Must be a positive number",
                    value=tier[key]
                ))

        for key in ("daily_loss_limit", "daily_loss_limit_percent"):
            value = tier[key]
            if value is not None and (not _is_number(value) or value < 0):
                errors.append(ValidationError(
                    field=f"{prefix}.{key}",
                    message="Must be null or a non-negative number",
                    value=value
                ))

        if tier["drawdown_type"] not in {d.value for d in DrawdownType}:
            errors.append(ValidationError(
                field=f"{prefix}.drawdown_type",
                message=f"Must be one of {[d.value for d in DrawdownType]}",
                value=tier["drawdown_type"]
            ))

        consistency = tier["consistency_rule"]
        if not _is_number(consistency) or not 0 <= consistency <= 1:
            errors.append(ValidationError(
                field=f"{prefix}.consistency_rule",
                message="Must be a number between 0 and 1",
                value=consistency
            ))

        days = tier["minimum_trading_days"]
        if not isinstance(days, int) or isinstance(days, bool) or days < 0:
            errors.append(ValidationError(
                field=f"{prefix}.minimum_trading_days",
                message="Must be a non-negative integer",
                value=days
            ))

        contracts = tier["max_contracts"]
        if not isinstance(contracts, dict):
            errors.append(ValidationError(
                field=f"{prefix}.max_contracts",
                message="Must be a mapping of instrument to contract limit",
                value=type(contracts).__name__
            ))
            return errors

        known = {i.value for i in Instrument}
        for symbol, limit in contracts.items():
            if symbol not in known:
                errors.append(ValidationError(
                    field=f"{prefix}.max_contracts.{symbol}",
                    message=f"Unknown instrument, must be one of {sorted(known)}",
                    value=symbol
                ))
            elif not isinstance(limit, int) or isinstance(limit, bool) or limit < 0:
                errors.append(ValidationError(
                    field=f"{prefix}.max_contracts.{symbol}",
                    message="Must be a non-negative integer",
                    value=limit
                ))

        return errors
