"""Pytest configuration and shared fixtures."""

import pytest
from typing import Any, Callable, Dict, Optional

from propfirm_app.data.models import (
    AccountTier,
    AutomationPolicy,
    DrawdownType,
    ExitCondition,
    FirmRuleBundle,
    Instrument,
    ParsedStrategy,
    PositionSizing,
    freeze_mapping,
)
from propfirm_app.data.strategy_normalizer import StrategyNormalizer
from propfirm_app.engine import FirmRulesEngine
from propfirm_app.rules.repository import FirmRuleRepository


def _tier(**overrides: Any) -> AccountTier:
    fields: Dict[str, Any] = {
        "profit_target": 3000,
        "profit_target_percent": 6,
        "daily_loss_limit": 1000,
        "daily_loss_limit_percent": 2,
        "max_drawdown": 2000,
        "max_drawdown_percent": 4,
        "drawdown_type": DrawdownType.TRAILING,
        "drawdown_notes": "Trails peak equity in real time.",
        "max_contracts": freeze_mapping({i: 5 for i in Instrument}),
        "consistency_rule": 0,
        "consistency_notes": "",
        "minimum_trading_days": 2,
    }
    fields.update(overrides)
    return AccountTier(**fields)


@pytest.fixture
def make_tier() -> Callable[..., AccountTier]:
    """Factory for account tiers; defaults to a 5-contract, $1,000 DLL tier."""
    return _tier


@pytest.fixture
def make_bundle() -> Callable[..., FirmRuleBundle]:
    """Factory for a single-tier bundle at $50,000."""
    def factory(
        tier: Optional[AccountTier] = None,
        automation_policy: AutomationPolicy = AutomationPolicy.ALLOWED,
        automation_notes: str = "Bots welcome.",
    ) -> FirmRuleBundle:
        return FirmRuleBundle(
            firm_name="Test Firm",
            slug="test-firm",
            website="https://example.com",
            automation_policy=automation_policy,
            automation_notes=automation_notes,
            supported_account_sizes=(50000,),
            tiers=freeze_mapping({50000: tier or _tier()}),
        )
    return factory


@pytest.fixture
def make_strategy() -> Callable[..., ParsedStrategy]:
    """Factory for parsed strategies with an optional stop loss."""
    def factory(
        max_contracts: Optional[int] = None,
        stop_value: Optional[float] = None,
        stop_unit: str = "ticks",
    ) -> ParsedStrategy:
        exits = []
        if stop_value is not None:
            exits.append(ExitCondition(type="stop_loss", value=stop_value, unit=stop_unit))
        return ParsedStrategy(
            position_sizing=PositionSizing(method="fixed", value=1, max_contracts=max_contracts),
            exit_conditions=tuple(exits),
        )
    return factory


@pytest.fixture
def repository() -> FirmRuleRepository:
    """Fresh repository over the shipped firm data."""
    return FirmRuleRepository()


@pytest.fixture
def engine(tmp_path, repository) -> FirmRulesEngine:
    """Engine with default thresholds and an isolated repository."""
    return FirmRulesEngine(config_dir=tmp_path, repository=repository)


@pytest.fixture
def sample_parsed_rules() -> Dict[str, Any]:
    """Strategy payload as produced by the upstream strategy parser."""
    return {
        "entry_conditions": [
            {"indicator": "ema", "period": 20, "relation": "crosses_above", "value": 50},
        ],
        "exit_conditions": [
            {"type": "take_profit", "value": 32, "unit": "ticks"},
            {"type": "stop_loss", "value": 16, "unit": "ticks"},
        ],
        "filters": [
            {"type": "time", "start": "09:30", "end": "11:30"},
        ],
        "position_sizing": {"method": "fixed", "value": 1, "max_contracts": 2},
    }


@pytest.fixture
def strategy(sample_parsed_rules) -> ParsedStrategy:
    """Normalized form of ``sample_parsed_rules``."""
    return StrategyNormalizer().normalize_strategy(sample_parsed_rules).strategy
