"""
Canonical data models for firm rules and parsed strategies.

This module defines immutable data structures for the firm-rule reference
data the engine validates against and for the parsed strategy it reads.
Bundles are shared read-only across every validation call, so their
mappings are exposed through ``MappingProxyType``.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional


class Instrument(str, Enum):
    """Futures contracts with firm contract limits and known tick values."""
    ES = "ES"
    NQ = "NQ"
    MES = "MES"
    MNQ = "MNQ"
    YM = "YM"
    RTY = "RTY"
    CL = "CL"
    GC = "GC"


class AutomationPolicy(str, Enum):
    """Whether a firm permits automated execution on its accounts."""
    ALLOWED = "allowed"
    RESTRICTED = "restricted"
    PROHIBITED = "prohibited"


class DrawdownType(str, Enum):
    """How a firm measures the loss ceiling."""
    STATIC = "static"
    TRAILING = "trailing"
    EOD_TRAILING = "eod_trailing"

    @property
    def label(self) -> str:
        """Human-readable form, e.g. ``eod trailing``."""
        return self.value.replace("_", " ", 1)


class NotFoundKind(str, Enum):
    """Which lookup missed."""
    FIRM = "firm"
    TIER = "tier"


@dataclass(frozen=True)
class NotFound:
    """Typed lookup miss returned instead of raising."""
    kind: NotFoundKind
    key: Any

    @property
    def message(self) -> str:
        if self.kind is NotFoundKind.FIRM:
            return f"Firm rules not found for {self.key}"
        return f"No rules found for account size ${self.key}"


@dataclass(frozen=True)
class AccountTier:
    """Rules for one firm at one funded-account size."""
    profit_target: float
    profit_target_percent: float
    daily_loss_limit: Optional[float]
    daily_loss_limit_percent: Optional[float]
    max_drawdown: float
    max_drawdown_percent: float
    drawdown_type: DrawdownType
    drawdown_notes: str
    max_contracts: Mapping[Instrument, int]
    consistency_rule: float
    consistency_notes: str
    minimum_trading_days: int
    contract_limit_progression: Optional[str] = None
    max_single_day_profit_percent: Optional[float] = None

    def contract_limit(self, instrument: str) -> Optional[int]:
        """Contract limit for ``instrument``, None when the tier defines none."""
        try:
            return self.max_contracts.get(Instrument(instrument))
        except ValueError:
            return None


@dataclass(frozen=True)
class FirmRuleBundle:
    """Versioned, immutable rule set for one supported firm."""
    firm_name: str
    slug: str
    website: str
    automation_policy: AutomationPolicy
    automation_notes: str
    supported_account_sizes: tuple[int, ...]
    tiers: Mapping[int, AccountTier]
    version: str = "1"
    updated: Optional[str] = None


@dataclass(frozen=True)
class PositionSizing:
    """Position sizing section of a parsed strategy."""
    method: Optional[str] = None
    value: Optional[float] = None
    max_contracts: Optional[int] = None


@dataclass(frozen=True)
class ExitCondition:
    """Single exit rule: stop loss, take profit, trailing stop or time exit."""
    type: str
    value: float
    unit: str
    description: Optional[str] = None


@dataclass(frozen=True)
class ParsedStrategy:
    """Strategy parameters produced by the upstream strategy parser."""
    position_sizing: PositionSizing = field(default_factory=PositionSizing)
    exit_conditions: tuple[ExitCondition, ...] = ()
    entry_conditions: tuple[Mapping[str, Any], ...] = ()
    filters: tuple[Mapping[str, Any], ...] = ()


def freeze_mapping(mapping: dict) -> Mapping:
    """Wrap a dict in a read-only view."""
    return MappingProxyType(dict(mapping))
