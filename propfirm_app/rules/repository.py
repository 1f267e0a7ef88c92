"""
Firm rule repository.

Loads the versioned rule bundles shipped with the package, one YAML file per
supported firm. Bundles are built lazily on first reference and cached for
the life of the process. They are immutable, so readers share them without
locking; two callers racing to load the same firm build equal bundles and
the last write to the cache wins.
"""

import re
from pathlib import Path
from typing import Any, Optional, Union

import structlog
import yaml

from ..config.validation import ConfigValidator
from ..data.models import (
    AccountTier,
    AutomationPolicy,
    DrawdownType,
    FirmRuleBundle,
    Instrument,
    NotFound,
    NotFoundKind,
    freeze_mapping,
)
from ..errors import RuleDataError

logger = structlog.get_logger(__name__)

DEFAULT_RULES_DIR = Path(__file__).parent / "data"

SUPPORTED_FIRMS: tuple[str, ...] = (
    "topstep",
    "myfundedfutures",
    "tradeify",
    "alpha-futures",
    "ftmo",
    "fundednext",
)

# Evaluated in SUPPORTED_FIRMS order; the first firm with a match wins.
FIRM_PATTERNS: dict[str, tuple[re.Pattern, ...]] = {
    "topstep": (re.compile(r"topstep", re.I), re.compile(r"top step", re.I)),
    "myfundedfutures": (
        re.compile(r"my funded futures", re.I),
        re.compile(r"myfundedfutures", re.I),
        re.compile(r"mff", re.I),
    ),
    "tradeify": (re.compile(r"tradeify", re.I),),
    "alpha-futures": (re.compile(r"alpha futures", re.I), re.compile(r"alpha-futures", re.I)),
    "ftmo": (re.compile(r"ftmo", re.I),),
    "fundednext": (re.compile(r"funded next", re.I), re.compile(r"fundednext", re.I)),
}

_WHITESPACE = re.compile(r"\s+")


def normalize_firm_name(firm_name: str) -> str:
    """Lowercase and collapse whitespace runs to hyphens: ``Alpha Futures`` -> ``alpha-futures``."""
    return _WHITESPACE.sub("-", firm_name.lower())


def is_supported_firm(firm_name: str) -> bool:
    """Check whether ``firm_name`` normalizes to a supported firm slug."""
    return normalize_firm_name(firm_name) in SUPPORTED_FIRMS


def list_supported_firms() -> tuple[str, ...]:
    """Supported firm slugs in their fixed enumeration order."""
    return SUPPORTED_FIRMS


def detect_firm_from_message(message: str) -> Optional[str]:
    """
    Detect a supported firm mentioned in free text.

    Args:
        message: Arbitrary user text

    Returns:
        Slug of the first firm (in enumeration order) whose patterns match,
        or None when no supported firm is mentioned
    """
    for slug in SUPPORTED_FIRMS:
        if any(pattern.search(message) for pattern in FIRM_PATTERNS[slug]):
            return slug
    return None


class FirmRuleRepository:
    """Read-only registry of firm rule bundles keyed by slug."""

    def __init__(self, rules_dir: Optional[Path] = None) -> None:
        self.rules_dir = Path(rules_dir) if rules_dir is not None else DEFAULT_RULES_DIR
        self.logger = logger
        self._bundles: dict[str, FirmRuleBundle] = {}

    def load(self, firm_name: str) -> Union[FirmRuleBundle, NotFound]:
        """
        Load the rule bundle for ``firm_name``.

        Args:
            firm_name: Firm display name or slug, in any case

        Returns:
            The firm's bundle, or ``NotFound(firm)`` for unsupported names

        Raises:
            RuleDataError: If a supported firm's data file is missing or invalid
        """
        slug = normalize_firm_name(firm_name)

        if slug not in SUPPORTED_FIRMS:
            self.logger.info("Firm not supported", firm_name=firm_name, slug=slug)
            return NotFound(kind=NotFoundKind.FIRM, key=firm_name)

        bundle = self._bundles.get(slug)
        if bundle is not None:
            self.logger.debug("Firm rules served from cache", firm=slug)
            return bundle

        bundle = self._read_bundle(slug)
        self._bundles[slug] = bundle

        self.logger.info(
            "Loaded firm rules",
            firm=slug,
            version=bundle.version,
            account_sizes=list(bundle.supported_account_sizes)
        )
        return bundle

    def loaded_firms(self) -> list[str]:
        """Slugs of bundles currently cached."""
        return list(self._bundles)

    def _read_bundle(self, slug: str) -> FirmRuleBundle:
        path = self.rules_dir / f"{slug}.yaml"

        try:
            with open(path) as f:
                document = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            self.logger.error("Failed to read firm rules", firm=slug, path=str(path), error=str(e))
            raise RuleDataError(
                f"Failed to load firm rules for {slug}: {e}",
                firm_slug=slug,
                source=str(path),
            ) from e

        errors = ConfigValidator.validate_firm_document(document)
        if errors:
            error_msgs = [f"{err.field}: {err.message} (got: {err.value})" for err in errors]
            self.logger.error("Firm rules failed validation", firm=slug, errors=error_msgs)
            raise RuleDataError(
                f"Invalid firm rules for {slug}",
                firm_slug=slug,
                source=str(path),
                errors=error_msgs,
            )

        if document["slug"] != slug:
            raise RuleDataError(
                f"Firm rules file {path.name} declares slug {document['slug']!r}",
                firm_slug=slug,
                source=str(path),
            )

        return build_bundle(document)


def build_bundle(document: dict[str, Any]) -> FirmRuleBundle:
    """Build an immutable bundle from a validated firm rule document."""
    tiers = {
        int(size): _build_tier(rules)
        for size, rules in document["rules"].items()
    }

    return FirmRuleBundle(
        firm_name=document["firm_name"],
        slug=document["slug"],
        website=document["website"],
        automation_policy=AutomationPolicy(document["automation_policy"]),
        automation_notes=document["automation_notes"],
        supported_account_sizes=tuple(sorted(document["account_sizes"])),
        tiers=freeze_mapping(tiers),
        version=str(document.get("version", "1")),
        updated=document.get("updated"),
    )


def _build_tier(rules: dict[str, Any]) -> AccountTier:
    return AccountTier(
        profit_target=rules["profit_target"],
        profit_target_percent=rules["profit_target_percent"],
        daily_loss_limit=rules["daily_loss_limit"],
        daily_loss_limit_percent=rules["daily_loss_limit_percent"],
        max_drawdown=rules["max_drawdown"],
        max_drawdown_percent=rules["max_drawdown_percent"],
        drawdown_type=DrawdownType(rules["drawdown_type"]),
        drawdown_notes=rules["drawdown_notes"],
        max_contracts=freeze_mapping({
            Instrument(symbol): limit for symbol, limit in rules["max_contracts"].items()
        }),
        consistency_rule=rules["consistency_rule"],
        consistency_notes=rules["consistency_notes"],
        minimum_trading_days=rules["minimum_trading_days"],
        contract_limit_progression=rules.get("contract_limit_progression"),
        max_single_day_profit_percent=rules.get("max_single_day_profit_percent"),
    )


firm_rule_repository = FirmRuleRepository()
