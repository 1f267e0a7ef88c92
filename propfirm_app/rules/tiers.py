"""Account-tier resolution by exact account size."""

from typing import Union

import structlog

from ..data.models import AccountTier, FirmRuleBundle, NotFound, NotFoundKind

logger = structlog.get_logger(__name__)


def resolve_tier(bundle: FirmRuleBundle, account_size: int) -> Union[AccountTier, NotFound]:
    """
    Return the tier for ``account_size`` in ``bundle``.

    Account sizes are discrete products, so only an exact match resolves.
    There is no nearest-size fallback and no interpolation between tiers.
    """
    tier = bundle.tiers.get(account_size)
    if tier is None:
        logger.info(
            "No tier for account size",
            firm=bundle.slug,
            account_size=account_size,
            supported=list(bundle.supported_account_sizes)
        )
        return NotFound(kind=NotFoundKind.TIER, key=account_size)
    return tier
