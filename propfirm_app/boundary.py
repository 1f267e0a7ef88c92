"""
Request boundary for the validate-firm-rules endpoint.

Framework-neutral adapter between a decoded JSON request body and the
engine. It owns input checks and maps engine outcomes to HTTP status codes
so that lookup misses never surface as server errors. Transport and
authentication stay with the hosting web layer, which passes in whether the
caller is authenticated.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import structlog

from .data.models import NotFound
from .data.strategy_normalizer import StrategyNormalizer
from .engine import FirmRulesEngine
from .errors import MalformedStrategyError, MissingFieldError
from .logging.config import configure_logging

logger = structlog.get_logger(__name__)

REQUIRED_FIELDS = ("firmName", "accountSize", "parsedRules", "instrument")

_default_engine: Optional[FirmRulesEngine] = None


@dataclass(frozen=True)
class BoundaryResponse:
    """Status code and JSON body to send back to the caller."""
    status_code: int
    body: dict[str, Any]


def get_engine(config_dir: Optional[Path] = None) -> FirmRulesEngine:
    """
    Return the process-wide engine, creating it on first use.

    Creating the engine also applies the configured logging level and format.
    """
    global _default_engine
    if _default_engine is None:
        _default_engine = FirmRulesEngine(config_dir=config_dir)
        configure_logging(
            level=_default_engine.config.logging.level,
            format_json=_default_engine.config.logging.format_json
        )
    return _default_engine


def parse_request(payload: Any) -> tuple[str, int, Any, str]:
    """
    Extract and check the required request fields.

    Raises:
        MissingFieldError: If a required field is absent or empty
        MalformedStrategyError: If accountSize is not a whole number
    """
    if not isinstance(payload, dict):
        raise MissingFieldError("Missing required fields", missing_fields=list(REQUIRED_FIELDS))

    missing = [name for name in REQUIRED_FIELDS if not payload.get(name)]
    if missing:
        raise MissingFieldError("Missing required fields", missing_fields=missing)

    raw_size = payload["accountSize"]
    try:
        if isinstance(raw_size, bool):
            raise ValueError(raw_size)
        account_size = int(raw_size)
        if account_size != float(raw_size):
            raise ValueError(raw_size)
    except (TypeError, ValueError, OverflowError) as e:
        raise MalformedStrategyError(
            f"Invalid accountSize: {raw_size!r}",
            field="accountSize",
            raw_data=str(raw_size)[:100]
        ) from e

    return payload["firmName"], account_size, payload["parsedRules"], payload["instrument"]


def handle_validate_request(
    payload: Any,
    engine: Optional[FirmRulesEngine] = None,
    authenticated: bool = True
) -> BoundaryResponse:
    """
    Validate a strategy request and build the response.

    Status mapping: 401 unauthenticated, 400 missing or malformed input,
    404 unknown firm or account size, 200 with the report otherwise, and
    500 for anything unexpected.
    """
    if not authenticated:
        return BoundaryResponse(401, {"error": "Unauthorized"})

    try:
        firm_name, account_size, raw_strategy, instrument = parse_request(payload)

        result = StrategyNormalizer().normalize_strategy(raw_strategy)
        if not result.success:
            raise MalformedStrategyError(
                f"Invalid parsedRules: {result.error_msg}",
                field=result.field
            )

        outcome = (engine or get_engine()).validate(
            firm_name, account_size, result.strategy, instrument
        )

    except MissingFieldError as e:
        logger.info("Rejected request with missing fields", missing_fields=e.missing_fields)
        return BoundaryResponse(400, {"error": str(e)})

    except MalformedStrategyError as e:
        logger.info("Rejected malformed request", error=str(e), field=e.field)
        return BoundaryResponse(400, {"error": str(e)})

    except Exception as e:
        logger.error(
            "Firm rules validation error",
            error=str(e),
            error_type=type(e).__name__
        )
        return BoundaryResponse(500, {"error": "Failed to validate firm rules"})

    if isinstance(outcome, NotFound):
        return BoundaryResponse(404, {"error": outcome.message})

    return BoundaryResponse(200, outcome.to_dict())
