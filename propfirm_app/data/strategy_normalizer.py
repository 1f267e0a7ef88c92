"""
Strategy data normalization for converting parser output to canonical format.

This module handles parsing and validation of the strategy payload produced
by the upstream strategy parser, including JSON string parsing and numeric
coercion. It never fills in parameters the parser left out.
"""

import json
import logging
import math
from dataclasses import dataclass
from typing import Any, Optional

from .models import ExitCondition, ParsedStrategy, PositionSizing

logger = logging.getLogger(__name__)


@dataclass
class StrategyNormalizationResult:
    """Result of strategy normalization process."""
    # Normalized strategy (None if invalid)
    strategy: Optional[ParsedStrategy] = None
    # Processing metadata
    success: bool = True
    error_msg: Optional[str] = None
    field: Optional[str] = None

    @classmethod
    def ok(cls, strategy: ParsedStrategy):
        """Create successful result with normalized strategy."""
        return cls(
            strategy=strategy,
            success=True
        )

    @classmethod
    def error(cls, error_msg: str, field: Optional[str] = None):
        """Create error result."""
        return cls(
            success=False,
            error_msg=error_msg,
            field=field
        )


class _FieldError(Exception):
    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field


def _to_float(value: Any, field: str) -> float:
    if isinstance(value, bool):
        raise _FieldError(field, f"Invalid {field}: expected a number, got {value!r}")
    try:
        number = float(value)
    except (ValueError, TypeError, OverflowError) as e:
        raise _FieldError(field, f"Invalid {field}: {e}") from e
    if not math.isfinite(number):
        raise _FieldError(field, f"Invalid {field}: expected a finite number, got {value!r}")
    return number


def _to_optional_int(value: Any, field: str) -> Optional[int]:
    if value is None:
        return None
    number = _to_float(value, field)
    if not number.is_integer() or number < 0:
        raise _FieldError(field, f"Invalid {field}: expected a non-negative whole number, got {value!r}")
    return int(number)


class StrategyNormalizer:
    """
    Strategy data normalization pipeline.

    Accepts the parser's snake_case payload as a dict or JSON string and
    produces an immutable ``ParsedStrategy``.
    """

    def __init__(self):
        self.logger = logger

    def normalize_strategy(self, raw: Any) -> StrategyNormalizationResult:
        """
        Normalize a parsed strategy from raw format to canonical format.

        Args:
            raw: Strategy payload as a dict or JSON string

        Returns:
            StrategyNormalizationResult with the strategy or error information
        """
        if isinstance(raw, str):
            try:
                raw = json.loads(raw)
            except (json.JSONDecodeError, TypeError) as e:
                return StrategyNormalizationResult.error(f"Failed to parse strategy JSON: {e}")

        if not isinstance(raw, dict):
            return StrategyNormalizationResult.error(
                f"Strategy must be an object, got {type(raw).__name__}"
            )

        try:
            strategy = ParsedStrategy(
                position_sizing=self._normalize_position_sizing(raw.get("position_sizing")),
                exit_conditions=self._normalize_exit_conditions(raw.get("exit_conditions")),
                entry_conditions=self._normalize_records(raw.get("entry_conditions"), "entry_conditions"),
                filters=self._normalize_records(raw.get("filters"), "filters"),
            )
        except _FieldError as e:
            self.logger.debug("Strategy normalization failed: %s", e)
            return StrategyNormalizationResult.error(str(e), field=e.field)

        return StrategyNormalizationResult.ok(strategy)

    def _normalize_position_sizing(self, sizing: Any) -> PositionSizing:
        if sizing is None:
            return PositionSizing()

        if not isinstance(sizing, dict):
            raise _FieldError("position_sizing", "Invalid position_sizing: expected an object")

        value = sizing.get("value")
        return PositionSizing(
            method=sizing.get("method"),
            value=_to_float(value, "position_sizing.value") if value is not None else None,
            max_contracts=_to_optional_int(sizing.get("max_contracts"), "position_sizing.max_contracts"),
        )

    def _normalize_exit_conditions(self, conditions: Any) -> tuple[ExitCondition, ...]:
        if conditions is None:
            return ()

        if not isinstance(conditions, list):
            raise _FieldError("exit_conditions", "Invalid exit_conditions: expected a list")

        normalized = []
        for index, condition in enumerate(conditions):
            field = f"exit_conditions[{index}]"
            if not isinstance(condition, dict):
                raise _FieldError(field, f"Invalid {field}: expected an object")

            for required in ("type", "value", "unit"):
                if condition.get(required) is None:
                    raise _FieldError(f"{field}.{required}", f"Missing required field: {field}.{required}")

            value = _to_float(condition["value"], f"{field}.value")
            if value < 0:
                raise _FieldError(
                    f"{field}.value",
                    f"Invalid {field}.value: expected a non-negative number, got {condition['value']!r}"
                )

            normalized.append(ExitCondition(
                type=str(condition["type"]),
                value=value,
                unit=str(condition["unit"]),
                description=condition.get("description"),
            ))

        return tuple(normalized)

    def _normalize_records(self, records: Any, field: str) -> tuple[dict[str, Any], ...]:
        if records is None:
            return ()

        if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
            raise _FieldError(field, f"Invalid {field}: expected a list of objects")

        return tuple(dict(r) for r in records)
