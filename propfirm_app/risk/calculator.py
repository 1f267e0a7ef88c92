"""Dollar risk of a strategy's stop loss at its maximum position size."""

from typing import Optional, Sequence

from ..data.models import ExitCondition
from .tick_values import tick_value

STOP_LOSS = "stop_loss"


def find_stop_loss(exit_conditions: Sequence[ExitCondition]) -> Optional[ExitCondition]:
    """Return the first stop-loss exit condition, or None."""
    for condition in exit_conditions:
        if condition.type == STOP_LOSS:
            return condition
    return None


def risk_per_contract(stop_loss: ExitCondition, instrument: str) -> float:
    """
    Dollar risk of one contract stopped out at ``stop_loss``.

    Tick stops are converted with the instrument's tick value, dollar stops
    are taken as-is. Any other unit carries no dollar risk figure.
    """
    if stop_loss.unit == "ticks":
        return stop_loss.value * tick_value(instrument)
    if stop_loss.unit == "dollars":
        return float(stop_loss.value)
    return 0.0


def total_risk(
    exit_conditions: Sequence[ExitCondition],
    max_contracts: Optional[int],
    instrument: str
) -> Optional[float]:
    """
    Total dollar risk per trade.

    Args:
        exit_conditions: Strategy exit conditions, in declared order
        max_contracts: Maximum position size; absent means a single contract
        instrument: Contract symbol used for the tick value

    Returns:
        Risk in dollars, or None when the strategy has no stop loss
    """
    stop_loss = find_stop_loss(exit_conditions)
    if stop_loss is None:
        return None

    contracts = max_contracts or 1
    return risk_per_contract(stop_loss, instrument) * contracts
