"""Risk calculation for tick-denominated and dollar-denominated stops"""

from .calculator import find_stop_loss, risk_per_contract, total_risk
from .tick_values import DEFAULT_TICK_VALUE, TICK_VALUES, is_mapped_instrument, tick_value

__all__ = [
    "DEFAULT_TICK_VALUE",
    "TICK_VALUES",
    "find_stop_loss",
    "is_mapped_instrument",
    "risk_per_contract",
    "tick_value",
    "total_risk",
]
