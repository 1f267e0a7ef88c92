"""
Per-tick dollar values for supported futures contracts.

Instruments outside the table are priced at the ES tick value. That is an
approximation: it overstates risk for micros and can understate it for
contracts with larger ticks, so callers should surface
``is_mapped_instrument`` alongside any figure derived from the fallback.
"""

from types import MappingProxyType
from typing import Mapping

import structlog

from ..data.models import Instrument

logger = structlog.get_logger(__name__)

TICK_VALUES: Mapping[Instrument, float] = MappingProxyType({
    Instrument.ES: 12.5,
    Instrument.NQ: 5.0,
    Instrument.MES: 1.25,
    Instrument.MNQ: 0.5,
    Instrument.YM: 5.0,
    Instrument.RTY: 5.0,
    Instrument.CL: 10.0,
    Instrument.GC: 10.0,
})

DEFAULT_TICK_VALUE = TICK_VALUES[Instrument.ES]


def is_mapped_instrument(instrument: str) -> bool:
    """True when ``instrument`` has its own entry in the tick table."""
    return instrument in {i.value for i in TICK_VALUES}


def tick_value(instrument: str) -> float:
    """
    Dollar value of one tick for one contract of ``instrument``.

    Args:
        instrument: Contract symbol, e.g. ``ES`` or ``MNQ``

    Returns:
        Tick value in dollars, ``DEFAULT_TICK_VALUE`` for unmapped symbols
    """
    if not is_mapped_instrument(instrument):
        logger.debug(
            "Unmapped instrument, using default tick value",
            instrument=instrument,
            tick_value=DEFAULT_TICK_VALUE
        )
        return DEFAULT_TICK_VALUE

    return TICK_VALUES[Instrument(instrument)]
