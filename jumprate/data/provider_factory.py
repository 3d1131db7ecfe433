"""Factories for data providers and configured rate models."""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

from jumprate.data.constants import STEPS_PER_YEAR
from jumprate.data.interfaces import MarketDataProvider
from jumprate.data.static_params import StaticDataProvider

if TYPE_CHECKING:
    from jumprate.protocol.events import RateModelObserver
    from jumprate.protocol.interest_rate import InterestRateModel

logger = logging.getLogger(__name__)

STEPS_PER_YEAR_ENV = "JUMPRATE_STEPS_PER_YEAR"


def create_provider() -> MarketDataProvider:
    """Create the market data provider."""
    return StaticDataProvider()


def resolve_steps_per_year(value: int | None = None) -> int:
    """Resolve the number of accrual steps per year.

    Parameters
    ----------
    value : int | None
        Explicit value. When not supplied, the ``JUMPRATE_STEPS_PER_YEAR``
        environment variable is consulted.

    Returns
    -------
    int
        A positive step count; ``STEPS_PER_YEAR`` when nothing usable is
        configured.
    """
    if value is not None:
        if value <= 0:
            raise ValueError(f"steps_per_year must be positive, got {value}")
        return value

    raw = os.environ.get(STEPS_PER_YEAR_ENV)
    if not raw:
        return STEPS_PER_YEAR

    try:
        parsed = int(raw)
    except ValueError:
        logger.warning(
            "Ignoring non-integer %s=%r; using %d", STEPS_PER_YEAR_ENV, raw, STEPS_PER_YEAR
        )
        return STEPS_PER_YEAR

    if parsed <= 0:
        logger.warning(
            "Ignoring non-positive %s=%d; using %d", STEPS_PER_YEAR_ENV, parsed, STEPS_PER_YEAR
        )
        return STEPS_PER_YEAR
    return parsed


def create_rate_model(
    market: str,
    provider: MarketDataProvider | None = None,
    observer: RateModelObserver | None = None,
    steps_per_year: int | None = None,
) -> InterestRateModel:
    """Build an ``InterestRateModel`` from a market's annual parameters.

    Raises
    ------
    KeyError
        If the provider does not know ``market``.
    """
    from jumprate.protocol.interest_rate import InterestRateModel

    params = (provider or create_provider()).get_market_params(market)
    return InterestRateModel(
        params.base_rate_per_year,
        params.slope_per_year,
        params.jump_slope_per_year,
        params.kink,
        steps_per_year=resolve_steps_per_year(steps_per_year),
        observer=observer,
    )
