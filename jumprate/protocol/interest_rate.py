"""Jump rate interest model (kinked utilization curve).

All inputs and outputs are 1e18 mantissas except pool balances, which are
raw integer amounts in the market's native unit.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import pandas as pd

from jumprate.data.constants import SCALE, STEPS_PER_YEAR
from jumprate.protocol.events import LoggingObserver, NewInterestParams, RateModelObserver
from jumprate.protocol.fixed_point import checked_add, checked_div, checked_sub, mul_div


@dataclass(frozen=True)
class InterestRateParams:
    """Per-step parameters for the piecewise linear rate curve."""

    base_rate_per_step: int
    slope_per_step: int
    jump_slope_per_step: int
    kink: int


class InterestRateModel:
    """Utilization-based rate model with a jump in slope at the kink."""

    __slots__ = ("_params", "_steps_per_year")

    def __init__(
        self,
        base_rate_per_year: int,
        slope_per_year: int,
        jump_slope_per_year: int,
        kink: int,
        *,
        steps_per_year: int = STEPS_PER_YEAR,
        observer: RateModelObserver | None = None,
    ) -> None:
        """Derive per-step parameters from annualized ones.

        Args:
            base_rate_per_year: Rate at zero utilization, per year.
            slope_per_year: Rate increase per unit of utilization up to the
                kink, per year.
            jump_slope_per_year: Rate increase per unit of utilization past
                the kink, per year.
            kink: Utilization at which the jump slope takes over. Not
                converted.
            steps_per_year: Accrual steps assumed per year.
            observer: Receives the derived parameters once construction is
                done. Defaults to a ``LoggingObserver``.
        """
        params = InterestRateParams(
            base_rate_per_step=checked_div(base_rate_per_year, steps_per_year),
            slope_per_step=checked_div(slope_per_year, steps_per_year),
            jump_slope_per_step=checked_div(jump_slope_per_year, steps_per_year),
            kink=kink,
        )
        object.__setattr__(self, "_steps_per_year", steps_per_year)
        object.__setattr__(self, "_params", params)

        (observer or LoggingObserver()).on_new_interest_params(
            NewInterestParams(
                base_rate_per_step=params.base_rate_per_step,
                slope_per_step=params.slope_per_step,
                jump_slope_per_step=params.jump_slope_per_step,
                kink=params.kink,
            )
        )

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable; construct a new one")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable; construct a new one")

    def __repr__(self) -> str:
        p = self._params
        return (
            f"{type(self).__name__}(base_rate_per_step={p.base_rate_per_step}, "
            f"slope_per_step={p.slope_per_step}, "
            f"jump_slope_per_step={p.jump_slope_per_step}, kink={p.kink})"
        )

    @property
    def params(self) -> InterestRateParams:
        return self._params

    @property
    def base_rate_per_step(self) -> int:
        return self._params.base_rate_per_step

    @property
    def slope_per_step(self) -> int:
        return self._params.slope_per_step

    @property
    def jump_slope_per_step(self) -> int:
        return self._params.jump_slope_per_step

    @property
    def kink(self) -> int:
        return self._params.kink

    @property
    def steps_per_year(self) -> int:
        return self._steps_per_year

    def utilization_rate(self, cash: int, borrows: int, reserves: int) -> int:
        """Compute pool utilization, ``borrows / (cash + borrows - reserves)``.

        Args:
            cash: Unborrowed balance held by the pool.
            borrows: Outstanding borrows.
            reserves: Balance set aside as protocol reserves.

        Returns:
            Utilization as a mantissa; 0 when nothing is borrowed.

        Raises:
            ArithmeticUnderflow: If reserves exceed cash + borrows.
        """
        if borrows == 0:
            return 0
        total = checked_sub(checked_add(cash, borrows), reserves)
        return mul_div(borrows, SCALE, total)

    def borrow_rate(self, cash: int, borrows: int, reserves: int) -> int:
        """Compute the per-step borrow rate for the given balances."""
        util = self.utilization_rate(cash, borrows, reserves)
        return self._borrow_rate_at(util)

    def supply_rate(
        self, cash: int, borrows: int, reserves: int, reserve_factor: int
    ) -> int:
        """Compute the per-step supply rate.

        R_supply = U * R_borrow * (1 - reserve_factor)

        Raises:
            ArithmeticUnderflow: If reserve_factor exceeds SCALE.
        """
        one_minus_rf = checked_sub(SCALE, reserve_factor)
        borrow_rate = self.borrow_rate(cash, borrows, reserves)
        rate_to_pool = mul_div(borrow_rate, one_minus_rf, SCALE)
        util = self.utilization_rate(cash, borrows, reserves)
        return mul_div(util, rate_to_pool, SCALE)

    def _borrow_rate_at(self, util: int) -> int:
        p = self._params
        if util <= p.kink:
            return checked_add(
                mul_div(util, p.slope_per_step, SCALE), p.base_rate_per_step
            )
        normal_rate = checked_add(
            mul_div(p.kink, p.slope_per_step, SCALE), p.base_rate_per_step
        )
        excess = util - p.kink
        return checked_add(mul_div(excess, p.jump_slope_per_step, SCALE), normal_rate)

    def rate_curve(self, n_points: int = 200, reserve_factor: int = 0) -> pd.DataFrame:
        """Sample the rate curve over utilizations from 0 to 100%.

        Each point is evaluated through the public queries with a pool of
        ``SCALE`` total assets, so the sampled utilization is exact.

        Returns:
            DataFrame with columns: utilization, borrow_rate, supply_rate,
            borrow_apr, supply_apr. Rates are per-step mantissas; the
            utilization and APR columns are floats.
        """
        if n_points < 2:
            raise ValueError(f"n_points must be at least 2, got {n_points}")

        grid = [SCALE * i // (n_points - 1) for i in range(n_points)]
        borrow_rates = [self.borrow_rate(SCALE - u, u, 0) for u in grid]
        supply_rates = [
            self.supply_rate(SCALE - u, u, 0, reserve_factor) for u in grid
        ]

        annualize = self._steps_per_year / SCALE
        return pd.DataFrame(
            {
                "utilization": np.array(grid, dtype=float) / SCALE,
                "borrow_rate": borrow_rates,
                "supply_rate": supply_rates,
                "borrow_apr": np.array(borrow_rates, dtype=float) * annualize,
                "supply_apr": np.array(supply_rates, dtype=float) * annualize,
            }
        )
