"""Pool balances and what-if queries on top of the rate model."""

from __future__ import annotations

from dataclasses import dataclass, replace

from jumprate.data.interfaces import MarketSnapshot
from jumprate.protocol.fixed_point import checked_add, checked_sub
from jumprate.protocol.interest_rate import InterestRateModel


@dataclass(frozen=True)
class PoolBalances:
    """Raw balances of a single market, in its native unit."""

    cash: int
    borrows: int
    reserves: int

    @property
    def total_assets(self) -> int:
        return checked_sub(checked_add(self.cash, self.borrows), self.reserves)

    @classmethod
    def from_market_snapshot(cls, snapshot: MarketSnapshot) -> "PoolBalances":
        return cls(
            cash=snapshot.cash,
            borrows=snapshot.borrows,
            reserves=snapshot.reserves,
        )


class PoolModel:
    """Pool balances combined with a rate model and reserve factor."""

    def __init__(
        self,
        balances: PoolBalances,
        rate_model: InterestRateModel,
        reserve_factor: int = 0,
    ) -> None:
        self.balances = balances
        self.rate_model = rate_model
        self.reserve_factor = reserve_factor

    @property
    def utilization(self) -> int:
        return self._utilization(self.balances)

    @property
    def borrow_rate(self) -> int:
        return self._borrow_rate(self.balances)

    @property
    def supply_rate(self) -> int:
        return self._supply_rate(self.balances)

    def _utilization(self, b: PoolBalances) -> int:
        return self.rate_model.utilization_rate(b.cash, b.borrows, b.reserves)

    def _borrow_rate(self, b: PoolBalances) -> int:
        return self.rate_model.borrow_rate(b.cash, b.borrows, b.reserves)

    def _supply_rate(self, b: PoolBalances) -> int:
        return self.rate_model.supply_rate(
            b.cash, b.borrows, b.reserves, self.reserve_factor
        )

    def _compare(self, after: PoolBalances) -> dict[str, int]:
        before = self.balances
        return {
            "utilization_before": self._utilization(before),
            "utilization_after": self._utilization(after),
            "borrow_rate_before": self._borrow_rate(before),
            "borrow_rate_after": self._borrow_rate(after),
            "supply_rate_before": self._supply_rate(before),
            "supply_rate_after": self._supply_rate(after),
        }

    def simulate_borrow(self, amount: int) -> dict[str, int]:
        """Simulate the impact of an additional borrow on rates.

        The borrowed amount leaves the pool as cash and is added to
        borrows. Does NOT mutate state.

        Raises:
            ArithmeticUnderflow: If the pool holds less cash than ``amount``.
        """
        after = replace(
            self.balances,
            cash=checked_sub(self.balances.cash, amount),
            borrows=checked_add(self.balances.borrows, amount),
        )
        return self._compare(after)

    def simulate_repay(self, amount: int) -> dict[str, int]:
        """Simulate a repayment: cash comes back, borrows shrink.

        Does NOT mutate state.

        Raises:
            ArithmeticUnderflow: If ``amount`` exceeds outstanding borrows.
        """
        after = replace(
            self.balances,
            cash=checked_add(self.balances.cash, amount),
            borrows=checked_sub(self.balances.borrows, amount),
        )
        return self._compare(after)

    def simulate_withdrawal(self, amount: int) -> dict[str, int]:
        """Simulate a supplier withdrawal, which only reduces cash.

        Does NOT mutate state.

        Raises:
            ArithmeticUnderflow: If the pool holds less cash than ``amount``.
        """
        after = replace(self.balances, cash=checked_sub(self.balances.cash, amount))
        return self._compare(after)
