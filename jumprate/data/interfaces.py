"""Abstract market data provider interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class MarketParams:
    """Annualized rate model parameters for a market, as mantissas."""

    base_rate_per_year: int
    slope_per_year: int
    jump_slope_per_year: int
    kink: int
    reserve_factor: int


@dataclass(frozen=True)
class MarketSnapshot:
    """Current balances of a market, in its native unit."""

    cash: int  # Unborrowed underlying held by the pool
    borrows: int  # Outstanding borrows
    reserves: int  # Protocol reserves
    decimals: int = 18  # Native units per whole token, as a power of ten

    @classmethod
    def from_whole_units(
        cls, cash: int, borrows: int, reserves: int, decimals: int = 18
    ) -> "MarketSnapshot":
        """Build a snapshot from whole-token amounts."""
        unit = 10**decimals
        return cls(
            cash=cash * unit,
            borrows=borrows * unit,
            reserves=reserves * unit,
            decimals=decimals,
        )

    def to_whole_units(self) -> tuple[int, int, int]:
        """Return (cash, borrows, reserves) truncated to whole tokens."""
        unit = 10**self.decimals
        return self.cash // unit, self.borrows // unit, self.reserves // unit


class MarketDataProvider(ABC):
    """Abstract interface for market parameters and balances."""

    @abstractmethod
    def markets(self) -> list[str]:
        """List the markets this provider knows about."""

    @abstractmethod
    def get_market_params(self, market: str) -> MarketParams:
        """Get annualized rate model parameters for a market."""

    @abstractmethod
    def get_market_snapshot(self, market: str) -> MarketSnapshot:
        """Get current balances for a market."""
