"""Static data provider with hardcoded jump rate market parameters."""

from jumprate.data.constants import DAI, ETH, USDC
from jumprate.data.interfaces import MarketDataProvider, MarketParams, MarketSnapshot

# --- Annualized parameters, 1e18 mantissas ---

_MARKET_PARAMS: dict[str, MarketParams] = {
    USDC: MarketParams(
        base_rate_per_year=0,
        slope_per_year=40_000_000_000_000_000,  # 4%
        jump_slope_per_year=1_090_000_000_000_000_000,  # 109%
        kink=800_000_000_000_000_000,  # 80%
        reserve_factor=75_000_000_000_000_000,  # 7.5%
    ),
    DAI: MarketParams(
        base_rate_per_year=0,
        slope_per_year=50_000_000_000_000_000,  # 5%
        jump_slope_per_year=1_090_000_000_000_000_000,  # 109%
        kink=800_000_000_000_000_000,  # 80%
        reserve_factor=150_000_000_000_000_000,  # 15%
    ),
    ETH: MarketParams(
        base_rate_per_year=20_000_000_000_000_000,  # 2%
        slope_per_year=180_000_000_000_000_000,  # 18%
        jump_slope_per_year=4_000_000_000_000_000_000,  # 400%
        kink=800_000_000_000_000_000,  # 80%
        reserve_factor=200_000_000_000_000_000,  # 20%
    ),
}

# Representative balances (USDC has 6 decimals, DAI and ETH 18)
_MARKET_SNAPSHOTS: dict[str, MarketSnapshot] = {
    USDC: MarketSnapshot(
        cash=120_000_000 * 10**6,
        borrows=380_000_000 * 10**6,
        reserves=9_500_000 * 10**6,
        decimals=6,
    ),
    DAI: MarketSnapshot(
        cash=40_000_000 * 10**18,
        borrows=210_000_000 * 10**18,
        reserves=6_000_000 * 10**18,
    ),
    ETH: MarketSnapshot(
        cash=900_000 * 10**18,
        borrows=70_000 * 10**18,
        reserves=4_000 * 10**18,
    ),
}


class StaticDataProvider(MarketDataProvider):
    """Data provider using hardcoded market presets."""

    def markets(self) -> list[str]:
        return list(_MARKET_PARAMS)

    def get_market_params(self, market: str) -> MarketParams:
        return _MARKET_PARAMS[market]

    def get_market_snapshot(self, market: str) -> MarketSnapshot:
        return _MARKET_SNAPSHOTS[market]
