"""Sidebar parameter controls."""

from dataclasses import dataclass

import streamlit as st

from jumprate.data.interfaces import MarketDataProvider, MarketParams, MarketSnapshot
from jumprate.protocol.fixed_point import from_mantissa, to_mantissa


@dataclass
class SidebarParams:
    """User-controlled parameters from the sidebar."""

    market: str
    params: MarketParams
    snapshot: MarketSnapshot


def _percent_slider(label: str, default: int, max_value: float, step: float) -> int:
    """Slider in percent, returned as a mantissa."""
    value = st.sidebar.slider(
        label,
        min_value=0.0,
        max_value=max_value,
        value=round(from_mantissa(default) * 100, 2),
        step=step,
    )
    return to_mantissa(str(round(value / 100, 6)))


def balances_are_usable(snapshot: MarketSnapshot) -> bool:
    """True when reserves leave a positive pool for utilization to divide by."""
    return snapshot.reserves < snapshot.cash + snapshot.borrows


def _balance_input(label: str, default: int, market: str) -> int:
    """Whole-token number input; keyed per market so presets reset it."""
    return int(
        st.sidebar.number_input(
            label,
            min_value=0,
            value=default,
            step=max(1, default // 100),
            key=f"{market}_{label}",
        )
    )


def render_sidebar(provider: MarketDataProvider) -> SidebarParams:
    """Render sidebar controls and return selected parameters."""
    st.sidebar.header("Market")
    market = st.sidebar.selectbox("Preset", provider.markets())
    preset = provider.get_market_params(market)
    preset_snapshot = provider.get_market_snapshot(market)

    st.sidebar.header("Annual Parameters")
    params = MarketParams(
        base_rate_per_year=_percent_slider("Base Rate (%)", preset.base_rate_per_year, 20.0, 0.1),
        slope_per_year=_percent_slider("Slope (%)", preset.slope_per_year, 100.0, 0.5),
        jump_slope_per_year=_percent_slider(
            "Jump Slope (%)", preset.jump_slope_per_year, 1000.0, 5.0
        ),
        kink=_percent_slider("Kink (%)", preset.kink, 100.0, 1.0),
        reserve_factor=_percent_slider("Reserve Factor (%)", preset.reserve_factor, 100.0, 0.5),
    )
    st.sidebar.caption(
        "Annual values are divided by the steps-per-year constant when the "
        "model is built; the kink and reserve factor are not."
    )

    st.sidebar.header("Pool Balances")
    cash, borrows, reserves = preset_snapshot.to_whole_units()
    snapshot = MarketSnapshot.from_whole_units(
        cash=_balance_input(f"Cash ({market})", cash, market),
        borrows=_balance_input(f"Borrows ({market})", borrows, market),
        reserves=_balance_input(f"Reserves ({market})", reserves, market),
        decimals=preset_snapshot.decimals,
    )
    if not balances_are_usable(snapshot):
        st.sidebar.error("Reserves must stay below cash + borrows; using preset balances")
        snapshot = preset_snapshot

    return SidebarParams(market=market, params=params, snapshot=snapshot)
