"""Interest Rates page: rate curve, current rates and sensitivity."""

import pandas as pd
import streamlit as st

from jumprate.dashboard.components.charts import rate_curve_chart
from jumprate.dashboard.components.metrics_cards import format_pct, rate_metrics
from jumprate.data.constants import SCALE
from jumprate.data.interfaces import MarketParams, MarketSnapshot
from jumprate.protocol.fixed_point import from_mantissa
from jumprate.protocol.interest_rate import InterestRateModel
from jumprate.protocol.pool import PoolBalances, PoolModel


def _apr(rate_per_step: int, model: InterestRateModel) -> float:
    return from_mantissa(rate_per_step) * model.steps_per_year


def render_rates(
    market: str,
    params: MarketParams,
    snapshot: MarketSnapshot,
    steps_per_year: int,
) -> None:
    """Render the interest rates page."""
    st.header(f"{market} Interest Rate Curve")

    model = InterestRateModel(
        params.base_rate_per_year,
        params.slope_per_year,
        params.jump_slope_per_year,
        params.kink,
        steps_per_year=steps_per_year,
    )
    pool = PoolModel(
        PoolBalances.from_market_snapshot(snapshot),
        model,
        reserve_factor=params.reserve_factor,
    )
    util = from_mantissa(pool.utilization)

    rate_metrics(
        {
            "Utilization": util,
            "Borrow APR": _apr(pool.borrow_rate, model),
            "Supply APR": _apr(pool.supply_rate, model),
        }
    )

    df = model.rate_curve(reserve_factor=params.reserve_factor)
    fig = rate_curve_chart(
        df,
        current_utilization=util,
        kink=from_mantissa(params.kink),
        title=f"{market} Rate Curve",
    )
    st.plotly_chart(fig, use_container_width=True)

    with st.expander("Per-step parameters"):
        st.json(
            {
                "base_rate_per_step": str(model.base_rate_per_step),
                "slope_per_step": str(model.slope_per_step),
                "jump_slope_per_step": str(model.jump_slope_per_step),
                "kink": str(model.kink),
                "steps_per_year": model.steps_per_year,
            }
        )

    # Rate sensitivity table
    st.divider()
    st.subheader("Rate Sensitivity")

    utilizations = sorted({SCALE * pct // 100 for pct in (20, 40, 60, 80, 90, 95, 100)} | {model.kink})
    rows = []
    for u in utilizations:
        borrow = model.borrow_rate(SCALE - u, u, 0)
        supply = model.supply_rate(SCALE - u, u, 0, params.reserve_factor)
        rows.append(
            {
                "Utilization": format_pct(from_mantissa(u), 1),
                "Borrow APR": format_pct(_apr(borrow, model)),
                "Supply APR": format_pct(_apr(supply, model)),
            }
        )
    st.table(pd.DataFrame(rows))

    # Borrow impact simulation
    st.divider()
    st.subheader("Borrow Impact Simulation")

    share = st.slider(
        "Additional borrow (% of available cash)",
        min_value=0,
        max_value=100,
        value=25,
        step=5,
    )

    if share > 0:
        impact = pool.simulate_borrow(snapshot.cash * share // 100)
        rate_metrics(
            {
                "Utilization": from_mantissa(impact["utilization_after"]),
                "Borrow APR": _apr(impact["borrow_rate_after"], model),
            },
            baseline={
                "Utilization": from_mantissa(impact["utilization_before"]),
                "Borrow APR": _apr(impact["borrow_rate_before"], model),
            },
        )
