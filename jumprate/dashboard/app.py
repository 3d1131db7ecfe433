"""Jump Rate Model Explorer: Main Streamlit entry point."""

import logging

import streamlit as st

from jumprate.dashboard.components.sidebar import render_sidebar
from jumprate.dashboard.tabs.rates import render_rates
from jumprate.data.provider_factory import create_provider, resolve_steps_per_year


def main() -> None:
    st.set_page_config(
        page_title="Jump Rate Model Explorer",
        page_icon="📈",
        layout="wide",
    )
    # Entry point only; library modules never configure handlers
    logging.basicConfig(level=logging.INFO)

    st.title("Jump Rate Model Explorer")
    st.caption("Kinked utilization-to-rate curves for lending pools")

    provider = create_provider()
    params = render_sidebar(provider)
    steps_per_year = resolve_steps_per_year()
    st.sidebar.caption(f"Steps per year: {steps_per_year:,}")

    render_rates(
        params.market,
        params.params,
        params.snapshot,
        steps_per_year,
    )


if __name__ == "__main__":
    main()
