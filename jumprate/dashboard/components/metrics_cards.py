"""Percent-formatted metric cards for rates and utilization."""

import streamlit as st


def format_pct(value: float, digits: int = 2, signed: bool = False) -> str:
    """Format a fraction as a percentage, e.g. 0.0525 -> "5.25%"."""
    sign = "+" if signed else ""
    return f"{value*100:{sign}.{digits}f}%"


def rate_metrics(
    values: dict[str, float],
    baseline: dict[str, float] | None = None,
    digits: int = 2,
) -> None:
    """Display one metric per entry, as percentages.

    Args:
        values: Label to fraction (utilization or APR).
        baseline: Optional label to previous fraction; shown as a delta.
        digits: Decimal places.
    """
    cols = st.columns(len(values))
    for col, (label, value) in zip(cols, values.items()):
        delta = None
        if baseline is not None and label in baseline:
            delta = format_pct(value - baseline[label], digits, signed=True)
        col.metric(label=label, value=format_pct(value, digits), delta=delta)
