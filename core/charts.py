from __future__ import annotations

from typing import Any, Dict, Literal

import altair as alt
import pandas as pd

from core.schemas import Dataset
from core.window import WindowCursor, month_label, window_slice

alt.data_transformers.disable_max_rows()

METRIC_TITLES = {"income": "Income", "active_partners": "Active Partners"}


def totals_frame(dataset: Dataset, cursor: WindowCursor) -> pd.DataFrame:
    """Long-form plan/fact totals for the visible window; absent months count as 0."""
    rows = []
    for order, slot in enumerate(window_slice(cursor)):
        record = dataset.total(slot.month)
        for side in ("plan", "fact"):
            pair = getattr(record, side) if record is not None else None
            rows.append(
                {
                    "order": order,
                    "period": f"{month_label(slot, 'short')} {slot.year}",
                    "side": side.capitalize(),
                    "income": float(pair.income) if pair is not None else 0.0,
                    "active_partners": float(pair.active_partners) if pair is not None else 0.0,
                }
            )
    return pd.DataFrame(rows, columns=["order", "period", "side", "income", "active_partners"])


def plan_fact_chart(
    dataset: Dataset,
    cursor: WindowCursor,
    metric: Literal["income", "active_partners"] = "income",
) -> alt.Chart:
    if metric not in METRIC_TITLES:
        raise ValueError(f"Unknown metric: {metric!r}")
    df = totals_frame(dataset, cursor)
    periods = df.sort_values("order")["period"].drop_duplicates().tolist()
    return (
        alt.Chart(df)
        .mark_bar()
        .encode(
            x=alt.X("period:N", title=None, sort=periods),
            xOffset=alt.XOffset("side:N", sort=["Plan", "Fact"]),
            y=alt.Y(f"{metric}:Q", title=METRIC_TITLES[metric], axis=alt.Axis(format=",.0f")),
            color=alt.Color("side:N", title=None, scale=alt.Scale(domain=["Plan", "Fact"], range=["#3b82f6", "#22c55e"])),
            tooltip=["period", "side", alt.Tooltip(f"{metric}:Q", format=",.0f")],
        )
        .properties(height=260)
    )


def to_vega_spec(chart: alt.Chart) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()
