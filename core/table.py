from __future__ import annotations

from dataclasses import asdict
from html import escape
from typing import Any, Dict, List, Optional

import pandas as pd

from core.data import format_number
from core.schemas import Dataset, MonthRecord
from core.window import WindowCursor, month_label, window_slice

# Absent totals show zero while absent admin months show a marker.
# The two policies differ on purpose; tests pin both.
TOTALS_MISSING = "0"
ADMIN_MISSING = "No Data"

# (field on MetricPair, admin row label, totals row label)
METRICS = (
    ("income", "Income", "TOTAL INCOME"),
    ("active_partners", "Partners", "TOTAL PARTNERS"),
)


def _cell_value(record: Optional[MonthRecord], side: str, metric: str, missing: str) -> str:
    if record is None:
        return missing
    return format_number(getattr(getattr(record, side), metric))


def _cells(records: List[Optional[MonthRecord]], metric: str, missing: str) -> List[Dict[str, str]]:
    return [
        {
            "plan": _cell_value(record, "plan", metric, missing),
            "fact": _cell_value(record, "fact", metric, missing),
        }
        for record in records
    ]


def compute_table(dataset: Dataset, cursor: WindowCursor) -> Dict[str, Any]:
    """Bind the dataset to the 6-month window starting at ``cursor``.

    Returns a JSON-serializable payload: the window slots with their labels,
    the two totals rows and two rows per admin, each holding one plan/fact
    cell pair per slot.
    """
    slots = window_slice(cursor)
    window = [
        {
            "month": slot.month,
            "year": slot.year,
            "label": month_label(slot, "long"),
            "short_label": month_label(slot, "short"),
        }
        for slot in slots
    ]

    totals_records = [dataset.total(slot.month) for slot in slots]
    totals = [
        {"label": total_label, "metric": metric, "cells": _cells(totals_records, metric, TOTALS_MISSING)}
        for metric, _, total_label in METRICS
    ]

    admins = []
    for admin in dataset.rows:
        records = [admin.month(slot.month) for slot in slots]
        admins.append(
            {
                "id": admin.id,
                "admin_id": admin.admin_id,
                "name": admin.admin_name,
                "rows": [
                    {"label": label, "metric": metric, "cells": _cells(records, metric, ADMIN_MISSING)}
                    for metric, label, _ in METRICS
                ],
            }
        )

    return {"cursor": asdict(cursor), "window": window, "totals": totals, "admins": admins}


def _cell_tds(cells: List[Dict[str, str]], row_class: str) -> str:
    return "".join(
        f"<td class='plan {row_class}'>{escape(c['plan'])}</td><td class='fact {row_class}'>{escape(c['fact'])}</td>"
        for c in cells
    )


def render_month_strip_html(window: List[Dict[str, Any]]) -> str:
    slots = "".join(
        f"<div class='slot'><div class='name'>{escape(w['label'])}</div><div class='year'>{w['year']}</div></div>"
        for w in window
    )
    return f"<div class='month-strip'>{slots}</div>"


def render_table_html(table: Dict[str, Any]) -> str:
    """Render the payload from ``compute_table`` as an HTML table."""
    window = table["window"]
    head_months = "".join(
        f"<th colspan='2' class='month'>{escape(w['short_label'])} {w['year']}</th>" for w in window
    )
    head_sides = "<th class='plan'>Plan</th><th class='fact'>Fact</th>" * len(window)

    body: List[str] = []
    for i, row in enumerate(table["totals"]):
        lead = f"<td rowspan='{len(table['totals'])}' class='sticky'>Admin</td>" if i == 0 else ""
        body.append(
            f"<tr class='totals'>{lead}<td class='sticky'>{escape(row['label'])}</td>"
            f"{_cell_tds(row['cells'], 'totals')}</tr>"
        )
    for admin in table["admins"]:
        for i, row in enumerate(admin["rows"]):
            lead = (
                f"<td rowspan='{len(admin['rows'])}' class='sticky admin-name'>{escape(admin['name'])}</td>"
                if i == 0
                else ""
            )
            body.append(
                f"<tr class='admin'>{lead}<td class='sticky'>{escape(row['label'])}</td>"
                f"{_cell_tds(row['cells'], 'admin')}</tr>"
            )

    return (
        "<div class='table-scroll'><table class='admin-table'>"
        f"<thead><tr><th rowspan='2' colspan='2' class='sticky'></th>{head_months}</tr>"
        f"<tr>{head_sides}</tr></thead>"
        f"<tbody>{''.join(body)}</tbody></table></div>"
    )


def table_to_frame(table: Dict[str, Any]) -> pd.DataFrame:
    """Flatten the table payload for CSV export (one row per rendered table row)."""
    columns = ["Admin", "Metric"]
    for w in table["window"]:
        prefix = f"{w['short_label']} {w['year']}"
        columns += [f"{prefix} Plan", f"{prefix} Fact"]

    records = []
    for row in table["totals"]:
        records.append(["TOTAL", row["label"]] + [v for c in row["cells"] for v in (c["plan"], c["fact"])])
    for admin in table["admins"]:
        for row in admin["rows"]:
            records.append([admin["name"], row["label"]] + [v for c in row["cells"] for v in (c["plan"], c["fact"])])
    return pd.DataFrame(records, columns=columns)
