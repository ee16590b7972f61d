import logging

import streamlit as st

from core.charts import plan_fact_chart
from core.config import load_settings
from core.data import FetchState, apply_locale, load_dataset_state
from core.table import compute_table, render_month_strip_html, render_table_html, table_to_frame
from core.window import WindowCursor, advance

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

CURSOR_KEY = "cursor"
FETCH_STATE_KEY = "fetch_state"


# ---------- UI / layout helpers ----------
def inject_base_styles():
    st.markdown(
        """
        <style>
        .month-strip {display: flex;gap: 12px;justify-content: center;flex-wrap: wrap;}
        .month-strip .slot {text-align: center;padding: 6px 14px;background: #f3f4f6;border-radius: 6px;}
        .month-strip .slot .name {font-weight: 600;color: #111827;}
        .month-strip .slot .year {font-size: 0.85rem;color: #6b7280;}
        .table-scroll {overflow-x: auto;border-radius: 8px;box-shadow: 0 1px 3px rgba(0,0,0,0.08);margin-bottom: 12px;}
        .admin-table {min-width: 100%;border-collapse: collapse;background: #ffffff;font-size: 0.9rem;}
        .admin-table th, .admin-table td {border-bottom: 1px solid #e5e7eb;padding: 6px 12px;text-align: center;white-space: nowrap;}
        .admin-table thead {background: #f3f4f6;}
        .admin-table .sticky {position: sticky;left: 0;background: inherit;text-align: left;z-index: 1;}
        .admin-table th.plan, .admin-table td.plan.admin {background: #eff6ff;}
        .admin-table th.fact, .admin-table td.fact.admin {background: #f0fdf4;}
        .admin-table td.plan.totals {background: #dbeafe;}
        .admin-table td.fact.totals {background: #dcfce7;}
        .admin-table tr.totals {background: #f9fafb;font-weight: 600;}
        .admin-table .admin-name {font-weight: 500;}
        </style>
        """,
        unsafe_allow_html=True,
    )


@st.cache_resource(show_spinner=False)
def configure_locale(name: str) -> bool:
    # setlocale is process-wide; apply it once rather than on every rerun.
    return apply_locale(name)


def shift_window(direction: str):
    # One assignment from one snapshot of the prior cursor.
    st.session_state[CURSOR_KEY] = advance(st.session_state[CURSOR_KEY], direction)


def ensure_session_state() -> FetchState:
    if CURSOR_KEY not in st.session_state:
        st.session_state[CURSOR_KEY] = WindowCursor.today()
    if FETCH_STATE_KEY not in st.session_state:
        with st.spinner("Loading..."):
            st.session_state[FETCH_STATE_KEY] = load_dataset_state(
                settings.data_url, timeout=settings.request_timeout
            )
    return st.session_state[FETCH_STATE_KEY]


# ---------- UI setup ----------
settings = load_settings()

st.set_page_config(page_title="Admin Performance Dashboard", layout="wide")
configure_locale(settings.locale)
inject_base_styles()

fetch_state = ensure_session_state()
if fetch_state.status == "error":
    st.error(f"Error: {fetch_state.error}")
    st.stop()
if fetch_state.dataset is None:
    st.info("No data available")
    st.stop()

dataset = fetch_state.dataset
cursor: WindowCursor = st.session_state[CURSOR_KEY]
table = compute_table(dataset, cursor)

st.title("Admin Performance Dashboard")

nav_cols = st.columns([1, 6, 1])
with nav_cols[0]:
    st.button("← Previous", key="prev_month", on_click=shift_window, args=("backward",))
with nav_cols[1]:
    st.markdown(render_month_strip_html(table["window"]), unsafe_allow_html=True)
with nav_cols[2]:
    st.button("Next →", key="next_month", on_click=shift_window, args=("forward",))

st.markdown(render_table_html(table), unsafe_allow_html=True)

first, last = table["window"][0], table["window"][-1]
st.download_button(
    "Export CSV",
    data=table_to_frame(table).to_csv(index=False).encode("utf-8"),
    file_name=f"admin_performance_{first['year']}_{first['month'] + 1:02d}-{last['year']}_{last['month'] + 1:02d}.csv",
    mime="text/csv",
)

st.subheader("Totals: plan vs fact")
metric_label = st.radio("Metric", ["Income", "Active Partners"], horizontal=True, key="chart_metric")
metric = "income" if metric_label == "Income" else "active_partners"
st.altair_chart(plan_fact_chart(dataset, cursor, metric=metric), use_container_width=True)
