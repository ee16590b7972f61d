"""Core (UI-agnostic) dashboard logic.

This package contains:
- settings (environment / .env)
- payload fetching and parsing (requests -> pydantic)
- the 6-month window cursor and its navigation
- table building (JSON payload, HTML, pandas export)
- chart helpers (Altair -> Vega-Lite spec dict)
"""
