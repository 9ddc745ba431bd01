# ui/components/backend_status.py
"""
Centralized backend health indicator for Streamlit dashboards.

Features
--------
- Reads BACKEND_URL from core.ui_config.
- Validates the /health payload with backend.schemas.HealthSchema.
- Cached via st.cache_data; never crashes the UI when the backend is down.
"""

from __future__ import annotations

from typing import Any, Dict

import requests
import streamlit as st

from backend.schemas import HealthSchema
from core.ui_config import BACKEND_URL

CACHE_TTL = 60  # seconds

STATUS_COLORS = {
    "ok": "green",
    "healthy": "green",
    "degraded": "orange",
    "error": "red",
    "offline": "red",
}


def get_status_color(status: str) -> str:
    """Public helper for coloring elements dynamically by status."""
    return STATUS_COLORS.get((status or "").lower(), "gray")


@st.cache_data(ttl=CACHE_TTL)
def get_backend_status() -> Dict[str, Any]:
    """
    Fetch the backend /health endpoint with structured fallback.

    Returns
    -------
    dict
        Validated health report plus `latency_ms`, or a structured error dict.
    """
    url = f"{BACKEND_URL.rstrip('/')}/health"
    try:
        resp = requests.get(url, timeout=5)
    except requests.exceptions.RequestException as e:
        return {
            "status": "offline",
            "message": f"Backend unreachable at {BACKEND_URL} ({e.__class__.__name__})",
        }

    if resp.status_code != 200:
        return {"status": "error", "message": f"HTTP {resp.status_code}: {resp.text[:100]}"}

    try:
        health = HealthSchema(**resp.json()).model_dump()
    except ValueError as e:
        return {"status": "error", "message": f"Unexpected health payload: {e}"}

    health["latency_ms"] = round(resp.elapsed.total_seconds() * 1000, 2)
    return health


def render_status_bar(expanded: bool = False):
    """
    Render a compact backend health summary in the sidebar.

    Parameters
    ----------
    expanded : bool
        If True, show detailed diagnostics; else compact mode.
    """
    st.sidebar.markdown("---")
    st.sidebar.caption("### Backend Status")

    health = get_backend_status()
    status = health.get("status", "unknown")

    st.sidebar.markdown(
        f"<span style='color:{get_status_color(status)}; font-weight:600;'>● {status.upper()}</span>",
        unsafe_allow_html=True,
    )

    msg = health.get("message")
    if msg:
        st.sidebar.caption(msg)

    st.sidebar.caption("Database: connected" if health.get("database_connected") else "Database: unavailable")

    if expanded:
        with st.sidebar.expander("Advanced diagnostics", expanded=False):
            if health.get("latency_ms"):
                st.write(f"Latency: {health['latency_ms']} ms")
            if health.get("cpu_load") is not None:
                st.write(f"CPU load: {health['cpu_load']}%")
            if health.get("memory_usage") is not None:
                st.write(f"Memory: {health['memory_usage']} MB")
            if health.get("version"):
                st.write(f"Version: {health['version']}")
            st.json(health)
