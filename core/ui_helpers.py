"""
core/ui_helpers.py
------------------
Shared backend request helpers for all Streamlit dashboards.
Ensures consistent error handling and caching.
"""

from __future__ import annotations

from urllib.parse import quote

import requests
import streamlit as st

from core.ui_config import BACKEND_URL


def backend_url(endpoint: str) -> str:
    """Join BACKEND_URL and an endpoint path."""
    return f"{BACKEND_URL.rstrip('/')}/{endpoint.lstrip('/')}"


class BackendError(Exception):
    """Raised for a failed backend call (transport, non-JSON or error body)."""


@st.cache_data(ttl=60)
def _get_json(endpoint: str, params: dict | None = None) -> dict | list:
    try:
        resp = requests.get(backend_url(endpoint), params=params, timeout=30)
    except requests.exceptions.RequestException as e:
        raise BackendError(f"Backend request failed: {e}") from e

    try:
        data = resp.json()
    except ValueError as e:
        raise BackendError(f"Backend returned HTTP {resp.status_code} without JSON.") from e

    if resp.status_code >= 400:
        message = data.get("error") if isinstance(data, dict) else None
        raise BackendError(message or f"Backend returned HTTP {resp.status_code}.")
    return data


def fetch_backend(endpoint: str, params: dict | None = None) -> dict | list:
    """
    Unified safe fetch for GET endpoints.
    Automatically prefixes BACKEND_URL and handles JSON decoding.

    The backend reports failures as `{"error": "..."}`; those are shown to
    the user and an empty dict is returned. Only successful responses are
    cached.
    """
    try:
        return _get_json(endpoint, params)
    except BackendError as e:
        st.error(str(e))
        return {}


def category_variables_endpoint(slug: str) -> str:
    """API path for the ranked variables of a category slug."""
    return f"api/v1/variable-categories/{quote(slug)}/variables"
