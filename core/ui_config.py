"""
core/ui_config.py
-----------------
Central configuration hub for all Streamlit UI pages.

- Reads the backend URL from settings (env / .env).
- Provides global constants for API access.
- Includes lightweight health check.
"""

from __future__ import annotations

import requests

from core.settings import get_settings

# ---------------------------------------------------------------------------
# Backend configuration
# ---------------------------------------------------------------------------

BACKEND_URL: str = get_settings().BACKEND_URL.rstrip("/")

# ---------------------------------------------------------------------------
# Connectivity check
# ---------------------------------------------------------------------------

def check_backend_health() -> dict:
    """Ping the backend /health endpoint and return its JSON."""
    try:
        resp = requests.get(f"{BACKEND_URL}/health", timeout=4)
        return resp.json()
    except requests.exceptions.RequestException as e:
        return {"status": "offline", "message": str(e)}
    except ValueError as e:
        return {"status": "error", "message": f"Invalid JSON from backend: {e}"}
