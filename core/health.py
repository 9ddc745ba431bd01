"""
core/health.py
--------------
System health diagnostics for the DFDA Explorer backend.

Purpose
-------
- Used by the FastAPI `/health` endpoint and the Streamlit status bar.
- Validates database connectivity with a `SELECT 1` round trip.
- Reports uptime, version, CPU/memory usage.
- Returns a JSON-safe dict ready for serialization.
"""

from __future__ import annotations

import logging
import platform
import time
from typing import Any, Dict, Optional

import psutil

from core.metadata import __version__

logger = logging.getLogger(__name__)

# Cache the process start time for uptime calculation
START_TIME = time.time()


def system_health(database: Optional[Any] = None, version: Optional[str] = None) -> Dict[str, Any]:
    """
    Return structured backend health diagnostics.

    Parameters
    ----------
    database : database.db_setup.Database, optional
        Storage client to probe. When missing or closed the report is
        "degraded".
    version : str, optional
        Version string to report (defaults to the package version).

    Returns
    -------
    dict
        JSON-safe health report compatible with backend.schemas.HealthSchema.
    """
    status = "ok"
    message = "Backend operational."
    database_connected = False

    # --- Database connectivity test ---
    if database is None or not database.is_open:
        status = "degraded"
        message = "Database client not initialised."
    else:
        try:
            database_connected = database.ping()
        except Exception as e:  # noqa: BLE001 - any driver error means degraded
            logger.warning("Database health check failed: %s", e)
            status = "degraded"
            message = f"Database check failed: {e.__class__.__name__}"

    # --- System metrics ---
    try:
        cpu_load = psutil.cpu_percent(interval=None)
        memory_usage = round(psutil.virtual_memory().used / (1024 * 1024), 2)
    except Exception:  # noqa: BLE001
        cpu_load = None
        memory_usage = None

    return {
        "status": status,
        "message": message,
        "version": version or __version__,
        "database_connected": database_connected,
        "cpu_load": cpu_load,
        "memory_usage": memory_usage,
        "uptime_sec": round(time.time() - START_TIME, 2),
        "system": platform.system(),
        "release": platform.release(),
    }
