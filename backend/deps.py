"""
backend/deps.py
---------------
FastAPI dependencies. The database client lives on `app.state` (opened by
the lifespan in backend.main); each request gets its own session.
"""

from __future__ import annotations

from typing import Iterator

from fastapi import Request
from sqlalchemy.orm import Session

from core.settings import Settings
from database.db_setup import Database


def get_database(request: Request) -> Database:
    return request.app.state.db


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_session(request: Request) -> Iterator[Session]:
    """Request-scoped session, closed when the request finishes."""
    yield from get_database(request).sessions()
