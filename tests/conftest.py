"""Shared fixtures: in-memory SQLite database and API client."""

from __future__ import annotations

import os
import sys

import pytest

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from fastapi.testclient import TestClient

from backend.main import create_app
from core.settings import Settings
from database.db_setup import Database


@pytest.fixture
def settings():
    return Settings(_env_file=None, DATABASE_URL="sqlite://")


@pytest.fixture
def db(settings):
    database = Database(settings=settings).open()
    database.create_all()
    yield database
    database.close()


@pytest.fixture
def session(db):
    with db.session() as s:
        yield s


@pytest.fixture
def client(settings, db):
    app = create_app(settings=settings, database=db)
    with TestClient(app) as c:
        yield c
