"""Tests for core/ui_helpers.py (requests mocked, no backend needed)."""

import pytest
import requests

from core import ui_helpers


class FakeResponse:

    def __init__(self, status_code, payload):
        self.status_code = status_code
        self._payload = payload

    def json(self):
        return self._payload


@pytest.fixture
def errors(monkeypatch):
    shown = []
    monkeypatch.setattr(ui_helpers.st, "error", shown.append)
    ui_helpers._get_json.clear()
    yield shown
    ui_helpers._get_json.clear()


def test_failure_is_not_cached(monkeypatch, errors):
    def offline(url, params=None, timeout=None):
        raise requests.exceptions.ConnectionError("connection refused")

    monkeypatch.setattr(ui_helpers.requests, "get", offline)
    assert ui_helpers.fetch_backend("api/v1/variables") == {}
    assert "connection refused" in errors[0]

    monkeypatch.setattr(
        ui_helpers.requests, "get", lambda url, params=None, timeout=None: FakeResponse(200, {"variables": [1]})
    )
    assert ui_helpers.fetch_backend("api/v1/variables") == {"variables": [1]}


def test_success_is_cached(monkeypatch, errors):
    calls = []

    def fake_get(url, params=None, timeout=None):
        calls.append(url)
        return FakeResponse(200, {"categories": []})

    monkeypatch.setattr(ui_helpers.requests, "get", fake_get)
    ui_helpers.fetch_backend("api/v1/variable-categories")
    ui_helpers.fetch_backend("api/v1/variable-categories")

    assert len(calls) == 1
    assert errors == []


def test_error_body_is_shown(monkeypatch, errors):
    monkeypatch.setattr(
        ui_helpers.requests, "get", lambda url, params=None, timeout=None: FakeResponse(404, {"error": "Category not found"})
    )

    assert ui_helpers.fetch_backend("api/v1/variable-categories/Nope/variables") == {}
    assert errors == ["Category not found"]


def test_category_endpoint_encodes_slug():
    assert ui_helpers.category_variables_endpoint("C#") == "api/v1/variable-categories/C%23/variables"
