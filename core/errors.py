"""
core/errors.py
--------------
Exceptions raised by the query layer and mapped to JSON error bodies by the
backend. `public_message` is the only text that reaches the client.
"""

from __future__ import annotations


class ExplorerError(Exception):
    """Base class for errors surfaced through the HTTP API."""

    status_code: int = 500
    public_message: str = "Internal server error"

    def __init__(self, detail: str | None = None):
        super().__init__(detail or self.public_message)
        self.detail = detail


class CategoryNotFound(ExplorerError):
    status_code = 404
    public_message = "Category not found"


class VariableNotFound(ExplorerError):
    status_code = 404
    public_message = "Variable not found"


class RetrievalFailure(ExplorerError):
    """Any storage-layer error (connection, timeout, bad query)."""

    status_code = 500
    public_message = "Failed to fetch variables"

    def __init__(self, detail: str | None = None, public_message: str | None = None):
        super().__init__(detail)
        if public_message:
            self.public_message = public_message
