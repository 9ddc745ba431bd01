"""
backend/schemas.py
------------------
Typed records validated at the storage boundary.

ORM rows are converted into these models before anything is serialized, so
the JSON shape of every endpoint is fixed here rather than by whatever
columns the ORM happens to load.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class CategoryRef(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class UnitRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    abbreviated_name: Optional[str] = None


class VariableRef(BaseModel):
    """Minimal variable shape embedded in correlation records."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    image_url: Optional[str] = None


class VariableRecord(BaseModel):
    """One row of a ranked variable list."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    variable_category_id: int
    is_public: Optional[bool] = None
    image_url: Optional[str] = None
    number_of_user_variables: Optional[int] = None
    number_of_measurements: Optional[int] = None
    number_of_raw_measurements_with_tags_joins_children: Optional[int] = None
    number_of_aggregate_correlations_as_cause: Optional[int] = None
    number_of_aggregate_correlations_as_effect: Optional[int] = None
    deleted_at: Optional[datetime] = None
    # populated on the global listing only
    variable_categories: Optional[CategoryRef] = None


class VariableDetail(VariableRecord):
    description: Optional[str] = None
    default_unit_id: Optional[int] = None
    unit: Optional[UnitRecord] = None


class CorrelationRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    cause_variable_id: int
    effect_variable_id: int
    forward_pearson_correlation_coefficient: Optional[float] = None
    aggregate_qm_score: Optional[float] = None
    number_of_users: Optional[int] = None
    # the variable on the other side of the relationship
    variable: Optional[VariableRef] = None


class CategoryRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    slug: str = ""
    image_url: Optional[str] = None
    number_of_variables: Optional[int] = None
    number_of_user_variables: Optional[int] = None
    number_of_measurements: Optional[int] = None


class HealthSchema(BaseModel):
    """Structured schema for the /health endpoint response."""
    status: str
    message: Optional[str] = None
    version: Optional[str] = None
    database_connected: bool = False
    cpu_load: Optional[float] = None
    memory_usage: Optional[float] = None
    uptime_sec: Optional[float] = None
    system: Optional[str] = None
    release: Optional[str] = None


class ErrorResponse(BaseModel):
    error: str


# OpenAPI `responses=` maps for routes that fail with `{"error": ...}`
FETCH_ERRORS = {500: {"model": ErrorResponse}}
LOOKUP_ERRORS = {404: {"model": ErrorResponse}, **FETCH_ERRORS}


__all__ = [
    "CategoryRef",
    "UnitRecord",
    "VariableRef",
    "VariableRecord",
    "VariableDetail",
    "CorrelationRecord",
    "CategoryRecord",
    "HealthSchema",
    "ErrorResponse",
    "FETCH_ERRORS",
    "LOOKUP_ERRORS",
]
