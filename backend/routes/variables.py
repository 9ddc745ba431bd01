"""
Variables API
-------------
GET /api/v1/variables          -> globally ranked public variables
GET /api/v1/variables/{query}  -> one variable (by id or slug) with its
                                  strongest aggregate correlations
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from backend.deps import get_app_settings, get_session
from backend.schemas import (
    FETCH_ERRORS,
    LOOKUP_ERRORS,
    CategoryRef,
    CorrelationRecord,
    VariableDetail,
    VariableRecord,
    VariableRef,
)
from core.errors import ExplorerError, RetrievalFailure
from core.serialization import normalize
from core.settings import Settings
from database.queries import fetch_correlations, fetch_global_variables, find_variable


router = APIRouter(prefix="/api/v1/variables", tags=["variables"])


def _correlation(row, role: str) -> CorrelationRecord:
    record = CorrelationRecord.model_validate(row)
    counterpart = row.effect_variable if role == "cause" else row.cause_variable
    if counterpart is not None:
        record.variable = VariableRef.model_validate(counterpart)
    return record


@router.get("", responses=FETCH_ERRORS)
def list_variables(
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_app_settings),
) -> Dict[str, Any]:
    """
    Public variables from every non-boring category.

    Ordered by user count in the database, capped, then re-sorted by total
    aggregate correlations. Each item embeds its category (`id`, `name`).
    """
    try:
        rows = fetch_global_variables(session, limit=settings.GLOBAL_VARIABLE_LIMIT)
        variables = []
        for row in rows:
            record = VariableRecord.model_validate(row)
            record.variable_categories = CategoryRef.model_validate(row.category)
            variables.append(record)
    except ExplorerError:
        raise
    except Exception as e:  # noqa: BLE001
        raise RetrievalFailure(str(e)) from e

    return {"variables": normalize(variables)}


@router.get("/{query:path}", responses=LOOKUP_ERRORS)
def get_variable(
    query: str,
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_app_settings),
) -> Dict[str, Any]:
    """
    Variable detail.

    `query` is either a numeric id or a slug ("Overall_Mood"); slugs may
    contain "/" once percent-decoded. Soft-deleted variables are never
    returned.
    """
    try:
        row = find_variable(session, query)
        variable = VariableDetail.model_validate(row)
        variable.variable_categories = CategoryRef.model_validate(row.category)

        limit = settings.CORRELATION_LIMIT
        as_cause = fetch_correlations(session, row.id, role="cause", limit=limit)
        as_effect = fetch_correlations(session, row.id, role="effect", limit=limit)
        payload = {
            "variable": variable,
            "cause_correlations": [_correlation(c, "cause") for c in as_cause],
            "effect_correlations": [_correlation(c, "effect") for c in as_effect],
        }
    except ExplorerError:
        raise
    except Exception as e:  # noqa: BLE001
        raise RetrievalFailure(str(e), public_message="Failed to fetch variable") from e

    return normalize(payload)
