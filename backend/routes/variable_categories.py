"""
Variable Categories API
-----------------------
GET /api/v1/variable-categories                   -> listable categories
GET /api/v1/variable-categories/{slug}/variables  -> ranked variables of one category

Slugs use the legacy underscore scheme (see core.slugs). The path segment
is percent-decoded by the framework before it reaches the resolver.
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from backend.deps import get_app_settings, get_session
from backend.schemas import FETCH_ERRORS, LOOKUP_ERRORS, CategoryRecord, VariableRecord
from core.errors import ExplorerError, RetrievalFailure
from core.serialization import normalize
from core.settings import Settings
from core.slugs import name_to_slug
from database.queries import fetch_category_variables, list_interesting_categories


router = APIRouter(prefix="/api/v1/variable-categories", tags=["variable-categories"])


def category_record(row) -> CategoryRecord:
    record = CategoryRecord.model_validate(row)
    record.slug = name_to_slug(row.name)
    return record


@router.get("", responses=FETCH_ERRORS)
def list_categories(session: Session = Depends(get_session)) -> Dict[str, Any]:
    """Active, non-boring categories, most variables first."""
    try:
        categories = [category_record(row) for row in list_interesting_categories(session)]
    except ExplorerError:
        raise
    except Exception as e:  # noqa: BLE001
        raise RetrievalFailure(str(e), public_message="Failed to fetch categories") from e

    return {"categories": normalize(categories)}


@router.get("/{slug:path}/variables", responses=LOOKUP_ERRORS)
def list_category_variables(
    slug: str,
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_app_settings),
) -> Dict[str, Any]:
    """
    Ranked public variables of the category addressed by `slug`.

    404 `{"error": "Category not found"}` when no active category matches
    the decoded name exactly.
    """
    try:
        rows = fetch_category_variables(session, slug, limit=settings.CATEGORY_VARIABLE_LIMIT)
        variables = [VariableRecord.model_validate(row) for row in rows]
    except ExplorerError:
        raise
    except Exception as e:  # noqa: BLE001
        raise RetrievalFailure(str(e)) from e

    return {"variables": normalize(variables)}
