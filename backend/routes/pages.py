"""
Server-rendered browse pages
----------------------------
GET /variable-categories          -> grid of listable categories
GET /variable-categories/{slug}   -> ranked variables of one category
"""

from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.orm import Session

from backend.deps import get_app_settings, get_session
from backend.routes.variable_categories import category_record
from core.errors import CategoryNotFound
from core.ranking import total_correlations
from core.settings import Settings
from core.slugs import slug_to_name
from database.queries import fetch_category_variables, list_interesting_categories


TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter(tags=["pages"])


@router.get("/variable-categories", response_class=HTMLResponse)
def variable_categories_page(request: Request, session: Session = Depends(get_session)) -> HTMLResponse:
    categories = [category_record(row) for row in list_interesting_categories(session)]
    return templates.TemplateResponse(
        request,
        "variable_categories.html",
        {"categories": categories},
    )


@router.get("/variable-categories/{slug:path}", response_class=HTMLResponse)
def variable_category_page(
    slug: str,
    request: Request,
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_app_settings),
) -> HTMLResponse:
    try:
        rows = fetch_category_variables(session, slug, limit=settings.CATEGORY_VARIABLE_LIMIT)
    except CategoryNotFound:
        return templates.TemplateResponse(
            request,
            "not_found.html",
            {"what": "Category", "name": slug_to_name(slug)},
            status_code=404,
        )

    variables = [{"name": row.name, "image_url": row.image_url, "studies": total_correlations(row)} for row in rows]
    return templates.TemplateResponse(
        request,
        "variable_category.html",
        {"category_name": slug_to_name(slug), "variables": variables},
    )
