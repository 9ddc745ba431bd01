# database/queries.py
from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from sqlalchemy import and_, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from core.errors import CategoryNotFound, RetrievalFailure, VariableNotFound
from core.ranking import MIN_RAW_MEASUREMENTS, MIN_USER_VARIABLES, is_listable, rank_by_correlations
from core.slugs import slug_to_name

from .models import AggregateCorrelation, Variable, VariableCategory

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------
def eligible_variable_clauses() -> list:
    """SQL conditions a variable must meet to appear in public listings."""
    return [
        Variable.deleted_at.is_(None),
        Variable.is_public.is_(True),
        Variable.number_of_user_variables > MIN_USER_VARIABLES,
        Variable.number_of_raw_measurements_with_tags_joins_children > MIN_RAW_MEASUREMENTS,
        or_(
            Variable.number_of_aggregate_correlations_as_cause > 0,
            Variable.number_of_aggregate_correlations_as_effect > 0,
        ),
    ]


def _active_interesting_categories():
    return and_(VariableCategory.deleted_at.is_(None), VariableCategory.boring.is_(False))


# ---------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------
def list_interesting_categories(session: Session) -> List[VariableCategory]:
    """Active, non-boring categories ordered by number of variables (desc)."""
    try:
        stmt = (
            select(VariableCategory)
            .where(_active_interesting_categories())
            .order_by(VariableCategory.number_of_variables.desc(), VariableCategory.id)
        )
        return list(session.scalars(stmt).all())
    except SQLAlchemyError as e:
        raise RetrievalFailure(str(e), public_message="Failed to fetch categories") from e


def interesting_category_ids(session: Session) -> List[int]:
    """Ids of active, non-boring categories."""
    stmt = select(VariableCategory.id).where(_active_interesting_categories())
    try:
        return list(session.scalars(stmt).all())
    except SQLAlchemyError as e:
        raise RetrievalFailure(str(e)) from e


def find_active_category(session: Session, name: str) -> Optional[VariableCategory]:
    """First active category whose name matches exactly (case-sensitive)."""
    stmt = (
        select(VariableCategory)
        .where(VariableCategory.name == name, VariableCategory.deleted_at.is_(None))
        .limit(1)
    )
    try:
        return session.scalars(stmt).first()
    except SQLAlchemyError as e:
        raise RetrievalFailure(str(e)) from e


def resolve_category(session: Session, slug: str) -> VariableCategory:
    """
    Decode `slug` and look up the matching active category.

    Raises CategoryNotFound when nothing matches.
    """
    name = slug_to_name(slug)
    category = find_active_category(session, name)
    if category is None:
        raise CategoryNotFound(f"No active category named {name!r}")
    return category


# ---------------------------------------------------------------------
# Ranked variables
# ---------------------------------------------------------------------
def fetch_ranked_variables(
    session: Session,
    *,
    category_ids: Optional[Sequence[int]] = None,
    limit: int,
    with_category: bool = False,
) -> List[Variable]:
    """
    Return eligible variables, capped at `limit`, in two-phase order.

    The query orders by `number_of_user_variables` desc and truncates; the
    fetched page is then re-sorted by total correlations (stable).

    Args:
        category_ids: restrict to these categories (None = no restriction)
        limit: page cap applied before the secondary sort
        with_category: eager-load the owning category
    """
    stmt = select(Variable).where(*eligible_variable_clauses())
    if category_ids is not None:
        stmt = stmt.where(Variable.variable_category_id.in_(list(category_ids)))
    if with_category:
        stmt = stmt.options(joinedload(Variable.category))
    stmt = stmt.order_by(Variable.number_of_user_variables.desc(), Variable.id).limit(limit)

    try:
        page = list(session.scalars(stmt).all())
    except SQLAlchemyError as e:
        raise RetrievalFailure(str(e)) from e

    allowed = set(category_ids) if category_ids is not None else None
    listable = [row for row in page if is_listable(row, allowed)]
    if len(listable) != len(page):
        logger.warning("Dropped %d fetched variables failing the listing policy", len(page) - len(listable))

    logger.debug("Fetched %d eligible variables (limit=%d)", len(listable), limit)
    return rank_by_correlations(listable)


def fetch_global_variables(session: Session, limit: int) -> List[Variable]:
    """Ranked variables across all interesting categories."""
    ids = interesting_category_ids(session)
    return fetch_ranked_variables(session, category_ids=ids, limit=limit, with_category=True)


def fetch_category_variables(session: Session, slug: str, limit: int) -> List[Variable]:
    """Ranked variables of the category addressed by `slug`."""
    category = resolve_category(session, slug)
    return fetch_ranked_variables(session, category_ids=[category.id], limit=limit)


# ---------------------------------------------------------------------
# Variable detail
# ---------------------------------------------------------------------
def find_variable(session: Session, query: str) -> Variable:
    """
    Look up a single active variable by numeric id or by slug.

    Raises VariableNotFound when nothing matches.
    """
    stmt = (
        select(Variable)
        .where(Variable.deleted_at.is_(None))
        .options(joinedload(Variable.category), joinedload(Variable.unit))
    )
    if query.isascii() and query.isdigit():
        stmt = stmt.where(Variable.id == int(query))
    else:
        stmt = stmt.where(Variable.name == slug_to_name(query))

    try:
        variable = session.scalars(stmt.limit(1)).first()
    except SQLAlchemyError as e:
        raise RetrievalFailure(str(e), public_message="Failed to fetch variable") from e

    if variable is None:
        raise VariableNotFound(f"No active variable for {query!r}")
    return variable


def fetch_correlations(
    session: Session,
    variable_id: int,
    *,
    role: str,
    limit: int,
) -> List[AggregateCorrelation]:
    """
    Public aggregate correlations where the variable plays `role`
    ("cause" or "effect"), best `aggregate_qm_score` first.
    """
    if role == "cause":
        column, counterpart = AggregateCorrelation.cause_variable_id, AggregateCorrelation.effect_variable
    elif role == "effect":
        column, counterpart = AggregateCorrelation.effect_variable_id, AggregateCorrelation.cause_variable
    else:
        raise ValueError(f"Unknown correlation role: {role}")

    stmt = (
        select(AggregateCorrelation)
        .where(
            column == variable_id,
            AggregateCorrelation.deleted_at.is_(None),
            AggregateCorrelation.is_public.is_(True),
        )
        .options(joinedload(counterpart))
        .order_by(AggregateCorrelation.aggregate_qm_score.desc().nulls_last(), AggregateCorrelation.id)
        .limit(limit)
    )
    try:
        return list(session.scalars(stmt).all())
    except SQLAlchemyError as e:
        raise RetrievalFailure(str(e), public_message="Failed to fetch variable") from e
