"""
core/ranking.py
---------------
Public-listing policy and secondary ordering for variables.

The database applies the eligibility predicate, orders by
`number_of_user_variables` and truncates to the page cap. The page is then
re-sorted here by total aggregate correlations (cause + effect). Only the
fetched page is re-sorted, so a variable just outside the cap can never be
promoted into the list.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional, Set, TypeVar

T = TypeVar("T")

# Eligibility thresholds (strictly greater than)
MIN_USER_VARIABLES = 2
MIN_RAW_MEASUREMENTS = 5

# Page caps
GLOBAL_CAP = 500
CATEGORY_CAP = 200


def _field(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def _count(record: Any, name: str) -> int:
    value = _field(record, name)
    return int(value) if value is not None else 0


def total_correlations(record: Any) -> int:
    """Cause + effect aggregate correlation counts, null counted as 0."""
    return _count(record, "number_of_aggregate_correlations_as_cause") + _count(
        record, "number_of_aggregate_correlations_as_effect"
    )


def is_listable(record: Any, category_ids: Optional[Set[int]] = None) -> bool:
    """
    In-memory mirror of the SQL eligibility predicate.

    Parameters
    ----------
    record : ORM row, pydantic record or mapping
    category_ids : optional set of allowed `variable_category_id` values
    """
    if _field(record, "deleted_at") is not None:
        return False
    if _field(record, "is_public") is not True:
        return False
    if _count(record, "number_of_user_variables") <= MIN_USER_VARIABLES:
        return False
    if _count(record, "number_of_raw_measurements_with_tags_joins_children") <= MIN_RAW_MEASUREMENTS:
        return False
    if (
        _count(record, "number_of_aggregate_correlations_as_cause") <= 0
        and _count(record, "number_of_aggregate_correlations_as_effect") <= 0
    ):
        return False
    if category_ids is not None and _field(record, "variable_category_id") not in category_ids:
        return False
    return True


def rank_by_correlations(records: Iterable[T]) -> List[T]:
    """Stable sort by total correlations, descending."""
    return sorted(records, key=total_correlations, reverse=True)
