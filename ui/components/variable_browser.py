"""
ui/components/variable_browser.py
---------------------------------
Pure helpers behind the variable and category browse dashboards: client-side
search, study counts, links and table shaping. No Streamlit calls here.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional
from urllib.parse import quote

import pandas as pd

from core.ranking import total_correlations
from core.slugs import name_to_slug


def category_name(variable: Dict[str, Any]) -> Optional[str]:
    category = variable.get("variable_categories") or {}
    return category.get("name")


def filter_variables(variables: List[Dict[str, Any]], query: str) -> List[Dict[str, Any]]:
    """
    Case-insensitive substring search over variable name and category name.
    A blank query keeps everything.
    """
    needle = (query or "").strip().lower()
    if not needle:
        return list(variables)

    matches = []
    for variable in variables:
        name = (variable.get("name") or "").lower()
        category = (category_name(variable) or "").lower()
        if needle in name or needle in category:
            matches.append(variable)
    return matches


def total_studies(variable: Dict[str, Any]) -> int:
    """Number of studies on the causes or effects of a variable."""
    return total_correlations(variable)


def variable_path(variable: Dict[str, Any]) -> str:
    """Detail path for a variable, slug percent-encoded."""
    return f"/variables/{quote(name_to_slug(variable['name']))}"


def category_path(category: Dict[str, Any]) -> str:
    """Browse page path for a category, slug percent-encoded."""
    return f"/variable-categories/{quote(category.get('slug') or name_to_slug(category['name']))}"


def search_placeholder(category: Optional[str] = None) -> str:
    """Search box placeholder, singularised for a category page."""
    if not category:
        return "Search for a variable..."
    singular = category.lower()
    if singular.endswith("s"):
        singular = singular[:-1]
    return f"Search for a {singular}..."


def variables_frame(variables: List[Dict[str, Any]]) -> pd.DataFrame:
    """Tabular view (name, category, users, studies) in the given order."""
    rows = [
        {
            "name": v.get("name"),
            "category": category_name(v),
            "users": v.get("number_of_user_variables"),
            "studies": total_studies(v),
            "path": variable_path(v),
        }
        for v in variables
    ]
    return pd.DataFrame(rows, columns=["name", "category", "users", "studies", "path"])
