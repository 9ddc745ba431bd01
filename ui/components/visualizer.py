"""
DFDA Explorer — Variable Visualization Component
------------------------------------------------
Plotly figures for the browse dashboards.

Design
------
- Pure functions, no Streamlit imports (UI calls these).
- No network calls here: the caller passes already-fetched variables.
"""

from __future__ import annotations

from typing import Any, Dict, List

import plotly.express as px

from ui.components.variable_browser import variables_frame


def top_variables_chart(variables: List[Dict[str, Any]], top_n: int = 20):
    """
    Horizontal bar chart of the `top_n` variables by total studies
    (cause + effect aggregate correlations).

    Returns None when there is nothing to plot.
    """
    df = variables_frame(variables)
    if df.empty:
        return None

    df = df.sort_values("studies", ascending=False, kind="stable").head(top_n)
    fig = px.bar(
        df.iloc[::-1],
        x="studies",
        y="name",
        orientation="h",
        hover_data=["category", "users"],
        title=f"Top {len(df)} variables by number of studies",
    )
    fig.update_layout(yaxis_title=None, xaxis_title="Studies", margin=dict(l=10, r=10, t=40, b=10))
    return fig
