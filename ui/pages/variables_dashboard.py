"""
Variables Dashboard

Browse the globally ranked public variables served by the DFDA Explorer
backend, with client-side search by variable or category name.
Backed by:
- /api/v1/variables
"""

import os
import sys

import streamlit as st

# Ensure project root is on sys.path when running via `streamlit run ui/overview.py`
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.."))
if ROOT_DIR not in sys.path:
    sys.path.append(ROOT_DIR)

from core.ui_config import BACKEND_URL
from core.ui_helpers import fetch_backend
from ui.components.backend_status import render_status_bar
from ui.components.variable_browser import filter_variables, search_placeholder, variables_frame
from ui.components.visualizer import top_variables_chart

st.set_page_config(page_title="Variables", layout="wide")

st.title("Variables")
render_status_bar()

# ---------------------------------------------------------------------------
# Data
# ---------------------------------------------------------------------------
payload = fetch_backend("api/v1/variables")
variables = payload.get("variables", []) if isinstance(payload, dict) else []

st.caption(f"Browse {len(variables):,} variables with statistics and correlations")

query = st.text_input("Search", placeholder=search_placeholder(), label_visibility="collapsed")
filtered = filter_variables(variables, query)

# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------
if not filtered:
    st.info(f'No variables found matching "{query}"' if query else "No variables available.")
else:
    fig = top_variables_chart(filtered)
    if fig is not None:
        st.plotly_chart(fig, use_container_width=True)

    df = variables_frame(filtered)
    df["path"] = BACKEND_URL + "/api/v1" + df["path"]
    st.dataframe(
        df,
        use_container_width=True,
        hide_index=True,
        column_config={"path": st.column_config.LinkColumn("details")},
    )
