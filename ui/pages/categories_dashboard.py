"""
Variable Categories Dashboard

Pick a category and browse its ranked variables.
Backed by:
- /api/v1/variable-categories
- /api/v1/variable-categories/{slug}/variables
"""

import os
import sys

import pandas as pd
import streamlit as st

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.."))
if ROOT_DIR not in sys.path:
    sys.path.append(ROOT_DIR)

from core.ui_config import BACKEND_URL
from core.ui_helpers import category_variables_endpoint, fetch_backend
from ui.components.backend_status import render_status_bar
from ui.components.variable_browser import category_path, filter_variables, search_placeholder, variables_frame

st.set_page_config(page_title="Variable Categories", layout="wide")

st.title("Variable Categories")
render_status_bar()

payload = fetch_backend("api/v1/variable-categories")
categories = payload.get("categories", []) if isinstance(payload, dict) else []

if not categories:
    st.info("No categories found")
    st.stop()

st.caption(f"Browse {len(categories)} categories of tracked variables")

overview = pd.DataFrame(categories)[["name", "number_of_variables", "number_of_user_variables", "number_of_measurements"]]
with st.expander("All categories", expanded=False):
    st.dataframe(overview, use_container_width=True, hide_index=True)

# ---------------------------------------------------------------------------
# Category detail
# ---------------------------------------------------------------------------
by_name = {c["name"]: c for c in categories}
selected = st.selectbox("Category", options=list(by_name))
category = by_name[selected]

data = fetch_backend(category_variables_endpoint(category["slug"]))
variables = data.get("variables", []) if isinstance(data, dict) else []

st.subheader(selected)
st.markdown(f"[Open category page]({BACKEND_URL}{category_path(category)})")
st.caption(f"Browse {len(variables):,} {selected.lower()} variables")

query = st.text_input("Search", placeholder=search_placeholder(selected), label_visibility="collapsed")
filtered = filter_variables(variables, query)

if not filtered:
    st.info(f'No variables found matching "{query}"' if query else "No variables found in this category")
else:
    st.dataframe(
        variables_frame(filtered).drop(columns=["category", "path"]),
        use_container_width=True,
        hide_index=True,
    )
