"""
DFDA Explorer — Streamlit Launcher
----------------------------------
Main entrypoint for the DFDA Explorer multipage app.
This file ensures Streamlit loads all dashboards under ui/pages/.
"""

import os
import sys

import streamlit as st

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.append(ROOT_DIR)

from core.metadata import __project__, get_metadata
from ui.components.backend_status import render_status_bar

st.set_page_config(page_title=__project__, layout="wide")

st.title(f"Welcome to {__project__}")
st.caption(get_metadata()["description"])

st.markdown("""
Use the sidebar to navigate between dashboards:
- **Variables** (global ranking, search)
- **Variable Categories** (per-category ranking)
""")

render_status_bar(expanded=True)

st.markdown("---")
st.info("Start exploring via the left sidebar navigation.")
