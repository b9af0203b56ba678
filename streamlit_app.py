import streamlit as st

from dashboard.config import LOGIN_ROUTE, configure_logging
from dashboard.state import current_route, ensure_base_state, hydrate_auth_from_query_params
from dashboard.views.auth import show_auth_page
from dashboard.views.sections import render_section
from dashboard.views.sidebar import render_sidebar

# ---------- Layout + main app ----------

st.set_page_config(
    page_title="Taste & Grow Dashboard",
    page_icon=":seedling:",
    layout="wide",
)

configure_logging()

ensure_base_state()
hydrate_auth_from_query_params()

# No session (or the backend just rejected it) -> only the login page
if current_route() == LOGIN_ROUTE:
    show_auth_page()
    st.stop()

with st.sidebar:
    render_sidebar()

st.title("Taste & Grow Dashboard")
render_section(st.session_state.section)
