"""Sidebar rendering: section navigation and account box."""
import streamlit as st

from dashboard.auth import AuthService
from dashboard.config import LOGIN_ROUTE
from dashboard.resources import RESOURCES
from dashboard.state import clear_auth_query_params, api_client, navigate


def render_sidebar():
    with api_client() as api:
        _render_sidebar(AuthService(api))


def _render_sidebar(auth: AuthService):
    user = auth.current_user()

    st.header("Dashboard")
    keys = list(RESOURCES)
    current = st.session_state.get("section", keys[0])
    section = st.radio(
        "Section",
        keys,
        index=keys.index(current) if current in keys else 0,
        format_func=lambda k: RESOURCES[k].title,
    )
    st.session_state.section = section

    st.divider()
    if user:
        st.write(f"**{user.email}**")
        st.caption(f"Role: {user.role}")
    if st.button("Logout", key="logout_btn", use_container_width=True):
        auth.logout()
        clear_auth_query_params()
        navigate(LOGIN_ROUTE)
        st.toast("Logged out", icon="\u2705")
        st.rerun()
