"""Auth page rendering (admin login)."""
import httpx
from pydantic import ValidationError
import streamlit as st

from dashboard.auth import AuthService
from dashboard.errors import ApiError, InvalidCredentialsError
from dashboard.state import HOME_ROUTE, api_client, navigate, persist_auth_to_query_params


def show_auth_page():
    """Full-page login, shown when there is no stored session."""
    st.title("Taste & Grow")
    st.caption("Admin dashboard - schools, teachers, website content and game cards")

    flash = st.session_state.get("flash")
    if flash:
        st.warning(flash)
        st.session_state.flash = None

    st.subheader("Sign in")
    with st.form("login_form", clear_on_submit=False):
        login_email = st.text_input("Email", key="login_email")
        login_password = st.text_input("Password", type="password", key="login_password")
        login_submitted = st.form_submit_button("Sign in")
    if login_submitted:
        try:
            with api_client() as api:
                user = AuthService(api).login(login_email, login_password)
            persist_auth_to_query_params()
            navigate(HOME_ROUTE)
            st.toast(f"Welcome {user.name or user.email}", icon="\u2705")
            st.rerun()
        except ValidationError as ve:
            st.error(f"Invalid email: {ve}")
        except InvalidCredentialsError:
            st.error("Login failed: invalid email or password")
        except ApiError as ae:
            st.error(f"Login failed: {ae.message}")
        except httpx.HTTPError as he:
            st.error(f"Could not reach the backend: {he}")
