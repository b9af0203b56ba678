"""Helpers to manage Streamlit session state in one place."""
import base64
import json
from contextlib import contextmanager
from typing import Iterator, Optional

import streamlit as st

from dashboard.api import ApiClient
from dashboard.config import API_URL, LOGIN_ROUTE, TOKEN_KEY
from dashboard.session import SessionStore

AUTH_QUERY_KEY = "auth"
HOME_ROUTE = "/"


def ensure_base_state():
    """Ensure the base navigation keys are present."""
    if "route" not in st.session_state:
        st.session_state.route = HOME_ROUTE
    if "section" not in st.session_state:
        st.session_state.section = "schools"
    if "flash" not in st.session_state:
        st.session_state.flash = None  # one-shot message shown after a rerun


def get_session_store() -> SessionStore:
    return SessionStore(st.session_state)


def navigate(route: str):
    """Switch the rendered view; the next rerun picks it up."""
    st.session_state.route = route


def _on_session_expired(route: str):
    clear_auth_query_params()
    st.session_state.flash = "Session expired. Please login again."
    navigate(route)


@contextmanager
def api_client() -> Iterator[ApiClient]:
    """Client for one rerun, wired to route to the login view on 401."""
    with ApiClient(API_URL, get_session_store(), on_session_expired=_on_session_expired) as client:
        yield client


def current_route() -> str:
    if not st.session_state.get(TOKEN_KEY):
        return LOGIN_ROUTE
    return st.session_state.get("route", HOME_ROUTE)


# ---- Lightweight auth persistence across refresh ----


def _encode_auth_payload(token: str, user: Optional[dict]) -> str:
    payload = {"token": token, "user": user}
    raw = json.dumps(payload).encode("utf-8")
    return base64.urlsafe_b64encode(raw).decode("ascii")


def _decode_auth_payload(value: str) -> Optional[dict]:
    try:
        raw = base64.urlsafe_b64decode(value.encode("ascii"))
        payload = json.loads(raw)
    except (ValueError, UnicodeError):
        return None
    return payload if isinstance(payload, dict) else None


def hydrate_auth_from_query_params():
    """
    If session_state is empty (new session) but we have auth data encoded
    in the URL query params, restore it so a browser refresh doesn't log out.
    """
    store = get_session_store()
    if store.is_authenticated:
        return
    encoded = st.query_params.get(AUTH_QUERY_KEY)
    if not encoded:
        return
    payload = _decode_auth_payload(encoded)
    if payload and isinstance(payload.get("token"), str) and payload["token"]:
        user = payload.get("user")
        store.set(payload["token"], user if isinstance(user, dict) else {})


def persist_auth_to_query_params():
    """Store the current session in URL query params for reload resilience."""
    store = get_session_store()
    token = store.get_token()
    if not token:
        return
    st.query_params[AUTH_QUERY_KEY] = _encode_auth_payload(token, store.get_user())


def clear_auth_query_params():
    """Remove auth payload from query params, used on logout."""
    st.query_params.clear()
