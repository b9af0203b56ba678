"""Generic CRUD view for one dashboard section."""
import json

import httpx
import streamlit as st

from dashboard.errors import ApiError, SessionExpiredError
from dashboard.resources import RESOURCES, ResourceClient
from dashboard.state import api_client


def _parse_payload(text: str):
    try:
        payload = json.loads(text or "{}")
    except ValueError as e:
        st.error(f"Payload is not valid JSON: {e}")
        return None
    if not isinstance(payload, dict):
        st.error("Payload must be a JSON object.")
        return None
    return payload


def render_section(section_key: str):
    """List the section's records and offer create / update / delete forms.

    A SessionExpiredError means the client already cleared the session and
    routed to the login view, so we only need to rerun.
    """
    resource = RESOURCES[section_key]
    with api_client() as api:
        _render(ResourceClient(api, resource), section_key)


def _render(client: ResourceClient, section_key: str):
    resource = client.resource
    st.subheader(resource.title)

    try:
        items = client.list() or []
    except SessionExpiredError:
        st.rerun()
    except ApiError as e:
        st.error(f"Failed to fetch {resource.title.lower()}: {e.message}")
        items = []
    except httpx.HTTPError as e:
        st.error(f"Could not reach the backend: {e}")
        items = []

    if items:
        st.dataframe(items, use_container_width=True)
    else:
        st.info(f"No {resource.title.lower()} yet.")

    create_tab, edit_tab, delete_tab = st.tabs(["Create", "Edit", "Delete"])

    with create_tab:
        with st.form(f"create_{section_key}"):
            body = st.text_area("JSON payload", value="{}", key=f"create_body_{section_key}")
            submitted = st.form_submit_button("Create")
        if submitted:
            payload = _parse_payload(body)
            if payload is not None:
                _run(lambda: client.create(payload), "Created")

    with edit_tab:
        with st.form(f"edit_{section_key}"):
            item_id = st.text_input("ID", key=f"edit_id_{section_key}")
            body = st.text_area("Fields to change (JSON)", value="{}", key=f"edit_body_{section_key}")
            submitted = st.form_submit_button("Save")
        if submitted and item_id:
            payload = _parse_payload(body)
            if payload is not None:
                _run(lambda: client.update(item_id, payload), "Saved")

    with delete_tab:
        with st.form(f"delete_{section_key}"):
            item_id = st.text_input("ID", key=f"delete_id_{section_key}")
            confirm = st.checkbox("I understand this cannot be undone", key=f"delete_ok_{section_key}")
            submitted = st.form_submit_button("Delete")
        if submitted and item_id and confirm:
            _run(lambda: client.remove(item_id), "Deleted")


def _run(action, success_message: str):
    try:
        action()
    except SessionExpiredError:
        st.rerun()
    except ApiError as e:
        st.error(e.message)
    except httpx.HTTPError as e:
        st.error(f"Could not reach the backend: {e}")
    else:
        st.toast(success_message, icon="\u2705")
        st.rerun()
