"""HTTP helpers for talking to the Taste & Grow backend.

Every dashboard call goes through ``send``: it attaches the stored bearer
token, resolves relative endpoints against the backend base URL and tears
the session down when the backend answers 401 to an authenticated call.
"""
import json
import logging
from typing import Any, Callable, Dict, List, Optional

import httpx

from dashboard.config import HTTP_TIMEOUT_SEC, LOGIN_ROUTE, resolve_api_url
from dashboard.errors import SessionExpiredError
from dashboard.models import JSON_CONTENT_TYPE, RequestOptions
from dashboard.session import SessionStore

logger = logging.getLogger(__name__)

SessionExpiredListener = Callable[[str], None]

DEFAULT_OPTIONS = RequestOptions()


def encode_body(data: Any) -> Optional[str]:
    """Compact JSON for a payload, or None when there is nothing to send."""
    if data is None:
        return None
    return json.dumps(data, separators=(",", ":"))


class _BaseApiClient:
    """Request preparation and 401 handling shared by the sync and async clients."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        store: Optional[SessionStore] = None,
        on_session_expired: Optional[SessionExpiredListener] = None,
        login_route: str = LOGIN_ROUTE,
    ):
        self.base_url = (base_url or resolve_api_url()).rstrip("/")
        self.store = store if store is not None else SessionStore()
        self.login_route = login_route
        self._listeners: List[SessionExpiredListener] = []
        if on_session_expired is not None:
            self._listeners.append(on_session_expired)

    def on_session_expired(self, listener: SessionExpiredListener) -> SessionExpiredListener:
        """Subscribe to session teardown; the listener receives the login route."""
        self._listeners.append(listener)
        return listener

    def resolve_url(self, endpoint: str) -> str:
        if endpoint.startswith("http"):
            return endpoint
        if not endpoint.startswith("/"):
            endpoint = "/" + endpoint
        return f"{self.base_url}{endpoint}"

    def build_headers(self, options: RequestOptions) -> httpx.Headers:
        headers = httpx.Headers({"Content-Type": JSON_CONTENT_TYPE})
        headers.update(options.headers)
        if options.requires_auth:
            token = self.store.get_token()
            if token:
                headers["Authorization"] = f"Bearer {token}"
        return headers

    def _request_args(self, endpoint: str, options: RequestOptions) -> Dict[str, Any]:
        url = self.resolve_url(endpoint)
        logger.debug("%s %s (auth=%s)", options.method, url, options.requires_auth)
        return {
            "method": options.method,
            "url": url,
            "headers": self.build_headers(options),
            "params": options.params,
            "content": options.body,
        }

    def _check_response(self, response: httpx.Response, options: RequestOptions) -> httpx.Response:
        if response.status_code == 401 and options.requires_auth:
            self._expire_session()
            raise SessionExpiredError()
        return response

    def _expire_session(self):
        if self.store.clear():
            logger.warning("Backend rejected the session token; logged out")
        for listener in list(self._listeners):
            try:
                listener(self.login_route)
            except Exception:
                logger.exception("Session-expired listener %r failed", listener)


class ApiClient(_BaseApiClient):
    """Blocking client used by the Streamlit pages."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        store: Optional[SessionStore] = None,
        on_session_expired: Optional[SessionExpiredListener] = None,
        login_route: str = LOGIN_ROUTE,
        timeout: float = HTTP_TIMEOUT_SEC,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        super().__init__(base_url, store, on_session_expired, login_route)
        self._client = httpx.Client(timeout=timeout, transport=transport)

    def send(self, endpoint: str, options: Optional[RequestOptions] = None) -> httpx.Response:
        options = options or DEFAULT_OPTIONS
        response = self._client.send(self._client.build_request(**self._request_args(endpoint, options)))
        return self._check_response(response, options)

    def get(self, endpoint: str, options: Optional[RequestOptions] = None) -> httpx.Response:
        return self.send(endpoint, (options or DEFAULT_OPTIONS).with_method("GET"))

    def post(self, endpoint: str, data: Any = None, options: Optional[RequestOptions] = None) -> httpx.Response:
        return self.send(endpoint, (options or DEFAULT_OPTIONS).with_payload("POST", encode_body(data)))

    def patch(self, endpoint: str, data: Any = None, options: Optional[RequestOptions] = None) -> httpx.Response:
        return self.send(endpoint, (options or DEFAULT_OPTIONS).with_payload("PATCH", encode_body(data)))

    def put(self, endpoint: str, data: Any = None, options: Optional[RequestOptions] = None) -> httpx.Response:
        return self.send(endpoint, (options or DEFAULT_OPTIONS).with_payload("PUT", encode_body(data)))

    def delete(self, endpoint: str, options: Optional[RequestOptions] = None) -> httpx.Response:
        return self.send(endpoint, (options or DEFAULT_OPTIONS).with_method("DELETE"))

    def close(self):
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()


class AsyncApiClient(_BaseApiClient):
    """asyncio flavour; many calls may be in flight against one session."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        store: Optional[SessionStore] = None,
        on_session_expired: Optional[SessionExpiredListener] = None,
        login_route: str = LOGIN_ROUTE,
        timeout: float = HTTP_TIMEOUT_SEC,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(base_url, store, on_session_expired, login_route)
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def send(self, endpoint: str, options: Optional[RequestOptions] = None) -> httpx.Response:
        options = options or DEFAULT_OPTIONS
        response = await self._client.send(self._client.build_request(**self._request_args(endpoint, options)))
        return self._check_response(response, options)

    async def get(self, endpoint: str, options: Optional[RequestOptions] = None) -> httpx.Response:
        return await self.send(endpoint, (options or DEFAULT_OPTIONS).with_method("GET"))

    async def post(self, endpoint: str, data: Any = None, options: Optional[RequestOptions] = None) -> httpx.Response:
        return await self.send(endpoint, (options or DEFAULT_OPTIONS).with_payload("POST", encode_body(data)))

    async def patch(self, endpoint: str, data: Any = None, options: Optional[RequestOptions] = None) -> httpx.Response:
        return await self.send(endpoint, (options or DEFAULT_OPTIONS).with_payload("PATCH", encode_body(data)))

    async def put(self, endpoint: str, data: Any = None, options: Optional[RequestOptions] = None) -> httpx.Response:
        return await self.send(endpoint, (options or DEFAULT_OPTIONS).with_payload("PUT", encode_body(data)))

    async def delete(self, endpoint: str, options: Optional[RequestOptions] = None) -> httpx.Response:
        return await self.send(endpoint, (options or DEFAULT_OPTIONS).with_method("DELETE"))

    async def aclose(self):
        await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()
