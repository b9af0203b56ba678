"""Login / register / logout against the backend, backed by the session store."""
import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from dashboard.api import ApiClient
from dashboard.errors import ApiError, InvalidCredentialsError
from dashboard.models import AuthUser, LoginRequest, LoginResponse, RegisterRequest, RequestOptions
from dashboard.resources import read_json

logger = logging.getLogger(__name__)

LOGIN_ENDPOINT = "/auth/login"
REGISTER_ENDPOINT = "/auth/register"

PUBLIC = RequestOptions(requires_auth=False)


class AuthService:
    def __init__(self, api: ApiClient):
        self.api = api
        self.store = api.store

    def login(self, email: str, password: str) -> AuthUser:
        """
        Exchange email + password for a token and persist the session.

        - A 401 from the backend raises InvalidCredentialsError.
        - Any other non-2xx raises ApiError with the backend message.
        """
        payload = LoginRequest(email=email, password=password)
        response = self.api.post(LOGIN_ENDPOINT, payload.model_dump(), PUBLIC)
        if response.status_code == 401:
            raise InvalidCredentialsError(401, "Invalid email or password")
        user = self._start_session(response)
        logger.info("Logged in as %s", user.email)
        return user

    def register(
        self,
        name: str,
        email: str,
        password: str,
        phone: Optional[str] = None,
        role: str = "USER",
    ) -> AuthUser:
        """Create an account and log straight in with the returned token.

        The sign-up form offers "OTHER", which the backend knows as "USER".
        """
        payload = RegisterRequest(
            name=name,
            email=email,
            password=password,
            phone=phone,
            role="USER" if role == "OTHER" else role,
        )
        response = self.api.post(REGISTER_ENDPOINT, payload.model_dump(by_alias=True), PUBLIC)
        user = self._start_session(response)
        logger.info("Registered %s", user.email)
        return user

    def _start_session(self, response: httpx.Response) -> AuthUser:
        data = read_json(response)
        try:
            result = LoginResponse.model_validate(data)
        except ValidationError as e:
            raise ApiError(response.status_code, f"Unexpected auth response: {e}", data)
        self.store.set(result.token, result.user.model_dump(by_alias=True, mode="json"))
        return result.user

    def logout(self):
        if self.store.clear():
            logger.info("Logged out")

    def current_user(self) -> Optional[AuthUser]:
        if not self.store.is_authenticated:
            return None
        raw = self.store.get_user()
        if raw is None:
            return None
        try:
            return AuthUser.model_validate(raw)
        except ValidationError:
            logger.warning("Stored user record is invalid; clearing session")
            self.store.clear()
            return None
