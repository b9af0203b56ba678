"""Pydantic models shared across the dashboard."""
from typing import Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, EmailStr, Field

JSON_CONTENT_TYPE = "application/json"


class RequestOptions(BaseModel):
    """Everything the request wrapper recognizes about a single call.

    ``requires_auth`` attaches the stored bearer token; ``headers`` are merged
    over ``Content-Type: application/json``; ``body`` is sent as-is.
    """

    model_config = ConfigDict(frozen=True)

    requires_auth: bool = True
    method: str = "GET"
    headers: Dict[str, str] = Field(default_factory=dict)
    body: Optional[str] = None
    params: Optional[Dict[str, str]] = None

    def with_method(self, method: str) -> "RequestOptions":
        return self.model_copy(update={"method": method})

    def with_payload(self, method: str, body: Optional[str]) -> "RequestOptions":
        return self.model_copy(update={"method": method, "body": body})


class AuthUser(BaseModel):
    """User record returned by /auth/login and kept in the session."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: Union[str, int]
    email: EmailStr
    name: Optional[str] = None
    role: str = "USER"
    phone: Optional[str] = None
    preferred_language: Optional[str] = Field(default=None, alias="preferredLanguage")
    school_id: Optional[str] = Field(default=None, alias="schoolId")
    school_access_code: Optional[str] = Field(default=None, alias="schoolAccessCode")
    parents_link: Optional[str] = Field(default=None, alias="parentsLink")


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class LoginResponse(BaseModel):
    user: AuthUser
    token: str


class RegisterRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    email: EmailStr
    password: str
    phone: Optional[str] = None
    role: str = "USER"
    preferred_language: str = Field(default="en", alias="preferredLanguage")
