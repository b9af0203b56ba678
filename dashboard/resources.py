"""Dashboard sections and the backend endpoints behind them."""
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

import httpx

from dashboard.api import ApiClient
from dashboard.errors import ApiError
from dashboard.models import RequestOptions


def _error_message(response: httpx.Response) -> str:
    # NestJS puts validation errors in a list under "message"
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict):
        message = body.get("message") or body.get("detail") or body.get("error")
        if isinstance(message, list):
            return "; ".join(str(m) for m in message)
        if message:
            return str(message)
    return response.reason_phrase


def read_json(response: httpx.Response) -> Any:
    """Decode a 2xx body, or raise ApiError with the backend's message."""
    if response.is_error:
        raise ApiError(response.status_code, _error_message(response))
    if not response.content:
        return None
    return response.json()


@dataclass(frozen=True)
class Resource:
    key: str
    title: str
    endpoint: str
    # listing is public for some sections (the school picker works logged out)
    public_list: bool = False
    # some sections create through a different route than they list
    create_endpoint: Optional[str] = None


RESOURCES: Dict[str, Resource] = {
    r.key: r
    for r in (
        Resource("schools", "Schools", "/schools", public_list=True),
        Resource("teachers", "Teachers", "/teachers"),
        Resource("users", "Users", "/auth/users", create_endpoint="/auth/register"),
        Resource("website-content", "Website content", "/website-content"),
        Resource("mission-roles", "Mission roles", "/website-content/mission-roles"),
        Resource("seed-cards", "Seed cards", "/seed-cards"),
    )
}

ItemId = Union[str, int]


class ResourceClient:
    """CRUD calls for one dashboard section."""

    def __init__(self, api: ApiClient, resource: Union[Resource, str]):
        self.api = api
        self.resource = RESOURCES[resource] if isinstance(resource, str) else resource

    def _item(self, item_id: ItemId) -> str:
        return f"{self.resource.endpoint}/{item_id}"

    def list(self, params: Optional[Dict[str, str]] = None):
        options = RequestOptions(requires_auth=not self.resource.public_list, params=params)
        return read_json(self.api.get(self.resource.endpoint, options))

    def get(self, item_id: ItemId):
        return read_json(self.api.get(self._item(item_id)))

    def create(self, data: dict):
        return read_json(self.api.post(self.resource.create_endpoint or self.resource.endpoint, data))

    def update(self, item_id: ItemId, data: dict):
        return read_json(self.api.patch(self._item(item_id), data))

    def remove(self, item_id: ItemId):
        return read_json(self.api.delete(self._item(item_id)))
