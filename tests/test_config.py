"""Tests for base URL resolution."""

from dashboard.api import ApiClient
from dashboard.config import DEFAULT_API_URL, resolve_api_url


def test_env_override(monkeypatch):
    monkeypatch.setenv("API_URL", "https://taste-and-grow.example.com")

    assert resolve_api_url() == "https://taste-and-grow.example.com"


def test_default_when_unset(monkeypatch):
    monkeypatch.delenv("API_URL", raising=False)

    assert resolve_api_url() == DEFAULT_API_URL == "http://localhost:3000"


def test_client_falls_back_to_environment(monkeypatch):
    monkeypatch.setenv("API_URL", "https://api.example.com/")

    with ApiClient() as client:
        assert client.base_url == "https://api.example.com"
        assert client.resolve_url("/schools") == "https://api.example.com/schools"
