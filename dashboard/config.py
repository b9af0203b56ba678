"""App-level configuration.

Values come from environment variables (or a .env file next to the app)
so the same build can point at a local backend or the hosted one.
"""
import logging
import os

from dotenv import load_dotenv

load_dotenv()

DEFAULT_API_URL = "http://localhost:3000"

# Backend NestJS base URL
API_URL = os.getenv("API_URL", DEFAULT_API_URL)

HTTP_TIMEOUT_SEC = float(os.getenv("HTTP_TIMEOUT_SEC", "30.0"))

# Route the dashboard navigates to when the backend rejects the session
LOGIN_ROUTE = "/login"

# Keys of the persisted session credential
TOKEN_KEY = "authToken"
USER_KEY = "authUser"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def resolve_api_url() -> str:
    """Re-read the backend base URL from the environment."""
    return os.getenv("API_URL") or DEFAULT_API_URL


def configure_logging(level: str = LOG_LEVEL):
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
