"""Configuration helpers (API location, logging)."""
import logging
import os
from pathlib import Path

import streamlit as st
from dotenv import load_dotenv

# Load a local .env for development. Real environment variables win.
ENV_PATH = Path(__file__).resolve().parent.parent / ".env"
if ENV_PATH.exists():
    load_dotenv(ENV_PATH)

DEFAULT_API_URL = "http://localhost:8080"

logger = logging.getLogger(__name__)


def _secret(name: str):
    """Read a top-level Streamlit secret, or None when no secrets file exists."""
    try:
        return st.secrets.get(name)
    except Exception:
        # Raised when secrets.toml is missing or invalid
        logger.debug("Streamlit secrets unavailable while reading %s", name)
        return None


def get_setting(name: str, default: str) -> str:
    """Resolve a setting from Streamlit secrets, then the environment."""
    value = _secret(name)
    if value is None:
        value = os.getenv(name, default)
    return str(value)


def get_api_url() -> str:
    return get_setting("INVENTORY_API_URL", DEFAULT_API_URL).rstrip("/")


def configure_logging() -> None:
    """Configure root logging once for the app process."""
    level_name = get_setting("LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
