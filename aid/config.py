"""Centralized config loading — read once at import time."""

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv

# Load .env from project root (parent of aid/)
PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(PROJECT_ROOT / ".env")

CONFIG_PATH = Path(__file__).resolve().parent / "config.yaml"

_config = yaml.safe_load(CONFIG_PATH.read_text())


def get_config() -> dict:
    """Return the loaded config dictionary."""
    return _config


def get_api_key() -> str:
    """Return the Gemini API key from the environment, or "" if unset."""
    env_name = get_config().get("api_key_env", "GOOGLE_API_KEY")
    return os.getenv(env_name, "").strip()


def resolve_storage_path() -> Path:
    """Return the absolute path of the draft store file."""
    path = Path(get_config().get("storage_path", "./.aid/drafts.json"))
    if not path.is_absolute():
        path = PROJECT_ROOT / path
    return path
