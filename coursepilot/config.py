"""
Runtime configuration.

Values come from environment variables; a .env file in the working directory
is loaded first (python-dotenv), so local API keys never need to be exported by hand.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


DEFAULT_SHEET_URL = (
    "https://docs.google.com/spreadsheets/d/e/"
    "2PACX-1vRYOX-ShsAwxP5tYCuY5zHSGs1CFI8Zb7etmYZzHOWdnqxPGfMCapy6vyliFGNRlpfs0IROPxjJBxCr"
    "/pub?output=csv"
)
DEFAULT_FORM_URL = "https://forms.gle/zd6nTbFLMtp8dofd7"
DEFAULT_MODEL = "gemini-3-flash-preview"
DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class Settings:
    sheet_url: str = DEFAULT_SHEET_URL
    form_url: str = DEFAULT_FORM_URL
    api_key: str = ""
    model: str = DEFAULT_MODEL
    timeout: float = DEFAULT_TIMEOUT


def _env_str(name: str, default: str) -> str:
    raw = os.environ.get(name, "").strip()
    return raw or default


def _env_float(name: str, default: float, minimum: float = 0.0) -> float:
    raw = os.environ.get(name, "")
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return default
    return max(minimum, value)


def load_settings(dotenv: bool = True) -> Settings:
    """
    Build Settings from the environment.

    GEMINI_API_KEY wins over the generic API_KEY.
    """
    if dotenv:
        load_dotenv()

    return Settings(
        sheet_url=_env_str("COURSEPILOT_SHEET_URL", DEFAULT_SHEET_URL),
        form_url=_env_str("COURSEPILOT_FORM_URL", DEFAULT_FORM_URL),
        api_key=_env_str("GEMINI_API_KEY", _env_str("API_KEY", "")),
        model=_env_str("COURSEPILOT_MODEL", DEFAULT_MODEL),
        timeout=_env_float("COURSEPILOT_TIMEOUT", DEFAULT_TIMEOUT, minimum=1.0),
    )
