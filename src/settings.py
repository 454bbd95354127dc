#!/usr/bin/env python3
# src/settings.py

import os
import secrets
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

AUTHORIZE_URL = "https://bling.com.br/Api/v3/oauth/authorize"
TOKEN_URL = "https://www.bling.com.br/Api/v3/oauth/token"
DEFAULT_REDIRECT_URI = "https://oauth-bling-web.vercel.app/oauth/redirect"
DEFAULT_HTTP_TIMEOUT = 10
SESSION_TTL_SECONDS = 300


@dataclass(frozen=True)
class Settings:
    redirect_uri: str = DEFAULT_REDIRECT_URI
    authorize_url: str = AUTHORIZE_URL
    token_url: str = TOKEN_URL
    production: bool = False
    http_timeout: int = DEFAULT_HTTP_TIMEOUT
    secret_key: str = ""


# -------------------- _env helpers --------------------
def _env(k: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(k, default)


def _env_int(k: str, default: int) -> int:
    """
    Read integer environment var (or return default).
    A malformed value falls back to the default.
    """
    val = os.getenv(k)
    if val is None:
        return default
    try:
        return int(val)
    except ValueError:
        return default


def load_settings() -> Settings:
    load_dotenv()
    return Settings(
        # the same value feeds both the authorize URL and the token exchange
        redirect_uri=_env("BLING_REDIRECT_URI") or DEFAULT_REDIRECT_URI,
        authorize_url=_env("BLING_AUTHORIZE_URL", AUTHORIZE_URL),
        token_url=_env("BLING_TOKEN_URL", TOKEN_URL),
        production=_env("APP_ENV", "development").lower() == "production",
        http_timeout=_env_int("BLING_HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT),
        secret_key=_env("FLASK_SECRET") or secrets.token_hex(24),
    )
