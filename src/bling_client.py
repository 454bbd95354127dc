#!/usr/bin/env python3
# src/bling_client.py
# Bling OAuth endpoints: authorize URL builder and authorization_code exchange.

import base64
import os
import logging
import requests
from dataclasses import dataclass
from typing import Any, Optional

from json_helpers import parse_json_or_raw
from oauth_errors import InternalError
from settings import AUTHORIZE_URL, TOKEN_URL, DEFAULT_HTTP_TIMEOUT

LOG = logging.getLogger("bling_client")
_SESSION = requests.Session()
_SESSION.headers.update({"User-Agent": os.getenv("BLING_USER_AGENT", "bling-oauth-relay/1.0")})


@dataclass
class TokenResponse:
    """Provider answer. `structured` is False when the body was not JSON and `payload` is {"raw": text}."""
    status_code: int
    payload: Any
    structured: bool = True

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def _field(self, name: str) -> Optional[Any]:
        if isinstance(self.payload, dict):
            return self.payload.get(name)
        return None

    @property
    def access_token(self) -> Optional[str]:
        return self._field("access_token")

    @property
    def refresh_token(self) -> Optional[str]:
        return self._field("refresh_token")

    @property
    def expires_in(self) -> Optional[int]:
        return self._field("expires_in")


def authorize_url(client_id: str, state: str, redirect_uri: str, base: str = AUTHORIZE_URL) -> str:
    q = {
        "response_type": "code",
        "client_id": client_id,
        "state": state,
        "redirect_uri": redirect_uri,
    }
    return requests.Request("GET", base, params=q).prepare().url


def basic_auth_header(client_id: str, client_secret: str) -> str:
    raw = f"{client_id}:{client_secret}".encode("utf-8")
    return "Basic " + base64.b64encode(raw).decode("ascii")


def parse_token_response(r: requests.Response) -> TokenResponse:
    """Never raises on an unexpected body; non-JSON degrades to {"raw": text}."""
    content_type = r.headers.get("Content-Type", "").lower()
    if "application/json" in content_type:
        try:
            return TokenResponse(r.status_code, r.json(), True)
        except ValueError:
            LOG.warning("Provider declared JSON but sent something else (HTTP %s)", r.status_code)
    payload, structured = parse_json_or_raw(r.text)
    return TokenResponse(r.status_code, payload, structured)


def exchange_code(
    client_id: str,
    client_secret: str,
    code: str,
    redirect_uri: str,
    token_url: str = TOKEN_URL,
    timeout: int = DEFAULT_HTTP_TIMEOUT,
) -> TokenResponse:
    """Exchange authorization code for tokens (authorization_code grant). Single attempt, no retries."""
    data = {
        "grant_type": "authorization_code",
        "code": code,
        "redirect_uri": redirect_uri,
    }
    headers = {
        "Authorization": basic_auth_header(client_id, client_secret),
        "Accept": "application/json",
        "enable-jwt": "1",
    }
    try:
        r = _SESSION.post(token_url, data=data, headers=headers, timeout=timeout)
    except requests.exceptions.RequestException as e:
        LOG.error(f"Token request failed: {e}")
        raise InternalError(f"Erro inesperado ao trocar o código pelo token: {e}") from e

    result = parse_token_response(r)
    LOG.info("Token endpoint answered HTTP %s", result.status_code)
    return result
