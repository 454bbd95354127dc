#!/usr/bin/env python3
# src/oauth_session.py
"""Cookie-bound session for a single in-flight authorization flow.

Nothing is kept in server memory: the expected state and the client credentials
travel in two short-lived HttpOnly cookies. The credential cookie is base64 of a
JSON object, which hides the values from casual view but is not encryption.
"""

import base64
import binascii
import json
import logging
from dataclasses import dataclass, field
from typing import Mapping, Tuple

from json_helpers import load_json_object
from oauth_errors import CredentialDecodeError, IncompleteCredentials, SessionExpired
from settings import SESSION_TTL_SECONDS
from time_helpers import is_expired, now_epoch

LOG = logging.getLogger("oauth_session")

STATE_COOKIE = "bling_oauth_state"
CLIENT_COOKIE = "bling_oauth_client"


@dataclass
class AuthorizationSession:
    state: str
    client_id: str
    client_secret: str
    created_at: int = field(default_factory=now_epoch)

    @property
    def expires_at(self) -> int:
        return self.created_at + SESSION_TTL_SECONDS


@dataclass
class ClientCredentials:
    client_id: str
    client_secret: str


def encode_credentials(session: AuthorizationSession) -> str:
    body = json.dumps(
        {
            "clientId": session.client_id,
            "clientSecret": session.client_secret,
            "createdAt": session.created_at,
        },
        ensure_ascii=False,
    )
    return base64.b64encode(body.encode("utf-8")).decode("ascii")


def decode_credentials(value: str) -> ClientCredentials:
    """
    Reverse of encode_credentials().
    Raises CredentialDecodeError for unreadable content, IncompleteCredentials when a field is
    missing, SessionExpired when the payload outlived the TTL.
    """
    try:
        data = load_json_object(base64.b64decode(value, validate=True))
    except (binascii.Error, ValueError, RecursionError) as e:
        LOG.warning("Could not decode client cookie: %s", e)
        raise CredentialDecodeError() from e

    client_id = data.get("clientId")
    client_secret = data.get("clientSecret")
    if not isinstance(client_id, str) or not isinstance(client_secret, str) or not client_id or not client_secret:
        raise IncompleteCredentials()

    created_at = data.get("createdAt")
    if isinstance(created_at, int) and is_expired(created_at, SESSION_TTL_SECONDS):
        raise SessionExpired()

    return ClientCredentials(client_id, client_secret)


def _cookie_options(secure: bool) -> dict:
    return {
        "httponly": True,
        "samesite": "Lax",
        "secure": secure,
        "path": "/",
    }


def write_session(response, session: AuthorizationSession, secure: bool = False) -> None:
    """Attach both session cookies to a Flask response. Overwrites any earlier flow."""
    opts = _cookie_options(secure)
    response.set_cookie(STATE_COOKIE, session.state, max_age=SESSION_TTL_SECONDS, **opts)
    response.set_cookie(CLIENT_COOKIE, encode_credentials(session), max_age=SESSION_TTL_SECONDS, **opts)


def read_session(cookies: Mapping[str, str]) -> Tuple[str, str]:
    """Return (stored_state, encoded_client_payload) or raise SessionExpired."""
    stored_state = cookies.get(STATE_COOKIE)
    stored_client = cookies.get(CLIENT_COOKIE)
    if not stored_state or not stored_client:
        raise SessionExpired()
    return stored_state, stored_client


def has_session(cookies: Mapping[str, str]) -> bool:
    return bool(cookies.get(STATE_COOKIE) and cookies.get(CLIENT_COOKIE))


def clear_session(response, secure: bool = False) -> None:
    opts = _cookie_options(secure)
    response.delete_cookie(STATE_COOKIE, **opts)
    response.delete_cookie(CLIENT_COOKIE, **opts)
