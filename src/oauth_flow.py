#!/usr/bin/env python3
# src/oauth_flow.py
"""
Authorization-code flow: start() anchors a new cookie session and builds the
provider authorize URL; exchange_callback() validates the redirect against that
session and trades the code for tokens.
"""

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

import bling_client
from bling_client import TokenResponse
from oauth_errors import InternalError, InvalidRequest, OAuthRelayError, ProviderError, StateMismatch
from oauth_session import AuthorizationSession, decode_credentials, has_session, read_session
from oauth_state import generate_state, states_match
from settings import Settings

LOG = logging.getLogger("oauth_flow")


@dataclass
class StartResult:
    authorize_url: str
    session: AuthorizationSession


def _clean(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def start_authorization(client_id: Any, client_secret: Any, settings: Settings) -> StartResult:
    client_id = _clean(client_id)
    client_secret = _clean(client_secret)
    if not client_id or not client_secret:
        raise InvalidRequest("clientId e clientSecret são obrigatórios.")

    session = AuthorizationSession(
        state=generate_state(),
        client_id=client_id,
        client_secret=client_secret,
    )
    url = bling_client.authorize_url(client_id, session.state, settings.redirect_uri, base=settings.authorize_url)
    LOG.info("Started authorization flow for client_id %s", client_id)
    return StartResult(url, session)


def exchange_callback(
    code: Any,
    state: Any,
    cookies: Mapping[str, str],
    settings: Settings,
    error: Optional[str] = None,
    error_description: Optional[str] = None,
) -> TokenResponse:
    """
    Validate the provider redirect and exchange the code for tokens.

    Raises an OAuthRelayError subclass on the first failing check. Once the session
    cookies have been found, every exit (success or error) consumes the session;
    errors raised past that point carry `session_consumed = True` so the HTTP layer
    clears the cookies.
    """
    if error:
        LOG.warning("Provider redirected back with error %s", error)
        exc = InvalidRequest(str(error_description or error))
        exc.session_consumed = has_session(cookies)
        raise exc

    if not isinstance(code, str) or not code or not isinstance(state, str) or not state:
        raise InvalidRequest("code e state são obrigatórios.")

    stored_state, stored_client = read_session(cookies)

    try:
        if not states_match(stored_state, state):
            LOG.warning("Callback state does not match the session state")
            raise StateMismatch()

        creds = decode_credentials(stored_client)

        result = bling_client.exchange_code(
            creds.client_id,
            creds.client_secret,
            code,
            settings.redirect_uri,
            token_url=settings.token_url,
            timeout=settings.http_timeout,
        )
        if not result.ok:
            LOG.warning("Token exchange rejected by provider (HTTP %s)", result.status_code)
            raise ProviderError(result.status_code, result.payload)
    except OAuthRelayError as e:
        e.session_consumed = True
        raise
    except Exception as e:
        LOG.exception("Unexpected failure during token exchange")
        wrapped = InternalError("Erro inesperado ao trocar o código pelo token.")
        wrapped.session_consumed = True
        raise wrapped from e

    LOG.info("Token exchange succeeded for client_id %s", creds.client_id)
    return result
