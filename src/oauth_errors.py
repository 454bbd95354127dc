#!/usr/bin/env python3
# src/oauth_errors.py
# Error taxonomy for the OAuth relay. Each error knows its HTTP status.

from typing import Any, Dict, Optional


class OAuthRelayError(Exception):
    status_code = 400

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        # set by the callback exchanger once the session cookies were found
        self.session_consumed = False

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.message}


class InvalidRequest(OAuthRelayError):
    pass


class SessionExpired(OAuthRelayError):
    def __init__(self, message: str = "Sessão expirada. Inicie o fluxo novamente."):
        super().__init__(message)


class StateMismatch(OAuthRelayError):
    def __init__(self, message: str = "State inválido."):
        super().__init__(message)


class CredentialDecodeError(OAuthRelayError):
    def __init__(self, message: str = "Não foi possível recuperar as credenciais da sessão."):
        super().__init__(message)


class IncompleteCredentials(OAuthRelayError):
    def __init__(self, message: str = "Credenciais incompletas. Reinicie o fluxo."):
        super().__init__(message)


class ProviderError(OAuthRelayError):
    """
    The provider's token endpoint answered with a non-success status.
    The payload and status are forwarded to the caller as-is.
    """

    def __init__(self, status_code: int, payload: Any):
        super().__init__(f"Provider returned HTTP {status_code}", status_code)
        self.payload = payload

    def to_dict(self) -> Any:
        return self.payload


class InternalError(OAuthRelayError):
    status_code = 500
