#!/usr/bin/env python3
# src/app.py

import logging
from typing import Optional

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from oauth_errors import OAuthRelayError
from oauth_flow import exchange_callback, start_authorization
from oauth_session import clear_session, write_session
from settings import Settings, load_settings

LOG = logging.getLogger("app")


def _json_body() -> dict:
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


def create_app(settings: Optional[Settings] = None) -> Flask:
    settings = settings or load_settings()

    app = Flask(__name__)
    app.secret_key = settings.secret_key
    app.config["RELAY_SETTINGS"] = settings

    @app.errorhandler(OAuthRelayError)
    def handle_relay_error(e: OAuthRelayError):
        resp = jsonify(e.to_dict())
        resp.status_code = e.status_code
        if e.session_consumed:
            clear_session(resp, secure=settings.production)
        return resp

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        if isinstance(e, HTTPException):
            return jsonify({"error": e.description}), e.code
        LOG.exception("Unhandled error on %s", request.path)
        if request.path.endswith("/start"):
            message = "Não foi possível iniciar o fluxo de autorização."
        else:
            message = "Erro inesperado ao trocar o código pelo token."
        return jsonify({"error": message}), 500

    @app.route("/api/oauth/start", methods=["POST"])
    def start():
        body = _json_body()
        result = start_authorization(body.get("clientId"), body.get("clientSecret"), settings)
        resp = jsonify({"authorizeUrl": result.authorize_url})
        write_session(resp, result.session, secure=settings.production)
        return resp

    @app.route("/api/oauth/callback", methods=["POST"])
    def callback():
        body = _json_body()
        result = exchange_callback(
            body.get("code"),
            body.get("state"),
            request.cookies,
            settings,
            error=body.get("error"),
            error_description=body.get("error_description"),
        )
        resp = jsonify(result.payload)
        resp.status_code = result.status_code
        clear_session(resp, secure=settings.production)
        return resp

    return app


if __name__ == "__main__":
    # Local use only; see main.py for the CLI
    create_app().run("localhost", 5000, debug=False)
