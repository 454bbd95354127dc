"""Shared fixtures for the relay tests."""

import json

import pytest
import requests

from app import create_app
from settings import Settings


@pytest.fixture
def settings():
    """Settings pointing at the real provider URLs with a fixed redirect URI."""
    return Settings(
        redirect_uri="https://relay.example.com/oauth/redirect",
        secret_key="test-secret",
    )


@pytest.fixture
def app(settings):
    app = create_app(settings)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def provider_response():
    """Build a real requests.Response as the token endpoint would return it."""

    def _build(status=200, body=None, content_type="application/json"):
        r = requests.Response()
        r.status_code = status
        if isinstance(body, (dict, list)):
            body = json.dumps(body)
        r._content = (body or "").encode("utf-8")
        r.encoding = "utf-8"
        if content_type:
            r.headers["Content-Type"] = content_type
        return r

    return _build
