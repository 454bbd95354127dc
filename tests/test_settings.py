"""Tests for environment-driven configuration and the CLI parser."""

import argparse

import pytest

import main
from settings import AUTHORIZE_URL, DEFAULT_REDIRECT_URI, TOKEN_URL, load_settings

ENV_KEYS = (
    "BLING_REDIRECT_URI",
    "BLING_AUTHORIZE_URL",
    "BLING_TOKEN_URL",
    "BLING_HTTP_TIMEOUT",
    "APP_ENV",
    "FLASK_SECRET",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr("settings.load_dotenv", lambda: None)


class TestLoadSettings:
    def test_defaults(self):
        s = load_settings()
        assert s.redirect_uri == DEFAULT_REDIRECT_URI
        assert s.authorize_url == AUTHORIZE_URL
        assert s.token_url == TOKEN_URL
        assert s.production is False
        assert s.http_timeout == 10
        assert s.secret_key

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("BLING_REDIRECT_URI", "https://mine.example.com/cb")
        monkeypatch.setenv("APP_ENV", "Production")
        monkeypatch.setenv("BLING_HTTP_TIMEOUT", "3")
        monkeypatch.setenv("FLASK_SECRET", "s3")

        s = load_settings()
        assert s.redirect_uri == "https://mine.example.com/cb"
        assert s.production is True
        assert s.http_timeout == 3
        assert s.secret_key == "s3"

    def test_empty_redirect_uri_falls_back(self, monkeypatch):
        monkeypatch.setenv("BLING_REDIRECT_URI", "")
        assert load_settings().redirect_uri == DEFAULT_REDIRECT_URI

    def test_malformed_timeout_falls_back(self, monkeypatch):
        monkeypatch.setenv("BLING_HTTP_TIMEOUT", "soon")
        assert load_settings().http_timeout == 10


class TestParseArgs:
    def test_defaults(self):
        args = main.parse_args([])
        assert args.host == main.DEFAULT_HOST
        assert args.port == main.DEFAULT_PORT
        assert args.debug is False
        assert args.log_level is None

    @pytest.mark.parametrize("value, expected", [("yes", True), ("1", True), ("no", False), ("f", False)])
    def test_debug_flag(self, value, expected):
        assert main.parse_args(["--debug", value]).debug is expected

    def test_boolean_action_rejects_unknown(self):
        action = main.BooleanAction(option_strings=["--debug"], dest="debug")
        with pytest.raises(argparse.ArgumentTypeError):
            action(None, argparse.Namespace(), "maybe")

    def test_main_runs_app_with_settings(self, monkeypatch):
        calls = {}

        class FakeApp:
            def run(self, host, port, debug=False):
                calls.update(host=host, port=port, debug=debug)

        monkeypatch.setattr(main, "create_app", lambda settings: FakeApp())
        main.main(["--port", "8080", "--log-level", "warning"])
        assert calls == {"host": main.DEFAULT_HOST, "port": 8080, "debug": False}
