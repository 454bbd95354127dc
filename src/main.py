#!/usr/bin/env python3
# src/main.py
"""Bling OAuth relay.
Serves the two JSON endpoints (start / callback) that drive the authorization-code flow.
"""

import os
import logging
import argparse

from app import create_app
from settings import load_settings

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 5000
LOG = logging.getLogger(__name__)


class BooleanAction(argparse.Action):
    def __call__(self, parser, namespace, values, option_string=None):
        if values.lower() in ("yes", "true", "t", "1"):
            setattr(namespace, self.dest, True)
        elif values.lower() in ("no", "false", "f", "0"):
            setattr(namespace, self.dest, False)
        else:
            raise argparse.ArgumentTypeError(f"Unsupported boolean value: {values}")


# -------------------- CLI --------------------
def parse_args(argv=None):
    p = argparse.ArgumentParser(prog="bling-oauth-relay")
    p.add_argument("--host", default=DEFAULT_HOST, help="Interface to bind.")
    p.add_argument("--port", type=int, default=DEFAULT_PORT, help="Port to listen on.")
    p.add_argument("--debug", dest="debug", action=BooleanAction,
                   type=str, default=False,
                   choices=["yes", "no", "true", "false", "t", "f", "1", "0"],
                   help="Toggle the Flask debugger.")
    p.add_argument("--log-level", default=None, help="Logging level (default: $LOG_LEVEL or INFO).")
    return p.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    settings = load_settings()
    level = (args.log_level or os.getenv("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(level=level, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    if not settings.production and args.host not in ("127.0.0.1", "localhost"):
        LOG.warning("Serving on %s without APP_ENV=production; cookies are not marked Secure", args.host)
    LOG.info("Redirect URI: %s", settings.redirect_uri)

    app = create_app(settings)
    app.run(args.host, args.port, debug=args.debug)


if __name__ == "__main__":
    main()
