#!/usr/bin/env python3
# src/oauth_state.py

import hmac
import secrets

STATE_BYTES = 16


def generate_state() -> str:
    """Return a fresh, unguessable anti-forgery state (hex of 16 random bytes)."""
    return secrets.token_hex(STATE_BYTES)


def states_match(expected: str, received: str) -> bool:
    if not expected or not received:
        return False
    # surrogatepass keeps lone surrogates comparable instead of raising
    return hmac.compare_digest(
        expected.encode("utf-8", "surrogatepass"),
        received.encode("utf-8", "surrogatepass"),
    )
