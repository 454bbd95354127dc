#!/usr/bin/env python3
# src/time_helpers.py

import time
from typing import Optional


def now_epoch() -> int:
    return int(time.time())


def seconds_since(epoch: int) -> int:
    """
    Whole seconds elapsed since a Unix timestamp.
    A timestamp in the future yields a negative number.
    """
    return now_epoch() - int(epoch)


def is_expired(created_at: Optional[int], ttl_seconds: int) -> bool:
    """
    Return True when `created_at` is older than `ttl_seconds`.
    A missing timestamp never counts as expired; the cookie Max-Age covers that case.
    """
    if created_at is None:
        return False
    return seconds_since(created_at) > ttl_seconds
