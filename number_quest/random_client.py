"""
Random numbers for new rounds, over HTTP with a clear fallback.
Ask random.org for one integer in a range. If anything goes wrong (no
internet, timeout, bad response), fall back to a local secure random
generator so the game still works.

Both sources have randint(low, high) with both ends included, same as
random.Random, so tests can pass random.Random(seed) or a tiny fake instead.
"""

import logging
import random
from typing import Optional

import requests

from .config import get_settings

logger = logging.getLogger(__name__)

RANDOM_URL = "https://www.random.org/integers/"


class RandomOrgSource:
    """randint() backed by random.org, with a local fallback."""

    def __init__(self, timeout_seconds: Optional[float] = None, fallback: Optional[random.Random] = None) -> None:
        # keep network quick; if it takes too long, we will just fallback
        if timeout_seconds is None:
            timeout_seconds = get_settings().random_org_timeout
        self.timeout_seconds = timeout_seconds
        self.fallback = fallback if fallback is not None else random.SystemRandom()

    def randint(self, low: int, high: int) -> int:
        # Parameters to send to random.org
        params = {
            "num": 1,          # one number per call
            "min": low,        # smallest allowed number
            "max": high,       # largest allowed number
            "col": 1,          # one number per line
            "base": 10,        # normal decimal numbers
            "format": "plain", # plain text response
            "rnd": "new",      # always generate new numbers
        }

        try:
            response = requests.get(RANDOM_URL, params=params, timeout=self.timeout_seconds)

            # If the response was not 200 OK, this will raise an error
            response.raise_for_status()

            # The body looks like: "17\n"
            lines = [line.strip() for line in response.text.splitlines() if line.strip() != ""]
            if len(lines) != 1:
                raise ValueError(f"random.org returned {len(lines)} values, expected 1.")

            value = int(lines[0])
            if value < low or value > high:
                raise ValueError(f"random.org number {value} out of range {low}..{high}.")

            return value

        except (requests.RequestException, ValueError) as exc:
            logger.warning("random.org unavailable (%s); using local random", exc)
            return self.fallback.randint(low, high)


def make_random_source():
    """Pick the source configured by RANDOM_SOURCE ("random_org" or "local")."""
    settings = get_settings()
    if settings.random_source == "local":
        return random.SystemRandom()
    return RandomOrgSource(timeout_seconds=settings.random_org_timeout)
