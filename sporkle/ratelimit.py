"""Per-nick rate limiting for quote lookups."""

import time
from dataclasses import dataclass
from typing import Callable

HELP = {
    "qadd": "qadd <quote>  -- Adds a quote to the db.",
    "quote add": "quote add <quote>  -- Adds a quote to the db.",
    "add quote": "add quote <quote>  -- Adds a quote to the db.",
    "qdel": "qdel #<qID>  -- Deletes a quote from the db.",
    "quote del": "quote del #<qID>  -- Deletes a quote from the db.",
    "del quote": "del quote #<qID>  -- Deletes a quote from the db.",
    "quote #": "quote #<qID>  -- Displays quote <qID>.",
    "quote": "quote <regex>  -- Displays quotes matching <regex>",
}

INTERVAL = 15.0
MAX_BADNESS = 60.0


@dataclass
class _Limit:
    badness: float = 0.0
    last_sent: float | None = None


class RateLimiter:
    """Allows one request every 15 seconds per nick, with a burst allowance."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._limits: dict[str, _Limit] = {}

    def limited(self, nick: str) -> bool:
        """Record a request from nick and return True if it should be refused."""
        limit = self._limits.setdefault(nick, _Limit())
        now = self._clock()
        if limit.last_sent is None:
            limit.badness = 0.0
        else:
            elapsed = now - limit.last_sent
            limit.badness = max(0.0, limit.badness + INTERVAL - elapsed)
        if limit.badness > MAX_BADNESS:
            return True
        limit.last_sent = now
        return False