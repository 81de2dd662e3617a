"""Urban Dictionary lookups with a day-long result cache."""

import json
import time
import urllib.error
import urllib.parse
import urllib.request
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable

from sporkle.factoids import format_time

HELP = {"ud": "ud <term>  -- Look up <term> on UrbanDictionary."}

UD_URL = "http://api.urbandictionary.com/v0/define?term={}"
CACHE_LIFETIME = 24 * 60 * 60


def http_get(url: str) -> bytes:
    """Fetch url and return the response body, whatever the status code."""
    try:
        with urllib.request.urlopen(url) as response:
            return response.read()
    except urllib.error.HTTPError as exc:
        return exc.read()


@dataclass
class Definition:
    """One definition of a term."""

    word: str = ""
    definition: str = ""
    example: str = ""
    author: str = ""
    id: int = 0
    url: str = ""
    vote: str = ""
    upvotes: int = 0
    downvotes: int = 0
    term: str = ""
    type: str = ""

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "Definition":
        return cls(
            word=str(data.get("word", "")),
            definition=str(data.get("definition", "")),
            example=str(data.get("example", "")),
            author=str(data.get("author", "")),
            id=int(data.get("defid", 0)),
            url=str(data.get("permalink", "")),
            vote=str(data.get("current_vote", "")),
            upvotes=int(data.get("thumbs_up", 0)),
            downvotes=int(data.get("thumbs_down", 0)),
            term=str(data.get("term", "")),
            type=str(data.get("type", "")),
        )


@dataclass
class Result:
    """A lookup result; pages tracks the definition last shown."""

    type: str = ""
    has_related: bool = False
    pages: int = -1
    total: int = 0
    sounds: list[str] = field(default_factory=list)
    definitions: list[Definition] = field(default_factory=list)

    @classmethod
    def from_json(cls, raw: bytes) -> "Result":
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ValueError("unexpected JSON response")
        definitions = [Definition.from_json(d) for d in data.get("list") or []]
        return cls(
            type=str(data.get("result_type", "")),
            has_related=bool(data.get("has_related_words", False)),
            pages=-1,
            total=len(definitions),
            sounds=list(data.get("sounds") or []),
            definitions=definitions,
        )


@dataclass
class _CacheEntry:
    result: Result
    stamp: float


class UrbanDictionary:
    """Looks up terms, caching results for a day and cycling through definitions."""

    def __init__(
        self,
        fetch: Callable[[str], bytes] = http_get,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._fetch = fetch
        self._clock = clock
        self._cache: dict[str, _CacheEntry] = {}

    def prune(self) -> None:
        """Drop cache entries older than a day."""
        now = self._clock()
        for term in [t for t, e in self._cache.items() if now - e.stamp > CACHE_LIFETIME]:
            del self._cache[term]

    def fetch(self, term: str) -> tuple[Result, float, bool]:
        """Return the result for term, its cache time and whether it was cached."""
        self.prune()
        entry = self._cache.get(term)
        if entry is not None:
            return entry.result, entry.stamp, True
        raw = self._fetch(UD_URL.format(urllib.parse.quote_plus(term)))
        result = Result.from_json(raw)
        entry = _CacheEntry(result, self._clock())
        self._cache[term] = entry
        return result, entry.stamp, False

    def lookup(self, term: str) -> str:
        """Reply text for term, showing the next definition on repeated calls."""
        result, stamp, cached = self.fetch(term.lower())
        note = ""
        if cached:
            when = datetime.fromtimestamp(stamp).astimezone()
            note = f", result cached at {format_time(when)}"
        if result.total == 0 or result.type == "no_results":
            return f"{term} isn't defined yet{note}."
        result.pages = (result.pages + 1) % result.total
        definition = result.definitions[result.pages]
        text = definition.definition.replace("\r\n", " ")
        return (
            f"[{result.pages + 1}/{result.total}] {text} "
            f"({definition.upvotes} up, {definition.downvotes} down{note})"
        )