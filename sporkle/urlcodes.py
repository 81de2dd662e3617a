"""Short codes for shortened and cached URLs."""

import base64
import random
import zlib
from typing import Callable

HELP = {
    "urlfind": "urlfind <regex>  -- searches for previously mentioned URLs matching <regex>",
    "url find": "url find <regex>  -- searches for previously mentioned URLs matching <regex>",
    "urlsearch": "urlsearch <regex>  -- searches for previously mentioned URLs matching <regex>",
    "url search": "url search <regex>  -- searches for previously mentioned URLs matching <regex>",
    "randurl": "randurl  -- displays a random URL",
    "random url": "random url  -- displays a random URL",
    "shorten that": "shorten that  -- shortens the last mentioned URL.",
    "shorten": "shorten <url>  -- shortens <url>",
    "cache that": "cache that  -- caches the last mentioned URL.",
    "cache": "cache <url>  -- caches <url>",
    "save that": "save that  -- caches the last mentioned URL.",
    "save": "save <url>  -- caches <url>",
}

SHORTEN_PATH = "/s/"
CACHE_PATH = "/c/"
AUTO_SHORTEN_LIMIT = 120
MAX_CACHE_SIZE = 1 << 22
BAD_URL_STRINGS = ("4chan",)

_ATTEMPTS = 10


class EncodeCollisionError(RuntimeError):
    """Raised when no free code is found for a URL."""

    def __init__(self, message: str = "collided 10 times while encoding URL") -> None:
        super().__init__(message)


def encode(url: str, is_taken: Callable[[str], bool]) -> str:
    """Derive a six-character code for url from its CRC32, avoiding taken codes."""
    crc = zlib.crc32(url.encode("utf-8"))
    crc_bytes = bytearray((crc >> i) & 0xFF for i in range(4))
    for _ in range(_ATTEMPTS):
        code = base64.urlsafe_b64encode(bytes(crc_bytes)).decode("ascii")[:6]
        if not is_taken(code):
            return code
        idx = random.randrange(4)
        crc_bytes[idx] = (crc_bytes[idx] + 1) & 0xFF
    raise EncodeCollisionError()


def check_bad_url(url: str) -> None:
    """Raise ValueError if url contains a substring that must not be cached."""
    for bad in BAD_URL_STRINGS:
        if bad in url:
            raise ValueError(f'url contains bad substring "{bad}"')