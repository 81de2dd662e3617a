"""Extraction of karma changes such as 'thing++' or '(some thing)--' from text."""

import unicodedata
from dataclasses import dataclass

HELP = {"karma": "karma <thing>  -- Retrieve the karma score of <thing>."}

_SPACES = frozenset("\t\n\v\f\r \x85\xa0")


@dataclass(frozen=True)
class KarmaThing:
    """A single karma change: the thing and whether it went up."""

    thing: str
    plus: bool


def _is_space(char: str) -> bool:
    return char in _SPACES or (
        ord(char) > 0xFF and unicodedata.category(char) in ("Zs", "Zl", "Zp")
    )


def _is_plus_minus(char: str) -> bool:
    return char in "+-"


def _is_alphanumeric(char: str) -> bool:
    return unicodedata.category(char)[0] in "LN"


class _ReverseScanner:
    """Scans a string from its end towards its start."""

    def __init__(self, text: str) -> None:
        self._text = text[::-1]
        self._pos = 0

    def peek(self) -> str:
        return self._text[self._pos] if self._pos < len(self._text) else ""

    def advance(self) -> None:
        self._pos = min(self._pos + 1, len(self._text))

    def scan(self, accept) -> str:
        start = self._pos
        while self._pos < len(self._text) and accept(self._text[self._pos]):
            self._pos += 1
        return self._text[start:self._pos]

    def find(self, char: str) -> str:
        return self.scan(lambda c: c != char)


def karma_things(s: str) -> list[KarmaThing]:
    """Find karma changes in s, from the last to the first occurrence."""
    found = []
    scanner = _ReverseScanner(s)
    while True:
        prefix = scanner.scan(lambda c: not _is_plus_minus(c))
        if not scanner.peek():
            break
        if prefix and not _is_space(prefix[-1]):
            scanner.advance()
            continue
        marks = scanner.scan(_is_plus_minus)
        if marks == "++":
            plus = True
        elif marks == "--":
            plus = False
        else:
            continue
        if scanner.peek() == ")":
            scanner.advance()
            thing = scanner.find("(")[::-1]
            if not scanner.peek():
                break
        else:
            thing = scanner.scan(_is_alphanumeric)[::-1]
        if thing:
            found.append(KarmaThing(thing, plus))
    return found