"""Random decisions: numbers in a range and choices among options."""

import math
import random
import struct

HELP = {
    "rand": "rand <range>  -- choose a random number in range [lo-]hi",
    "decide": "decide <options>  -- "
    "choose one of the (space, pipe, quote) delimited options at random",
    "choose": "choose <options>  -- "
    "choose one of the (space, pipe, quote) delimited options at random",
}

_QUOTES = "\"'"


class UnbalancedQuotesError(ValueError):
    """Raised when a quoted option has no closing quote."""

    def __init__(self, message: str = "unbalanced quotes") -> None:
        super().__init__(message)


def _is_space(char: str) -> bool:
    return char.isspace() and char not in "\x1c\x1d\x1e\x1f"


def _parse_float32(text: str) -> float:
    """Parse text as a single-precision float; unparseable values give 0."""
    if not text or text.strip() != text or "_" in text:
        return 0.0
    try:
        value = float(text)
    except ValueError:
        return 0.0
    if math.isinf(value) or math.isnan(value):
        return value
    try:
        return struct.unpack("f", struct.pack("f", value))[0]
    except OverflowError:
        return 0.0


def random_float_as_string(val: str) -> str:
    """Format a random number from '[lo-]hi[ format]', formatted with %.0f by default."""
    fmt = "%.0f"
    space = val.find(" ")
    if space != -1:
        fmt = val[space:].strip()
        val = val[:space]
    lo_text, dash, hi_text = val.partition("-")
    if dash:
        lo, hi = _parse_float32(lo_text), _parse_float32(hi_text)
    else:
        lo, hi = 0.0, _parse_float32(val)
    number = random.random() * (hi - lo) + lo
    try:
        return fmt % number
    except (TypeError, ValueError):
        return f"{fmt}%!(float64={number!r})"


def _simple_split(val: str) -> list[str]:
    if "|" in val:
        return val.split("|")
    return val.split(" ")


def _quote_split(val: str) -> list[str]:
    options = []
    pos, end = 0, len(val)
    while True:
        while pos < end and _is_space(val[pos]):
            pos += 1
        if pos >= end:
            return options
        char = val[pos]
        if char in _QUOTES:
            close = val.find(char, pos + 1)
            if close == -1:
                raise UnbalancedQuotesError()
            options.append(val[pos + 1:close])
            pos = close + 1
        else:
            start = pos
            while pos < end and not _is_space(val[pos]):
                pos += 1
            options.append(val[start:pos])


def split_delimited_string(val: str) -> list[str]:
    """Split options on quotes, pipes or spaces, in that order of preference.

    Quoted parsing is used when a quote opens a word and its match closes
    one; otherwise pipes are delimiters if present, else spaces.
    """
    idx = next((i for i, c in enumerate(val) if c in _QUOTES), -1)
    if idx == -1 or idx == len(val) - 1:
        return _simple_split(val)
    if idx == 0 or val[idx - 1] == " ":
        close = val.find(val[idx], idx + 1)
        if close == -1:
            return _simple_split(val)
        after_open, before_close = val[idx + 1], val[close - 1]
        if (
            not _is_space(after_open)
            and not _is_space(before_close)
            and (close == len(val) - 1 or val[close + 1] == " ")
        ):
            return _quote_split(val)
    return _simple_split(val)


def decide(text: str) -> str:
    """Pick one of the delimited options in text at random, stripped of spaces."""
    options = split_delimited_string(text)
    if not options:
        raise ValueError("no options to choose from")
    return random.choice(options).strip()