"""Factoid helpers: regex edits, trigger chances and $identifier expansion."""

import re
from datetime import datetime, timedelta
from typing import Callable

HELP = {
    "chance of that is": "chance  -- Sets trigger chance of the last displayed factoid value.",
    "that =~": "=~ s/regex/replacement/ -- Edits the last factoid value using regex.",
    "delete that": "delete  -- Forgets the last displayed factoid value.",
    "forget that": "forget  -- Forgets the last displayed factoid value.",
    "fact info": "fact info <key>  -- Displays some stats about factoid <key>.",
    "literal": "literal <key>  -- Displays the factoid values stored for <key>.",
    "replace that with": "replace  -- Replaces the last displayed factoid value.",
    "fact search": "fact search <regexp>  -- Searches for factoids matching <regexp>.",
}

DEFAULT_LAYOUT = "15:04:05, Monday 2 January 2006 MST"

_MONTHS = [
    "January", "February", "March", "April", "May", "June", "July",
    "August", "September", "October", "November", "December",
]
_DAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]

_NAME = re.compile(r"\w+")
_INTEGER = re.compile(r"[+-]?[0-9]+")


def _extract(text: str, pos: int, delim: str) -> tuple[str, int]:
    """Read up to an unescaped delimiter starting at pos; return it and the new position."""
    ret = ""
    end_of_text = len(text)
    while True:
        end = text.find(delim, pos) if delim else -1
        if end == -1:
            end = end_of_text
        ret += text[pos:end]
        pos = end
        trailing = len(ret) - len(ret.rstrip("\\"))
        if pos >= end_of_text or trailing % 2 == 0:
            return ret, pos
        ret += text[pos]
        pos += 1


def extract_rx(text: str, delim: str) -> str:
    """Return text up to the first delimiter not escaped by a backslash."""
    return _extract(text, 0, delim)[0]


def _group(match: re.Match, name: str) -> str:
    if name.isascii() and name.isdigit():
        index = int(name)
        if index > (match.re.groups):
            return ""
        return match.group(index) or ""
    return match.groupdict().get(name) or ""


def _expand(template: str, match: re.Match) -> str:
    """Expand $1, ${1}, $name, ${name} and $$ in a replacement template."""
    out = []
    i, n = 0, len(template)
    while i < n:
        char = template[i]
        if char != "$":
            out.append(char)
            i += 1
            continue
        i += 1
        if i < n and template[i] == "$":
            out.append("$")
            i += 1
            continue
        if i < n and template[i] == "{":
            close = template.find("}", i + 1)
            name = template[i + 1:close] if close != -1 else ""
            if close == -1 or not _NAME.fullmatch(name):
                out.append("$")
                continue
            i = close + 1
        else:
            found = _NAME.match(template, i)
            if not found:
                out.append("$")
                continue
            name = found.group()
            i = found.end()
        out.append(_group(match, name))
    return "".join(out)


def parse_edit(text: str) -> Callable[[str], str]:
    """Parse 's/<regex>/<replacement>/' into a function applying that edit.

    Raises ValueError with a user-facing message if the edit is malformed.
    """
    if not text.startswith("s"):
        raise ValueError("It's 'that =~ s/<regex>/<replacement>/', fool.")
    size = len(text)
    delim = text[1] if size > 1 else ""
    pos = min(2, size)
    pattern, pos = _extract(text, pos, delim)
    pos = min(pos + 1, size)
    replacement, pos = _extract(text, pos, delim)
    if not delim or pos >= size or text[pos] != delim:
        raise ValueError(f"Couldn't parse regex: re='{pattern}', rp='{replacement}'.")
    try:
        compiled = re.compile(pattern)
    except re.error as exc:
        raise ValueError(f"Couldn't compile regex '{pattern}': {exc}") from None

    def apply(value: str) -> str:
        return compiled.sub(lambda m: _expand(replacement, m), value)

    return apply


def _parse_float(text: str) -> float:
    if not text or text.strip() != text or "_" in text:
        raise ValueError(text)
    return float(text)


def parse_chance(text: str) -> float:
    """Parse 'N%' or a float into a trigger chance in (0, 1]."""
    if text.endswith("%"):
        digits = text[:-1]
        if not _INTEGER.fullmatch(digits):
            raise ValueError(f"'{text}' didn't look like a % chance to me.")
        chance = int(digits) / 100
    else:
        try:
            chance = _parse_float(text)
        except ValueError:
            raise ValueError(f"'{text}' didn't look like a chance to me.") from None
    if chance > 1.0 or chance <= 0.0:
        raise ValueError(f"'{text}' was outside possible chance ranges.")
    return chance


def _offset(ts: datetime, colon: bool, zulu: bool = False, minutes: bool = True) -> str:
    delta = ts.utcoffset() or timedelta(0)
    seconds = int(delta.total_seconds())
    if zulu and seconds == 0:
        return "Z"
    sign = "-" if seconds < 0 else "+"
    hours, rem = divmod(abs(seconds) // 60, 60)
    if not minutes:
        return f"{sign}{hours:02d}"
    sep = ":" if colon else ""
    return f"{sign}{hours:02d}{sep}{rem:02d}"


def _hour12(ts: datetime) -> int:
    return ts.hour % 12 or 12


_TOKENS: list[tuple[str, Callable[[datetime], str]]] = [
    ("January", lambda t: _MONTHS[t.month - 1]),
    ("Monday", lambda t: _DAYS[t.weekday()]),
    ("2006", lambda t: f"{t.year:04d}"),
    ("-07:00", lambda t: _offset(t, True)),
    ("-0700", lambda t: _offset(t, False)),
    ("Z07:00", lambda t: _offset(t, True, zulu=True)),
    ("-07", lambda t: _offset(t, False, minutes=False)),
    ("Jan", lambda t: _MONTHS[t.month - 1][:3]),
    ("Mon", lambda t: _DAYS[t.weekday()][:3]),
    ("MST", lambda t: t.tzname() or ""),
    ("01", lambda t: f"{t.month:02d}"),
    ("02", lambda t: f"{t.day:02d}"),
    ("_2", lambda t: f"{t.day:2d}"),
    ("03", lambda t: f"{_hour12(t):02d}"),
    ("04", lambda t: f"{t.minute:02d}"),
    ("05", lambda t: f"{t.second:02d}"),
    ("06", lambda t: f"{t.year % 100:02d}"),
    ("15", lambda t: f"{t.hour:02d}"),
    ("PM", lambda t: "PM" if t.hour >= 12 else "AM"),
    ("pm", lambda t: "pm" if t.hour >= 12 else "am"),
    ("1", lambda t: str(t.month)),
    ("2", lambda t: str(t.day)),
    ("3", lambda t: str(_hour12(t))),
    ("4", lambda t: str(t.minute)),
    ("5", lambda t: str(t.second)),
]


def format_time(ts: datetime, layout: str | None = None) -> str:
    """Format ts using a reference-time layout such as '15:04:05'."""
    if ts.tzinfo is None:
        ts = ts.astimezone()
    layout = layout or DEFAULT_LAYOUT
    out = []
    i = 0
    while i < len(layout):
        for token, render in _TOKENS:
            if layout.startswith(token, i):
                out.append(render(ts))
                i += len(token)
                break
        else:
            out.append(layout[i])
            i += 1
    return "".join(out)


def replace_identifiers(
    val: str,
    nick: str,
    channel: str,
    ident: str,
    host: str,
    ts: datetime | None = None,
) -> str:
    """Expand $nick, $chan, $username, $user, $host, $date and $time in val."""
    if ts is None:
        ts = datetime.now().astimezone()
    replacements = [
        ("$nick", nick),
        ("$chan", channel),
        ("$username", ident),
        ("$user", ident),
        ("$host", host),
        ("$date", format_time(ts)),
        ("$time", format_time(ts, "15:04:05")),
    ]
    for name, value in replacements:
        val = val.replace(name, value)
    return val