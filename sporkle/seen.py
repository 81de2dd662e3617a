"""Helpers for the 'seen' command: smoke detection and witty replies."""

import re

HELP = {
    "seen": "seen <nick> [action]  -- "
    "display the last time <nick> was seen on IRC [doing action]",
}

SMOKE_RX = re.compile(
    r"^(?:->\s*?)?(?:s(?:c?h)?m[o0]keh?|cig|fag|spliff|ch[o0]ng|t[o0]ke?)"
    r"(?:s|z?[0o]r)?\W*?(\?)?\Z",
    re.IGNORECASE | re.ASCII,
)

MILESTONES = [100, 500, 1000, 5000, 10000, 25000, 50000, 75000, 100000]

_WITTY_COMEBACKS = [
    (r"^my (?:arse|ass)\Z",
     "Pull your pants down and hit me with the view, big boy."),
    (r"^my (?:penis|cock|dick|wang)\Z",
     "No, thank god... Now put it away, no-one else wants to see it either."),
    (r"^(?:yo(?:'|ur)?|\w+'?s) (?:momma|mother|mum)\Z",
     "Yeah, she gives me a discount cos I see her so regularly \\o/"),
    (r"^\w+'?s (?:arse|ass|penis|cock|dick|wang)\Z",
     "Unfortunately not... I asked nicely but they're a bit shy :/"),
    (r"^me\Z", "You're right there, fool."),
]

WITTY_COMEBACKS = [
    (re.compile(pattern, re.IGNORECASE | re.ASCII), response)
    for pattern, response in _WITTY_COMEBACKS
]


def is_smoke(text: str) -> bool:
    """Whether text announces going for a smoke."""
    return SMOKE_RX.search(text) is not None


def witty_comeback(text: str) -> str | None:
    """A reply for a silly 'seen' query, or None if the query looks genuine."""
    for rx, response in WITTY_COMEBACKS:
        if rx.search(text):
            return response
    return None


def describe_matches(matches: list[str]) -> str | None:
    """Reply text for partial nick matches; None when there are none.

    A single match is expected to be the description of that nick's last sighting.
    """
    count = len(matches)
    if count == 0:
        return None
    if count == 1:
        return f"1 possible match: {matches[0]}"
    if count > 10:
        return f"{count} possible matches, most recent 10 are: {', '.join(matches[:9])}."
    return f"{count} possible matches: {', '.join(matches)}."