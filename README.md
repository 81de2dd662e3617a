# sporkle

This library holds the text-handling parts of an IRC chat bot as plain Python
functions and classes. Most functions take the text of a command and return
either the reply or the parsed result. The library has no runtime
dependencies.

## Install

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Modules

Each module has a `HELP` dictionary. It maps command names to their one-line
usage text.

### `sporkle.calc`

- `netmask(text)` takes either `ip/cidr` or `ip mask`. `parse_cidr` and `parse_mask` describe an IPv4 or IPv6 range in the same way.
- `chr_reply(text)` takes a code in decimal, hex, octal or `U+XXXX` form. It describes the character with that code.
- `ord_reply(text)` describes the first character of the text.
- `utf8_repr(char)` gives the UTF-8 bytes of a character or code point as hex, for example `0xe2 0x82 0xac`.
- `convert_base(text)` takes input of the form `<from>to<to> <num>`. It converts a 64-bit integer between bases 2 and 36.
- `length(text)` reports the length of the text in UTF-8 bytes.

### `sporkle.decision`

- `split_delimited_string(val)` splits a list of options in one of three ways:
  - as quoted strings, when quotes open and close words;
  - on pipes, if there are any;
  - on spaces.

  A quoted option with no closing quote raises `UnbalancedQuotesError`, which is a subclass of `ValueError`.
- `decide(text)` picks one of the options at random and strips the spaces around it.
- `random_float_as_string(val)` takes a string of the form `[lo-]hi[ format]`. It returns a random number in that range, formatted with the given `%` format. The default format is `%.0f`.

### `sporkle.factoids`

- `parse_edit(text)` parses `s/<regex>/<replacement>/`. It returns a function that applies the edit to a string. The replacement may use `$1`, `${name}` and `$$`. A malformed edit raises `ValueError` with a message that can be shown to the user.
- `extract_rx(text, delim)` returns the text up to the first delimiter that is not escaped.
- `parse_chance(text)` reads a chance written as `50%` or `0.5` and returns a float. It raises `ValueError` when the value is outside (0, 1].
- `replace_identifiers(val, nick, channel, ident, host, ts=None)` expands `$nick`, `$chan`, `$username`, `$user`, `$host`, `$date` and `$time`.
- `format_time(ts, layout=None)` formats a `datetime` using a reference-time layout such as `15:04:05`. The default layout is `15:04:05, Monday 2 January 2006 MST`.

### `sporkle.karma`

`karma_things(s)` finds `thing++`, `thing--` and `(a few words)++` in a line. It returns them as frozen `KarmaThing(thing, plus)` values, starting with the last one in the line.

### `sporkle.minecraft`

- `poll_server(server, timeout=60.0)` queries the server at `host:port` over the UDP query protocol. It returns a `McStatus`.
- The packet helpers are `parse_challenge`, `build_status_request` and `parse_status`. `parse_challenge` and `parse_status` raise `ValueError` on malformed data.
- `McStatus.topic(current, server)` builds a channel topic from the status. It keeps any ` || ...` suffix of the current topic.

### `sporkle.urbandictionary`

`UrbanDictionary(fetch=http_get, clock=time.time)` looks up terms on Urban Dictionary:

- It caches each result for 24 hours.
- `lookup(term)` returns reply text. Repeated lookups of the same term step through its definitions in turn.
- `fetch(term)` returns the parsed `Result`, the time it was cached, and whether it came from the cache.
- `prune()` drops entries older than a day.

You can pass in `fetch` and `clock`, for example to test without network access.

### `sporkle.ratelimit`

`RateLimiter(clock=time.monotonic).limited(nick)` records a request from a nick. It returns `True` when the request should be refused.

Each request adds 15 seconds of "badness", and the time since the last allowed request is taken off again. Requests are refused while the badness is over 60 seconds.

### `sporkle.seen`

- `is_smoke(text)` spots smoke-break announcements.
- `witty_comeback(text)` gives a canned answer to a silly "seen" query. It returns `None` for a query that looks genuine.
- `describe_matches(matches)` summarises partial nick matches.

### `sporkle.urlcodes`

- `encode(url, is_taken)` builds a six-character URL-safe code from the CRC32 of a URL. If `is_taken` reports a clash, it changes the code and tries again. After ten clashes it raises `EncodeCollisionError`.
- `check_bad_url(url)` raises `ValueError` for URLs that contain a blocked substring.

## Example

```python
from sporkle.calc import netmask
from sporkle.karma import karma_things

print(netmask("192.168.1.0/24"))
# 192.168.1.0/24 is in the range 192.168.1.0-192.168.1.255 and has the netmask 255.255.255.0

print(karma_things("a++ b-- c++"))
# [KarmaThing(thing='c', plus=True), KarmaThing(thing='b', plus=False), KarmaThing(thing='a', plus=True)]
```

## What this package does not do

The package is a library only. It does not:

- connect to IRC or dispatch commands;
- provide a command-line program;
- store factoids, karma, quotes, reminders, "seen" records, statistics or URLs;
- run an HTTP server for shortened or cached URLs;
- download pages to cache them.

A bot that uses these functions has to supply all of that itself.