"""Calculator-style commands: netmasks, characters, number bases and lengths."""

import ipaddress
import re

HELP = {
    "netmask": "netmask <ip/cidr>|<ip> <mask>  -- calculate IPv4 / IPv6 netmasks",
    "chr": "chr <int>  -- prints the character represented by <int> in various formats",
    "ord": "ord <char>  -- prints the numeric and UTF-8 representations of <char>",
    "base": "base <from>to<to> <num>  -- converts <num> from base <from> to base <to>",
    "length": "length <string>  -- prints the length of <string>",
}

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1
_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"
_REPLACEMENT = "\ufffd"
_MAX_RUNE = 0x10FFFF

_IPAddress = ipaddress.IPv4Address | ipaddress.IPv6Address


def _parse_ip(text: str) -> _IPAddress | None:
    if not text or "%" in text:
        return None
    try:
        return ipaddress.ip_address(text)
    except ValueError:
        return None


def _as_v4(addr: _IPAddress) -> ipaddress.IPv4Address | None:
    if isinstance(addr, ipaddress.IPv4Address):
        return addr
    return addr.ipv4_mapped


def _format_ip(addr: _IPAddress) -> str:
    v4 = _as_v4(addr)
    return str(v4 if v4 is not None else addr)


def _network_from_cidr(cidr: str) -> ipaddress.IPv4Network | ipaddress.IPv6Network:
    host, sep, bits = cidr.partition("/")
    error = ValueError(f"invalid CIDR address: {cidr}")
    if not sep or not re.fullmatch(r"[0-9]+", bits):
        raise error
    addr = _parse_ip(host)
    if addr is None:
        raise error
    prefix = int(bits)
    if prefix > addr.max_prefixlen:
        raise error
    return ipaddress.ip_network((addr, prefix), strict=False)


def parse_cidr(cidr: str) -> str:
    """Describe the address range covered by an ip/cidr specification."""
    try:
        network = _network_from_cidr(cidr)
    except ValueError as exc:
        return f"error parsing ip/cidr {cidr}: {exc}"
    return (
        f"{cidr} is in the range {_format_ip(network.network_address)}-"
        f"{_format_ip(network.broadcast_address)} and has the netmask "
        f"{_format_ip(network.netmask)}"
    )


def parse_mask(ip: str, netmask: str) -> str:
    """Describe the address range given by an address and a dotted netmask."""
    addr = _parse_ip(ip)
    mask = _parse_ip(netmask)
    if addr is None or mask is None:
        return f"either {ip} or {netmask} couldn't be parsed as an IP"
    addr4, mask4 = _as_v4(addr), _as_v4(mask)
    if (addr4 is None) != (mask4 is None):
        return "can't mix v4 and v6 ip / netmask specifications"
    v4 = addr4 is not None
    if v4:
        addr, mask = addr4, mask4
    width = addr.max_prefixlen
    full = (1 << width) - 1
    mask_bits = int(mask)
    inverse = ~mask_bits & full
    if inverse & (inverse + 1):
        family = "IPv4" if v4 else "IPv6"
        return f"{netmask} doesn't look like a valid {family} netmask"
    prefix = width - inverse.bit_length()
    cls = type(addr)
    bottom = cls(int(addr) & mask_bits)
    top = cls(int(addr) | inverse)
    return (
        f"{_format_ip(addr)}/{prefix} is in the range {_format_ip(bottom)}-"
        f"{_format_ip(top)} and has the netmask {_format_ip(mask)}"
    )


def netmask(text: str) -> str:
    """Handle 'netmask <ip/cidr>' or 'netmask <ip> <mask>'."""
    parts = text.split(" ")
    if len(parts) == 1 and "/" in parts[0]:
        return parse_cidr(parts[0])
    if len(parts) == 2:
        return parse_mask(parts[0], parts[1])
    return f"bad netmask args: {text}"


def _valid_rune(code: int) -> bool:
    return 0 <= code <= _MAX_RUNE and not 0xD800 <= code <= 0xDFFF


def utf8_repr(char: str | int) -> str:
    """Space-separated hex bytes of the UTF-8 encoding of a character or code point."""
    code = ord(char) if isinstance(char, str) else char
    encoded = (chr(code) if _valid_rune(code) else _REPLACEMENT).encode("utf-8")
    return " ".join(f"0x{byte:x}" for byte in encoded)


def _unicode_notation(code: int) -> str:
    return f"U+{code & ((1 << 64) - 1):04X}"


def _parse_int_auto(text: str) -> int:
    """Parse a signed integer whose base is given by its prefix, in 64 bits."""
    syntax = ValueError(f'strconv.ParseInt: parsing "{text}": invalid syntax')
    body = text
    negative = False
    if body[:1] in ("+", "-"):
        negative = body[0] == "-"
        body = body[1:]
    lowered = body.lower()
    prefixed = True
    if lowered.startswith("0x"):
        base, digits = 16, body[2:]
    elif lowered.startswith("0b"):
        base, digits = 2, body[2:]
    elif lowered.startswith("0o"):
        base, digits = 8, body[2:]
    elif lowered.startswith("0") and len(body) > 1:
        base, digits = 8, body[1:]
    else:
        base, digits, prefixed = 10, body, False
    if not re.fullmatch(r"[0-9a-zA-Z_]+", digits or "!"):
        raise syntax
    if "__" in digits or digits.endswith("_") or (digits.startswith("_") and not prefixed):
        raise syntax
    try:
        value = int(digits.replace("_", ""), base)
    except ValueError:
        raise syntax from None
    if negative:
        value = -value
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ValueError(f'strconv.ParseInt: parsing "{text}": value out of range')
    return value


def chr_reply(text: str) -> str:
    """Describe the character with the given decimal, hex, octal or U+ code."""
    spec = text.lower()
    if spec.startswith("u+"):
        spec = "0x" + spec[2:]
    try:
        value = _parse_int_auto(spec)
    except ValueError as exc:
        return f"Couldn't parse {spec} as an integer: {exc}"
    char = chr(value) if _valid_rune(value) else _REPLACEMENT
    rune = ((value + (1 << 31)) % (1 << 32)) - (1 << 31)
    return f"chr({spec}) is {char}, {_unicode_notation(value)}, '{utf8_repr(rune)}'"


def ord_reply(text: str) -> str:
    """Describe the first character of text numerically and as UTF-8."""
    first = text[:1]
    if not first or first == _REPLACEMENT or not _valid_rune(ord(first)):
        return f"Couldn't parse a utf8 rune from {text}"
    code = ord(first)
    return f"ord({first}) is {code}, {_unicode_notation(code)}, '{utf8_repr(code)}'"


def _atoi(text: str) -> int:
    if not re.fullmatch(r"[+-]?[0-9]+", text):
        raise ValueError(text)
    return int(text)


def _format_int(value: int, base: int) -> str:
    if value == 0:
        return "0"
    sign = "-" if value < 0 else ""
    value = abs(value)
    digits = []
    while value:
        value, rem = divmod(value, base)
        digits.append(_DIGITS[rem])
    return sign + "".join(reversed(digits))


def convert_base(text: str) -> str:
    """Handle 'base <from>to<to> <num>'."""
    parts = text.split(" ")
    fromto = parts[0].split("to")
    if len(fromto) != 2:
        return "Specify base as: <from base>to<to base>"
    try:
        src, dst = _atoi(fromto[0]), _atoi(fromto[1])
    except ValueError:
        src = dst = 0
    if not (2 <= src <= 36 and 2 <= dst <= 36):
        return f"Either {fromto[0]} or {fromto[1]} is a bad base, must be in range 2-36"
    number = parts[1] if len(parts) > 1 else ""
    failure = f"Couldn't parse {number} as a base {src} integer"
    if not re.fullmatch(r"[+-]?[0-9a-zA-Z]+", number):
        return failure
    try:
        value = int(number, src)
    except ValueError:
        return failure
    if not _INT64_MIN <= value <= _INT64_MAX:
        return failure
    return f"{number} in base {src} is {_format_int(value, dst)} in base {dst}"


def length(text: str) -> str:
    """Report the length of text in UTF-8 bytes."""
    return f"'{text}' is {len(text.encode('utf-8'))} characters long"