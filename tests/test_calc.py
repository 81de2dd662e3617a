import ipaddress
import re

import pytest

from sporkle.calc import (
    chr_reply,
    convert_base,
    length,
    netmask,
    ord_reply,
    parse_cidr,
    parse_mask,
    utf8_repr,
)

_RANGE = re.compile(r"is in the range (\S+)-(\S+) and has the netmask (\S+)$")
_BASE = re.compile(r"^(\S+) in base (\d+) is (\S+) in base (\d+)$")
_LEN = re.compile(r"is (\d+) characters long$")


def _range(reply):
    match = _RANGE.search(reply)
    assert match, reply
    return tuple(ipaddress.ip_address(part) for part in match.groups())


def test_parse_cidr_pinned():
    assert parse_cidr("192.168.1.77/24") == (
        "192.168.1.77/24 is in the range 192.168.1.0-192.168.1.255 "
        "and has the netmask 255.255.255.0"
    )


@pytest.mark.parametrize("cidr", ["10.20.30.40/12", "2001:db8::1/64", "172.16.5.4/32"])
def test_parse_cidr_range_contains_address(cidr):
    reply = parse_cidr(cidr)
    assert reply.startswith(cidr + " ")
    bottom, top, mask = _range(reply)
    addr = ipaddress.ip_address(cidr.split("/")[0])
    assert bottom <= addr <= top
    prefix = int(cidr.split("/")[1])
    assert int(top) - int(bottom) + 1 == 2 ** (addr.max_prefixlen - prefix)
    assert int(bottom) & int(mask) == int(bottom)


@pytest.mark.parametrize("bad", ["nonsense/99", "1.2.3.4/33", "1.2.3.4/abc"])
def test_parse_cidr_errors(bad):
    assert parse_cidr(bad).startswith(f"error parsing ip/cidr {bad}: ")


def test_parse_mask_pinned():
    assert parse_mask("10.1.2.3", "255.255.0.0") == (
        "10.1.2.3/16 is in the range 10.1.0.0-10.1.255.255 and has the netmask 255.255.0.0"
    )


def test_parse_mask_matches_cidr_range():
    by_mask = _range(parse_mask("192.168.7.9", "255.255.255.0"))
    by_cidr = _range(parse_cidr("192.168.7.9/24"))
    assert by_mask == by_cidr


def test_parse_mask_unparseable():
    assert parse_mask("foo", "bar") == "either foo or bar couldn't be parsed as an IP"


def test_parse_mask_mixed_families():
    assert parse_mask("10.0.0.1", "ffff::") == (
        "can't mix v4 and v6 ip / netmask specifications"
    )


def test_parse_mask_non_canonical_v4():
    assert parse_mask("10.0.0.1", "255.0.255.0") == (
        "255.0.255.0 doesn't look like a valid IPv4 netmask"
    )


def test_parse_mask_non_canonical_v6():
    assert parse_mask("2001:db8::1", "ffff::ffff") == (
        "ffff::ffff doesn't look like a valid IPv6 netmask"
    )


def test_netmask_dispatch():
    assert netmask("10.0.0.1/8") == parse_cidr("10.0.0.1/8")
    assert netmask("10.0.0.1 255.0.0.0") == parse_mask("10.0.0.1", "255.0.0.0")
    assert netmask("a b c") == "bad netmask args: a b c"
    assert netmask("10.0.0.1") == "bad netmask args: 10.0.0.1"


def test_chr_pinned():
    assert chr_reply("0x41") == "chr(0x41) is A, U+0041, '0x41'"


@pytest.mark.parametrize("spelling", ["0x20ac", "U+20AC", "8364", "020254"])
def test_chr_spellings_agree(spelling):
    assert chr_reply(spelling).split(" is ", 1)[1] == chr_reply("0x20ac").split(" is ", 1)[1]


def test_chr_error():
    reply = chr_reply("XYZ")
    assert reply.startswith("Couldn't parse xyz as an integer: ")
    assert "invalid syntax" in reply


def test_chr_out_of_range():
    assert "value out of range" in chr_reply("0x10000000000000000")


def test_chr_and_ord_agree():
    ordinal = ord_reply("€")
    code = re.search(r"is (\d+),", ordinal).group(1)
    chr_tail = chr_reply(code).split(" is ", 1)[1].split(", ", 1)[1]
    ord_tail = ordinal.split(" is ", 1)[1].split(", ", 1)[1]
    assert chr_tail == ord_tail


def test_ord_empty():
    assert ord_reply("") == "Couldn't parse a utf8 rune from "


def test_ord_uses_first_character_only():
    assert ord_reply("ab") == ord_reply("a")


@pytest.mark.parametrize("char", ["A", "é", "€", "😀"])
def test_utf8_repr_round_trip(char):
    parts = utf8_repr(char).split(" ")
    assert len(parts) == len(char.encode("utf-8"))
    assert bytes(int(p, 16) for p in parts).decode("utf-8") == char
    assert utf8_repr(ord(char)) == utf8_repr(char)


def test_utf8_repr_invalid_code_points_use_replacement():
    assert utf8_repr(0xD800) == utf8_repr("\ufffd")
    assert utf8_repr(0x110000) == utf8_repr("\ufffd")


@pytest.mark.parametrize("number", ["255", "-1000", "0", "123456789"])
def test_convert_base_round_trip(number):
    forward = _BASE.match(convert_base(f"10to16 {number}"))
    assert forward.group(1) == number
    back = _BASE.match(convert_base(f"16to10 {forward.group(3)}"))
    assert int(back.group(3)) == int(number)


def test_convert_base_to_same_base_is_identity():
    match = _BASE.match(convert_base("36to36 zz9"))
    assert match.group(3) == "zz9"


def test_convert_base_bad_spec():
    assert convert_base("10 5") == "Specify base as: <from base>to<to base>"


def test_convert_base_bad_base():
    assert convert_base("1to50 5") == "Either 1 or 50 is a bad base, must be in range 2-36"


def test_convert_base_bad_number():
    assert convert_base("10to2 zz") == "Couldn't parse zz as a base 10 integer"


def test_length_counts_bytes():
    multibyte = int(_LEN.search(length("é")).group(1))
    two_ascii = int(_LEN.search(length("ab")).group(1))
    assert multibyte == two_ascii
    assert length("abc").startswith("'abc' is ")