"""Polling of Minecraft servers over the UDP query protocol."""

import re
import socket
import struct
from dataclasses import dataclass, field

HELP = {"mc set": "mc set <key> <value>  -- Set minecraft server polling config vars."}

SERVER_KEY = "server"
FREQ_KEY = "freq"
CHAN_KEY = "chan"

HANDSHAKE = b"\xfe\xfd\x09\x00\x00\x00\x00"
GET_STATUS = b"\xfe\xfd\x00\x00\x00\x00\x00"
PLAYER_DATA = b"\x00\x00\x01player_\x00\x00"

_BUFFER_SIZE = 1024
_INTEGER = re.compile(rb"[+-]?[0-9]+")


@dataclass
class McStatus:
    """The state of a Minecraft server as reported by a status query."""

    motd: str = ""
    nump: str = ""
    maxp: str = ""
    players: list[str] = field(default_factory=list)
    version: str = ""

    def topic(self, current: str, server: str) -> str:
        """Build a channel topic from this status, keeping any ' || ' suffix of current."""
        idx = current.find(" || ")
        suffix = current[idx:] if idx != -1 else ""
        players = ": " + ", ".join(self.players) if self.players else ""
        return (
            f"{self.motd} {server} v{self.version} "
            f"[{self.nump}/{self.maxp}{players}]{suffix}"
        )


def _decode(raw: bytes) -> str:
    return raw.decode("utf-8", errors="replace")


def parse_challenge(data: bytes) -> int:
    """Extract the challenge token from a handshake response."""
    if len(data) < 5:
        raise ValueError("handshake response too short")
    end = data.find(b"\x00", 5)
    if end == -1:
        end = len(data)
    token = data[5:end]
    if not _INTEGER.fullmatch(token):
        raise ValueError(f"invalid challenge token {token!r}")
    return int(token)


def build_status_request(challenge: int) -> bytes:
    """Build the full status request packet for a challenge token."""
    return GET_STATUS + struct.pack(">I", challenge & 0xFFFFFFFF) + b"\x00\x00\x00\x00"


def parse_status(data: bytes) -> McStatus:
    """Parse a full status response packet."""
    if len(data) < 12:
        raise ValueError("status response too short")
    body = data[11:-1]
    idx = body.find(PLAYER_DATA)
    if idx == -1:
        raise ValueError("could not find player data")
    fields = body[:idx].split(b"\x00")
    if len(fields) % 2:
        raise ValueError("malformed key/value data")
    items = {
        _decode(key): _decode(value)
        for key, value in zip(fields[::2], fields[1::2])
    }
    status = McStatus(
        motd=items.get("hostname", ""),
        nump=items.get("numplayers", ""),
        maxp=items.get("maxplayers", ""),
        version=items.get("version", ""),
    )
    start = idx + len(PLAYER_DATA)
    if start < len(body):
        status.players = [_decode(p) for p in body[start:-1].split(b"\x00")]
    return status


def _split_server(server: str) -> tuple[str, int]:
    host, sep, port = server.rpartition(":")
    if not sep or not port:
        raise ValueError(f"missing port in address {server!r}")
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    try:
        return host, int(port)
    except ValueError:
        raise ValueError(f"invalid port in address {server!r}") from None


def _send(sock: socket.socket, packet: bytes, stage: str) -> None:
    if sock.send(packet) != len(packet):
        raise OSError(f"short write in {stage}")


def poll_server(server: str, timeout: float = 60.0) -> McStatus:
    """Query the server at 'host:port' once and return its status."""
    host, port = _split_server(server)
    family, kind, proto, _, address = socket.getaddrinfo(
        host or None, port, type=socket.SOCK_DGRAM
    )[0]
    with socket.socket(family, kind, proto) as sock:
        sock.settimeout(timeout)
        sock.connect(address)
        _send(sock, HANDSHAKE, "handshake")
        challenge = parse_challenge(sock.recv(_BUFFER_SIZE))
        _send(sock, build_status_request(challenge), "status")
        return parse_status(sock.recv(_BUFFER_SIZE))