"""Subscription handshake with the execution extension over a Unix socket."""

from __future__ import annotations

import socket
import struct
from dataclasses import dataclass
from os import PathLike

SUBSCRIBE_MSG = 0x01
SUBSCRIBE_SIZE = 1 + 8
HANDSHAKE_SIZE = 1 + 2 * 8

_U64_MAX = (1 << 64) - 1


@dataclass(frozen=True)
class Handshake:
    """Block range the extension can replay from, sent after subscribing."""

    oldest_block: int
    tip_block: int


def encode_subscribe(resume_block: int) -> bytes:
    """Subscribe message: a type byte followed by the little-endian resume block."""
    if not 0 <= resume_block <= _U64_MAX:
        raise ValueError(f"resume block out of 64-bit range: {resume_block}")
    return struct.pack("<BQ", SUBSCRIBE_MSG, resume_block)


def decode_handshake(data: bytes) -> Handshake:
    """Decode a handshake: a type byte, then oldest and tip blocks little-endian."""
    data = bytes(data)
    if len(data) != HANDSHAKE_SIZE:
        raise ValueError(f"handshake must be {HANDSHAKE_SIZE} bytes, got {len(data)}")
    _, oldest_block, tip_block = struct.unpack("<BQQ", data)
    return Handshake(oldest_block=oldest_block, tip_block=tip_block)


def _recv_exact(sock: socket.socket, size: int) -> bytes:
    buf = bytearray()
    while len(buf) < size:
        chunk = sock.recv(size - len(buf))
        if not chunk:
            raise ConnectionError("connection closed before handshake completed")
        buf += chunk
    return bytes(buf)


def connect_and_subscribe(
    socket_path: str | PathLike[str], resume_block: int
) -> tuple[Handshake, socket.socket]:
    """Connect, subscribe from ``resume_block`` and read the handshake.

    Returns the handshake and the connected blocking socket, from which the
    batch stream follows.
    """
    message = encode_subscribe(resume_block)
    sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
    try:
        try:
            sock.connect(str(socket_path))
        except OSError as err:
            raise ConnectionError(f"connecting to ExEx socket at {socket_path}") from err
        sock.sendall(message)
        handshake = decode_handshake(_recv_exact(sock, HANDSHAKE_SIZE))
        sock.setblocking(True)
    except BaseException:
        sock.close()
        raise
    return handshake, sock