"""
Best-effort GELF delivery over TCP or UDP.

Every send opens its own connection and closes it afterwards. Socket errors
are absorbed: the text sink is the authoritative record of a log call.
"""

from __future__ import annotations

import math
import os
import socket

from .config import GrayloggerSettings, Transport
from .gelf import GelfMessage

# Payload size above which UDP messages are split into GELF chunks.
UDP_CHUNK_SIZE = 1420
MAX_CHUNKS = 128
CHUNK_MAGIC = b"\x1e\x0f"
TCP_DELIMITER = b"\x00"


def chunk_datagrams(payload: bytes, chunk_size: int = UDP_CHUNK_SIZE) -> list[bytes]:
    """Split a payload into GELF UDP chunks.

    Returns an empty list when the payload needs more than MAX_CHUNKS chunks.
    """
    if len(payload) <= chunk_size:
        return [payload]
    count = math.ceil(len(payload) / chunk_size)
    if count > MAX_CHUNKS:
        return []
    message_id = os.urandom(8)
    return [
        CHUNK_MAGIC + message_id + bytes((seq, count)) + payload[seq * chunk_size : (seq + 1) * chunk_size]
        for seq in range(count)
    ]


class GelfTransport:
    """Connects to the Graylog endpoint described by the settings."""

    def __init__(self, settings: GrayloggerSettings) -> None:
        self._settings = settings

    @property
    def transport(self) -> Transport | None:
        try:
            return Transport(self._settings.protocol)
        except ValueError:
            return None

    def _connect(self) -> socket.socket:
        host, port, timeout = self._settings.host, self._settings.port, self._settings.timeout
        if self.transport is Transport.TCP:
            return socket.create_connection((host, port), timeout=timeout)
        if self.transport is Transport.UDP:
            family, kind, proto, _, address = socket.getaddrinfo(host, port, type=socket.SOCK_DGRAM)[0]
            sock = socket.socket(family, kind, proto)
            try:
                sock.settimeout(timeout)
                sock.connect(address)
            except OSError:
                sock.close()
                raise
            return sock
        raise OSError(f"unsupported transport: {self._settings.protocol}")

    def is_alive(self) -> bool:
        """Liveness probe bounded by the configured timeout."""
        try:
            with self._connect():
                return True
        except OSError:
            return False

    def send(self, message: GelfMessage) -> bool:
        payload = message.to_bytes()
        try:
            with self._connect() as sock:
                if self.transport is Transport.TCP:
                    sock.sendall(payload + TCP_DELIMITER)
                else:
                    datagrams = chunk_datagrams(payload)
                    if not datagrams:
                        return False
                    for datagram in datagrams:
                        sock.send(datagram)
        except OSError:
            return False
        return True
