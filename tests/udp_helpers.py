"""Socket helpers shared by the test modules."""

import socket

import pytest

from udpmsg.protocol import BUF_SIZE, Envelope, parse_packet


def recv_envelope(sock: socket.socket) -> Envelope:
    data, _ = sock.recvfrom(BUF_SIZE)
    return parse_packet(data)


def send_raw(port: int, data: bytes) -> None:
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        sock.sendto(data, ("127.0.0.1", port))


def assert_nothing_sent(sock: socket.socket) -> None:
    sock.settimeout(0.2)
    with pytest.raises(socket.timeout):
        sock.recvfrom(BUF_SIZE)
