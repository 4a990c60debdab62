import queue
import socket

import pytest

from udpmsg.config import Session
from udpmsg.receiver import UDPReceiver
from udpmsg.util import configure_logging


@pytest.fixture(autouse=True)
def log_to_tmp(tmp_path):
    """Keep the rotating log file out of the working directory."""
    configure_logging(str(tmp_path / "udpmsg.log"))


@pytest.fixture
def peer():
    """A plain UDP socket on loopback standing in for the other instance."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("127.0.0.1", 0))
    sock.settimeout(2.0)
    yield sock
    sock.close()


@pytest.fixture
def session(peer):
    """Session whose remote port points at ``peer``; local port is ephemeral."""
    return Session("Alice", 0, peer.getsockname()[1])


@pytest.fixture
def inbox():
    return queue.Queue()


@pytest.fixture
def receiver(inbox):
    rx = UDPReceiver(Session("Bob", 0, 9), on_message=inbox.put)
    rx.start()
    yield rx
    rx.stop()
