#!/usr/bin/env python3
"""Inbound side: a background thread bound to the session's local port.

The receiver has two states.  After :meth:`UDPReceiver.start` it is
*listening*: the thread waits for datagrams, decodes each one and hands the
envelope to ``on_message``.  :meth:`UDPReceiver.stop` moves it to *stopped*:
the thread notices the cleared flag within ``RECV_POLL_INTERVAL`` seconds,
closes the socket and exits.  The receiver never answers a datagram.
"""

from __future__ import annotations

import errno                                       # EBADF check
import socket                                      # Low-level UDP API
import threading                                   # Background listener thread
import time                                        # Back-off after receive errors
from typing import Callable, Optional, Tuple

from colorama import Fore, Style

from .config import Session
from .protocol import (
    BIND_HOST, BUF_SIZE, CHAT, CHECK_CODES, RECV_ERROR_BACKOFF,
    RECV_POLL_INTERVAL, Envelope, EnvelopeError, parse_packet, render,
)
from .util import LOG


def print_envelope(envelope: Envelope) -> None:
    """Default ``on_message``: coloured console rendering."""
    if envelope.code == CHAT:
        colour = Fore.GREEN
    elif envelope.code in CHECK_CODES:
        colour = Fore.CYAN
    else:
        colour = Fore.YELLOW
    print(f"\r{colour}{render(envelope)}{Style.RESET_ALL}")


class UDPReceiver:
    def __init__(
        self,
        session: Session,
        on_message: Optional[Callable[[Envelope], None]] = None,
    ) -> None:
        self.session = session
        self.on_message = on_message or print_envelope

        self.sock: Optional[socket.socket] = None
        self.port: Optional[int] = None    # Actually bound port, set by start()
        self.running = threading.Event()   # Cleared = cancellation requested
        self._thread: Optional[threading.Thread] = None

    # ---------------------------------------------------------------- lifecycle
    def start(self) -> None:
        """Bind the local port and spawn the listener thread.

        Bind errors (port in use, no permission) propagate as ``OSError``.
        """
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        try:
            sock.bind((BIND_HOST, self.session.local_port))
        except OSError:
            sock.close()
            raise
        sock.settimeout(RECV_POLL_INTERVAL)   # Bounded wait so stop() is seen

        self.sock = sock
        self.port = sock.getsockname()[1]
        self.running.set()
        LOG.info("Waiting for messages on port %d...", self.port)

        self._thread = threading.Thread(
            target=self._recv_loop, name="udpmsg-receiver", daemon=True,
        )
        self._thread.start()

    def stop(self) -> None:
        """Request cancellation and wait for the listener thread to finish."""
        self.running.clear()
        if self._thread is not None:
            self._thread.join()
            self._thread = None

    def is_listening(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    # ---------------------------------------------------------------- receive loop
    def _recv_loop(self) -> None:
        sock = self.sock
        try:
            while self.running.is_set():
                try:
                    data, addr = sock.recvfrom(BUF_SIZE)
                except socket.timeout:                 # Idle; re-check the flag
                    continue
                except OSError as exc:
                    if exc.errno == errno.EBADF:       # Socket is gone for good
                        LOG.error("Receive socket closed: %s", exc)
                        break
                    LOG.error("Receive failed: %s", exc)  # e.g. ICMP port unreachable
                    time.sleep(RECV_ERROR_BACKOFF)
                    continue
                self.handle_datagram(data, addr)
        finally:
            sock.close()
            LOG.info("Receiving stopped")

    def handle_datagram(self, data: bytes, addr: Tuple[str, int]) -> Optional[Envelope]:
        """Decode one datagram and pass it on; bad payloads are logged and skipped."""
        try:
            envelope = parse_packet(data)
        except EnvelopeError as exc:
            LOG.error("Could not decode datagram from %s:%d: %s", addr[0], addr[1], exc)
            return None

        LOG.debug("Received code %d from %s:%d", envelope.code, *addr)
        try:
            self.on_message(envelope)
        except Exception as exc:                       # e.g. UnicodeEncodeError on the console
            LOG.error("Could not display message from %s:%d: %s", addr[0], addr[1], exc)
        return envelope
