#!/usr/bin/env python3
"""Outbound side: one short-lived UDP socket per message."""

from __future__ import annotations

import socket                                      # Low-level UDP API
from typing import Tuple

from colorama import Fore, Style

from .config import Session
from .protocol import LOOPBACK, MAX_MESSAGE_LENGTH, Envelope, make_packet
from .util import LOG


class UDPSender:
    """Sends chat and check envelopes to ``127.0.0.1:<remote_port>``."""

    def __init__(self, session: Session) -> None:
        self.session = session
        self.target: Tuple[str, int] = (LOOPBACK, session.remote_port)

    def send_chat(self, text: str) -> bool:
        """Validate and send a chat line; returns True if a datagram went out."""
        text = text.strip()
        if not text:
            print(f"{Fore.RED}Message is empty, nothing sent{Style.RESET_ALL}")
            return False
        if len(text) > MAX_MESSAGE_LENGTH:
            print(f"{Fore.RED}Message too long "
                  f"(max {MAX_MESSAGE_LENGTH} characters){Style.RESET_ALL}")
            return False
        return self._send(Envelope.chat(text, self.session.username))

    def send_check(self, code: int) -> bool:
        """Send one of the canned check envelopes (codes 1-4)."""
        return self._send(Envelope.check(code, self.session.username))

    def _send(self, envelope: Envelope) -> bool:
        """Open, send, close.  Transport errors are logged, never raised."""
        try:
            with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
                sock.sendto(make_packet(envelope), self.target)
        except OSError as exc:
            LOG.error("Send failed: %s", exc)
            return False

        LOG.debug("Sent code %d to %s:%d", envelope.code, *self.target)
        print(f"{Fore.GREEN}[{envelope.sender}]: {envelope.message}{Style.RESET_ALL}")
        return True
