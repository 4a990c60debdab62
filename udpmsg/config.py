#!/usr/bin/env python3
"""Session settings gathered once at startup (CLI flags, then prompts)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from .protocol import DEFAULT_USERNAME
from .util import LOG

__all__ = ["Session", "parse_port", "prompt_session"]


@dataclass(frozen=True, slots=True)
class Session:
    """Read-only settings shared by the menu, sender and receiver."""

    username: str
    local_port: int   # Where we listen
    remote_port: int  # Where we send (always on loopback)


def parse_port(text: str) -> int:
    """Turn user text into a port number, ValueError if it is not one."""
    port = int(text.strip())               # Raises ValueError on non-integers
    if not 1 <= port <= 65535:
        raise ValueError(f"port out of range: {port}")
    return port


def prompt_session(
    name: Optional[str] = None,
    local_port: Optional[str] = None,
    remote_port: Optional[str] = None,
    ask: Optional[Callable[[str], str]] = None,
) -> Optional[Session]:
    """Build the :class:`Session`, prompting for every value not supplied.

    Prompts come in a fixed order: name, local port, remote port.  Returns
    ``None`` after logging the problem when a port is invalid; the caller
    is expected to exit.
    """
    ask = ask or input
    if name is None:
        name = ask("Your name: ")
    username = name.strip() or DEFAULT_USERNAME

    ports = []
    for value, label in (
        (local_port, "Port to receive messages on: "),
        (remote_port, "Port to send messages to: "),
    ):
        if value is None:
            value = ask(label)
        try:
            ports.append(parse_port(value))
        except ValueError as exc:
            LOG.error("Invalid port %r: %s", value, exc)
            return None

    return Session(username, ports[0], ports[1])
