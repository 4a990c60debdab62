#!/usr/bin/env python3
"""Wire format and constants shared by the sender and the receiver.

Every datagram carries exactly one JSON object::

    {"Code": 0, "Length": 5, "Message": "hello", "Sender": "Alice"}

Everything that goes on (or comes off) the wire passes through
:func:`make_packet` / :func:`parse_packet` so both ends agree on the field
names and types.
"""

from __future__ import annotations       # Postponed annotation evaluation (PEP 563)
import json                              # JSON is our lightweight wire format
from dataclasses import dataclass        # Immutable record for one envelope
from typing import Any, Dict

# --- Network configuration -------------------------------------------------
BUF_SIZE: int = 65_535        # Largest datagram we read (bytes)
LOOPBACK: str = "127.0.0.1"   # Every datagram goes to this host
BIND_HOST: str = "0.0.0.0"    # Receiver listens on all interfaces
RECV_POLL_INTERVAL: float = 0.5  # Seconds between stop-flag checks while idle
RECV_ERROR_BACKOFF: float = 0.1  # Pause after a failed receive

# --- Session defaults --------------------------------------------------------
MAX_MESSAGE_LENGTH: int = 25  # Chat text limit, enforced by the sender only
DEFAULT_USERNAME: str = "Unknown"

# --- Message codes -----------------------------------------------------------
CHAT          = 0   # Plain chat text
CHECK_TRUE    = 1   # Connection check, positive
CHECK_FALSE   = 2   # Connection check, negative
CONNECT_OK    = 3   # Connection established
CONNECT_FAIL  = 4   # Connection failed

CHECK_CODES = (CHECK_TRUE, CHECK_FALSE, CONNECT_OK, CONNECT_FAIL)

# Canned body text for each check code
CHECK_BODIES: Dict[int, str] = {
    CHECK_TRUE: "true",
    CHECK_FALSE: "false",
    CONNECT_OK: "check",
    CONNECT_FAIL: "check",
}

# Wire field names
_CODE, _LENGTH, _MESSAGE, _SENDER = "Code", "Length", "Message", "Sender"


class EnvelopeError(ValueError):
    """Raised when a datagram payload is not a valid envelope."""


@dataclass(frozen=True, slots=True)
class Envelope:
    """One message as carried by a single datagram."""

    code: int
    length: int
    message: str
    sender: str

    @classmethod
    def chat(cls, text: str, sender: str) -> Envelope:
        return cls(CHAT, len(text), text, sender)

    @classmethod
    def check(cls, code: int, sender: str) -> Envelope:
        """Build a check envelope; *code* must be one of :data:`CHECK_CODES`."""
        try:
            body = CHECK_BODIES[code]
        except KeyError:
            raise ValueError(f"not a check code: {code!r}") from None
        return cls(code, len(body), body, sender)


# --- Packet helpers --------------------------------------------------------

def make_packet(envelope: Envelope) -> bytes:
    """Serialize an envelope to UTF-8 JSON bytes suitable for socket.sendto()."""
    payload = {
        _CODE: envelope.code,
        _LENGTH: envelope.length,
        _MESSAGE: envelope.message,
        _SENDER: envelope.sender,
    }
    return json.dumps(payload, ensure_ascii=False).encode("utf-8")


def _int_field(obj: Dict[str, Any], key: str) -> int:
    value = obj.get(key, 0)
    # bool is an int subclass but "true" is not a code
    if isinstance(value, bool) or not isinstance(value, int):
        raise EnvelopeError(f"field {key!r} must be an integer, got {value!r}")
    return value


def _str_field(obj: Dict[str, Any], key: str) -> str:
    value = obj.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise EnvelopeError(f"field {key!r} must be a string, got {value!r}")
    return value


def parse_packet(data: bytes) -> Envelope:
    """Inverse of :func:`make_packet`: bytes to :class:`Envelope`.

    Missing fields take their defaults (0 or ""); unknown fields are ignored.
    Raises :class:`EnvelopeError` on anything that is not a JSON object of
    the expected shape.
    """
    try:
        obj = json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise EnvelopeError(str(exc)) from exc

    if not isinstance(obj, dict):
        raise EnvelopeError(f"expected a JSON object, got {type(obj).__name__}")

    return Envelope(
        code=_int_field(obj, _CODE),
        length=_int_field(obj, _LENGTH),
        message=_str_field(obj, _MESSAGE),
        sender=_str_field(obj, _SENDER),
    )


def render(envelope: Envelope) -> str:
    """Console line for a received envelope, chosen by its code."""
    match envelope.code:
        case 0:
            return f"[{envelope.sender}]: {envelope.message}"
        case 1:
            return "Connection check: true"
        case 2:
            return "Connection check: false"
        case 3:
            return "Connection established"
        case 4:
            return "Connection failed"
        case _:
            return "Unknown message code"
