"""udpmsg – a minimal point-to-point UDP messenger.

Importing this package exposes the building blocks so the messenger can be
embedded in another application, or launched via ``python -m udpmsg``.
"""

# ------------------------ re-exports ------------------------
from .client import UDPMessenger      # noqa: F401  ── menu loop + lifecycle
from .config import Session           # noqa: F401  ── username and ports
from .protocol import Envelope, EnvelopeError, make_packet, parse_packet  # noqa: F401
from .receiver import UDPReceiver     # noqa: F401
from .sender import UDPSender         # noqa: F401

# ------------------------ public API ------------------------
__all__: list[str] = [
    "Envelope",
    "EnvelopeError",
    "Session",
    "UDPMessenger",
    "UDPReceiver",
    "UDPSender",
    "make_packet",
    "parse_packet",
]
