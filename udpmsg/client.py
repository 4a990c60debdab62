#!/usr/bin/env python3
"""Interactive point-to-point UDP messenger.

Two instances talk over loopback, each listening on its own port and
sending to the other's:

    udpmsg --name Alice --local-port 5000 --remote-port 5001
    udpmsg --name Bob   --local-port 5001 --remote-port 5000

Anything not given on the command line is prompted for.  The menu runs in
the foreground while a background thread prints incoming messages; Ctrl-C
or Ctrl-D ends the session.
"""

from __future__ import annotations

import argparse                                    # For CLI parsing
import logging                                     # For --verbose
import sys                                         # Needed for prompt redraw
from typing import Dict

from colorama import Fore, Style, init

from .config import Session, prompt_session
from .protocol import (
    CHECK_FALSE, CHECK_TRUE, CONNECT_FAIL, CONNECT_OK, MAX_MESSAGE_LENGTH,
    Envelope,
)
from .receiver import UDPReceiver, print_envelope
from .sender import UDPSender
from .util import DEFAULT_LOG_FILE, LOG, configure_logging

MENU = """
Menu:
1 - Send a message
2 - Connection check (true)
3 - Connection check (false)
5 - Establish connection
6 - Check connection result"""
PROMPT = "Choose an item: "

# Menu item -> check code.  There is no item 4.
CHECK_ITEMS: Dict[str, int] = {
    "2": CHECK_TRUE,
    "3": CHECK_FALSE,
    "5": CONNECT_OK,
    "6": CONNECT_FAIL,
}


class UDPMessenger:
    """Owns the session's sender and receiver and runs the menu loop."""

    def __init__(self, session: Session) -> None:
        self.session = session
        self.sender = UDPSender(session)
        self.receiver = UDPReceiver(session, on_message=self._show)

    # ================================================================== main ===
    def start(self) -> None:
        """Blocking run-loop: the menu reads stdin while the receiver listens.

        Returns once stdin closes or Ctrl-C is pressed, at either prompt,
        after the receiver thread has stopped.
        """
        self.receiver.start()                     # OSError if the port is taken
        LOG.info("Welcome, %s (sending to port %d)",
                 self.session.username, self.session.remote_port)
        try:
            while True:
                print(MENU)
                self.dispatch(input(PROMPT))
        except (EOFError, KeyboardInterrupt):      # Ctrl-D on *nix / Ctrl-C
            pass
        finally:
            self.receiver.stop()

    def _show(self, envelope: Envelope) -> None:
        """Print an incoming message, then redraw the menu prompt."""
        print_envelope(envelope)
        sys.stdout.write(PROMPT)
        sys.stdout.flush()

    def dispatch(self, choice: str) -> None:
        """Run a single menu item."""
        choice = choice.strip()
        if choice == "1":
            text = input(f"Message (max {MAX_MESSAGE_LENGTH} characters): ")
            self.sender.send_chat(text)
        elif choice in CHECK_ITEMS:
            self.sender.send_check(CHECK_ITEMS[choice])
        else:
            print(f"{Fore.RED}Invalid menu item{Style.RESET_ALL}")

# ======================================================================
#  Command-line entry point
# ======================================================================

def main(argv=None) -> None:
    """Parse CLI args, collect the session, then run the messenger."""
    parser = argparse.ArgumentParser("udpmsg", description="Point-to-point UDP messenger")
    parser.add_argument("--name", help="username shown to the peer")
    parser.add_argument("--local-port", help="UDP port to receive on")
    parser.add_argument("--remote-port", help="UDP port on 127.0.0.1 to send to")
    parser.add_argument("--log-file", default=DEFAULT_LOG_FILE, help="rotating log file")
    parser.add_argument("--verbose", action="store_true", help="log at DEBUG level")
    args = parser.parse_args(argv)

    init(autoreset=True)                           # Reset colour after each print
    configure_logging(args.log_file, logging.DEBUG if args.verbose else logging.INFO)

    try:
        session = prompt_session(args.name, args.local_port, args.remote_port)
    except (EOFError, KeyboardInterrupt):          # Gave up at a startup prompt
        return
    if session is None:
        return                                     # Invalid port, already logged

    try:
        UDPMessenger(session).start()
    except OSError as exc:
        LOG.error("Could not listen on port %d: %s", session.local_port, exc)


if __name__ == "__main__":
    main()
