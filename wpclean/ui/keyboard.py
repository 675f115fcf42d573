"""Keyboard input for the interactive cleaner.

Keys are read one at a time with the terminal in raw mode and decoded into
Intent values. Terminals without termios support (or stdin that is not a
TTY) fall back to line input, where the first character of the line is used.
"""

import os
import select
import sys
from typing import Dict, Optional

try:
    import termios
    import tty

    _HAS_TERMIOS = True
except ImportError:
    _HAS_TERMIOS = False

from wpclean.models import Intent

# Seconds to wait for the rest of an escape sequence after ESC
ESCAPE_TIMEOUT = 0.05

KEY_BINDINGS: Dict[str, Intent] = {
    "\x1b[A": Intent.UP,
    "\x1bOA": Intent.UP,
    "k": Intent.UP,
    "\x1b[B": Intent.DOWN,
    "\x1bOB": Intent.DOWN,
    "j": Intent.DOWN,
    "\r": Intent.OPEN,
    "\n": Intent.OPEN,
    " ": Intent.DELETE,
    "\x7f": Intent.BACK,
    "\x08": Intent.BACK,
    "\x1b": Intent.BACK,
    "q": Intent.QUIT,
    "Q": Intent.QUIT,
    "\x03": Intent.QUIT,
}


def decode_key(key: str) -> Optional[Intent]:
    """Map a raw key sequence to an Intent, or None for unbound keys."""
    return KEY_BINDINGS.get(key)


class KeyReader:
    """Reads keypresses from stdin and decodes them into intents."""

    def __init__(self, stream=None) -> None:
        self._stream = stream if stream is not None else sys.stdin

    def read_intent(self) -> Intent:
        """Block until a bound key is pressed and return its Intent.

        End of input is treated as quit.
        """
        while True:
            try:
                key = self.read_key()
            except EOFError:
                return Intent.QUIT
            intent = decode_key(key)
            if intent is not None:
                return intent

    def read_key(self) -> str:
        """Read a single keypress without requiring Enter.

        Falls back to input() if the terminal doesn't support raw mode.
        """
        if not _HAS_TERMIOS or not self._stream.isatty():
            return self._read_line_key()
        try:
            fd = self._stream.fileno()
            old_settings = termios.tcgetattr(fd)
            try:
                tty.setraw(fd)
                return self._read_raw_key(fd)
            finally:
                termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)
        except (termios.error, OSError):
            return self._read_line_key()

    def _read_raw_key(self, fd: int) -> str:
        """Read one key, including the tail of an arrow-key escape sequence."""
        first = os.read(fd, 1)
        if not first:
            raise EOFError
        key = first.decode("utf-8", errors="ignore")
        if key != "\x1b":
            return key

        # Bare ESC has nothing following it within the timeout
        while len(key) < 3:
            ready, _, _ = select.select([fd], [], [], ESCAPE_TIMEOUT)
            if not ready:
                break
            key += os.read(fd, 1).decode("utf-8", errors="ignore")
        return key

    def _read_line_key(self) -> str:
        """Line-mode fallback: empty line opens, a line of spaces deletes."""
        line = self._stream.readline()
        if not line:
            raise EOFError
        line = line.rstrip("\r\n")
        if not line:
            return "\r"
        if line.strip() == "":
            return " "
        return line.strip()[:1]
