"""Single-keypress reader for the terminal frontend.

Arrow keys / WASD slide the selected piece, Tab and ``[``/``]`` cycle the
selection.  POSIX terminals are put in raw mode for the duration of one
key; Windows consoles go through ``msvcrt``.
"""

from __future__ import annotations

import contextlib
import os
import sys
from typing import Callable, Iterator

_ESCAPE = "\x1b"

_KEY_MAP: dict[str, str] = {
    "w": "up",
    "s": "down",
    "a": "left",
    "d": "right",
    "\t": "next",
    "]": "next",
    "[": "prev",
    "q": "quit",
    "\x03": "quit",  # Ctrl-C
    "r": "restart",
    "u": "undo",
    "n": "hint",
    "v": "solve",
    "\r": "enter",
    "\n": "enter",
}

# final byte of the CSI sequence ESC [ <x>
_ARROW_MAP: dict[str, str] = {"A": "up", "B": "down", "C": "right", "D": "left"}


def resolve_key(ch: str) -> str:
    """Map a raw character to its action string."""
    action = _KEY_MAP.get(ch.lower() if ch.isalpha() else ch)
    if action is not None:
        return action
    return ch if ch.isprintable() else ""


# -- terminal access ------------------------------------------------------------


@contextlib.contextmanager
def _raw_stdin() -> Iterator[Callable[[], str]]:
    """Yield a one-character reader with stdin in raw mode."""
    if os.name == "nt":
        import msvcrt  # type: ignore[import-not-found]

        yield lambda: msvcrt.getwch()
        return

    import termios
    import tty

    fd = sys.stdin.fileno()
    saved = termios.tcgetattr(fd)
    tty.setraw(fd)
    try:
        yield lambda: sys.stdin.read(1)
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)


def get_key() -> str:
    """Block for one keypress and return a normalised action string.

    Possible return values:
        "up", "down", "left", "right"  — slide the selected piece
        "next", "prev"                 — cycle the selected piece
        "undo", "restart", "hint"      — u / r / n
        "solve"                        — v (replay a shortest solution)
        "quit"                         — q / Ctrl-C / Escape
        "enter"                        — Enter / Return
        "<char>"                       — unmapped printable char
        ""                             — unrecognised key
    """
    with _raw_stdin() as read:
        ch = read()
        if ch != _ESCAPE:
            return resolve_key(ch)
        if read() != "[":
            return "quit"
        return _ARROW_MAP.get(read(), "")
