"""Single-keypress reader for the terminal frontend.

Maps arrow keys, WASD and a few letters to action strings without requiring
Enter.  Works on macOS / Linux (tty+termios) and Windows (msvcrt).
"""

from __future__ import annotations

import os
import sys
from collections.abc import Callable

# -- key mapping ---------------------------------------------------------------

_KEY_MAP: dict[str, str] = {
    "w": "up",
    "s": "down",
    "a": "left",
    "d": "right",
    "z": "undo",
    "u": "undo",
    "\x7f": "undo",  # Backspace
    "\x08": "undo",  # Backspace (Windows)
    "\x1a": "undo",  # Ctrl-Z
    "q": "quit",
    "\x03": "quit",  # Ctrl-C
    "r": "restart",
    "v": "solve",
    "p": "print",
    "\r": "enter",
    "\n": "enter",
}

_ARROW_MAP: dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
}


def resolve(ch: str) -> str:
    """Map a raw character to its action string (case-insensitive)."""
    action = _KEY_MAP.get(ch) or _KEY_MAP.get(ch.lower())
    if action:
        return action
    return ch if ch.isprintable() else ""


def _decode(ch: str, more: Callable[[], str | None]) -> str:
    """Resolve *ch*, pulling the rest of an ``ESC [ A`` sequence via *more*."""
    if ch != "\x1b":
        return resolve(ch)
    ch2 = more()
    if ch2 != "[":
        return "quit"  # bare Escape
    ch3 = more()
    return _ARROW_MAP.get(ch3 or "", "")


# -- platform readers ----------------------------------------------------------


def _read_unix(timeout: float | None) -> str | None:
    import select
    import termios
    import tty

    fd = sys.stdin.fileno()
    old = termios.tcgetattr(fd)

    def read_one(wait: float | None) -> str | None:
        ready, _, _ = select.select([fd], [], [], wait)
        if not ready:
            return None
        # os.read is unbuffered, so select() still sees the remaining bytes
        # of a multi-byte escape sequence.
        return os.read(fd, 1).decode("utf-8", errors="ignore")

    try:
        tty.setraw(fd)
        ch = read_one(timeout)
        if ch is None:
            return None
        return _decode(ch, lambda: read_one(0.1))
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)


def _read_windows(timeout: float | None) -> str | None:
    import msvcrt  # type: ignore[import-not-found]
    import time

    def getch() -> str:
        return msvcrt.getch().decode("utf-8", errors="ignore")

    if timeout is not None:
        end = time.monotonic() + timeout
        while not msvcrt.kbhit():
            if time.monotonic() >= end:
                return None
            time.sleep(0.02)
    return _decode(getch(), getch)


# -- public API ----------------------------------------------------------------


def read_key(timeout: float | None = None) -> str | None:
    """Read one keypress and return a normalised action string.

    Blocks until a key is pressed, or for at most *timeout* seconds, in which
    case ``None`` is returned when nothing was typed.

    Action strings:
        "up", "down", "left", "right"  arrows / WASD
        "undo"                         z / u / Backspace / Ctrl-Z
        "quit"                         q / Ctrl-C / Escape
        "restart"                      r
        "solve"                        v
        "print"                        p
        "enter"                        Enter / Return
        "<char>"                       unmapped printable char
        ""                             unrecognised key
    """
    if os.name == "nt":
        return _read_windows(timeout)
    return _read_unix(timeout)


def get_key() -> str:
    """Blocking variant of :func:`read_key`."""
    return read_key() or ""
