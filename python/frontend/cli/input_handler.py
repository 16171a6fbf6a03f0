"""Single-keypress reader for the terminal frontend.

Arrow keys steer the cursor, WASD slide tiles directly, Enter or Space
activates the cell under the cursor.  Works on macOS / Linux
(tty+termios) and Windows (msvcrt).
"""

from __future__ import annotations

import os
import sys


def _getch_unix() -> str:
    import termios
    import tty

    fd = sys.stdin.fileno()
    old = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        ch = sys.stdin.read(1)
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)
    return ch


def _getch_windows() -> str:
    import msvcrt  # type: ignore[import-not-found]

    return msvcrt.getch().decode("utf-8", errors="ignore")


_getch = _getch_windows if os.name == "nt" else _getch_unix


# -- key mapping ---------------------------------------------------------------

_KEY_MAP: dict[str, str] = {
    "w": "slide_up",
    "s": "slide_down",
    "a": "slide_left",
    "d": "slide_right",
    "q": "quit",
    "\x03": "quit",  # Ctrl-C
    "r": "shuffle",
    "\r": "activate",
    "\n": "activate",
    " ": "activate",
}

_ARROW_MAP: dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
}


def resolve(ch: str) -> str:
    """Map a raw character to its action string (case-insensitive)."""
    return _KEY_MAP.get(ch.lower(), "")


def get_key() -> str:
    """Block for one keypress and return a normalised action string.

    Possible return values:
        "up", "down", "left", "right"              : cursor (arrow keys)
        "slide_up", "slide_down", ... "slide_right" : WASD
        "activate"                                 : Enter / Space
        "shuffle"                                  : r
        "quit"                                     : q / Ctrl-C / Escape
        ""                                         : anything else
    """
    ch = _getch()

    # Arrow keys arrive as ESC [ A/B/C/D on Unix terminals.
    if ch == "\x1b":
        if _getch() == "[":
            return _ARROW_MAP.get(_getch(), "")
        return "quit"

    return resolve(ch)
