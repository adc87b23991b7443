"""Rich utilities: shared console, themes, and helpers."""

from __future__ import annotations

from rich.console import Console
from rich.theme import Theme
from rich.traceback import install as rich_traceback_install

_console: Console | None = None

THEME = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "red",
        "success": "green",
        "muted": "grey62",
    }
)


def get_console() -> Console:
    """Return a shared Rich Console instance.

    Creates the console on first use with the application theme.
    """
    global _console
    if _console is None:
        _console = Console(theme=THEME, highlight=False, soft_wrap=False)
    return _console


def set_console(console: Console | None) -> None:
    """Replace the shared console; ``None`` recreates it on next use."""
    global _console
    _console = console


def install_rich_tracebacks() -> None:
    """Enable rich tracebacks globally for nicer error output."""
    rich_traceback_install(show_locals=False, word_wrap=True, suppress=["click"])
