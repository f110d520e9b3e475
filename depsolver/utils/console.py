"""
Console output utilities for depsolver using Rich.

User-facing output only; diagnostics belong to :mod:`depsolver.utils.logger`.

Plans rendered as tables or plain lines go to stdout. Status messages
(``print_success`` / ``print_error`` / ``print_warning``) go to stderr so
that ``depsolver solve --format json`` leaves stdout holding nothing but
the plan.
"""

from __future__ import annotations

import os
import sys
import threading
from typing import Any, Dict, List, Optional

from rich.table import Table
from rich.theme import Theme
from rich.console import Console

DEPSOLVER_THEME = Theme(
    {
        "success": "bold green",
        "error": "bold red",
        "warning": "bold yellow",
        "info": "bold cyan",
        "dim": "dim",
        "install": "green",
        "uninstall": "red",
    }
)

_stdout_console: Optional[Console] = None
_stderr_console: Optional[Console] = None
_console_lock = threading.Lock()


def _should_use_color(stream: Any) -> bool:
    if os.environ.get("NO_COLOR") or os.environ.get("CI"):
        return False
    try:
        return stream.isatty()
    except (AttributeError, OSError):
        return False


def _make_console(stderr: bool) -> Console:
    use_color = _should_use_color(sys.stderr if stderr else sys.stdout)
    return Console(
        theme=DEPSOLVER_THEME,
        stderr=stderr,
        no_color=not use_color,
        highlight=False,
    )


def _get_console(*, stderr: bool = False) -> Console:
    """Return the (lazily created) stdout or stderr console."""
    global _stdout_console, _stderr_console

    with _console_lock:
        if stderr:
            if _stderr_console is None:
                _stderr_console = _make_console(True)
            return _stderr_console
        if _stdout_console is None:
            _stdout_console = _make_console(False)
        return _stdout_console


def reconfigure_console() -> None:
    """Drop cached consoles so the next call picks up a changed environment."""
    global _stdout_console, _stderr_console
    with _console_lock:
        _stdout_console = None
        _stderr_console = None


def print_success(message: str, *, prefix: str = "[OK]") -> None:
    _get_console(stderr=True).print(f"{prefix} {message}", style="success")


def print_error(message: str, *, prefix: str = "[ERROR]") -> None:
    _get_console(stderr=True).print(f"{prefix} {message}", style="error")


def print_warning(message: str, *, prefix: str = "[WARNING]") -> None:
    _get_console(stderr=True).print(f"{prefix} {message}", style="warning")


def print_table(
    data: List[Dict[str, Any]],
    *,
    headers: Optional[List[str]] = None,
    title: Optional[str] = None,
    caption: Optional[str] = None,
    column_styles: Optional[Dict[str, Dict[str, Any]]] = None,
) -> None:
    """Render rows of dictionaries as a Rich table on stdout.

    Args:
        data: Row dictionaries; nothing is printed when empty.
        headers: Column order. Defaults to keys of the first row.
        title: Optional table title.
        caption: Optional table caption.
        column_styles: Per-column ``style`` / ``justify`` / ``no_wrap``.
    """
    if not data:
        return

    if headers is None:
        headers = list(data[0].keys())

    table = Table(title=title, caption=caption, header_style="bold")

    column_styles = column_styles or {}
    for header in headers:
        config = column_styles.get(header, {})
        table.add_column(
            header,
            style=config.get("style"),
            justify=config.get("justify", "default"),
            no_wrap=config.get("no_wrap", False),
        )

    for row in data:
        table.add_row(*(str(row.get(h, "")) for h in headers))

    _get_console().print(table)


def get_raw_console(*, stderr: bool = False) -> Console:
    """Return the underlying Rich Console instance."""
    return _get_console(stderr=stderr)
