"""
lvt CLI output toolkit.

Styled primitives built on Click:

    success(), error(), warning(), info(), dim(), bold()
    banner(), section(), kv(), table(), panel(), bullet(), next_steps()
    file_written(), fault()

Colour handling is left to ``click.style`` (NO_COLOR / TERM=dumb).
"""

from __future__ import annotations

import shutil
from typing import Optional, Sequence

import click

from ...faults import Fault

_TERM_WIDTH: Optional[int] = None


def _tw() -> int:
    """Terminal width, cached and clamped to 40..120."""
    global _TERM_WIDTH
    if _TERM_WIDTH is None:
        _TERM_WIDTH = max(40, min(shutil.get_terminal_size((80, 24)).columns, 120))
    return _TERM_WIDTH


def success(message: str) -> None:
    click.echo(click.style(message, fg="green"))


def error(message: str) -> None:
    click.echo(click.style(message, fg="red"))


def warning(message: str) -> None:
    click.echo(click.style(message, fg="yellow"))


def info(message: str) -> None:
    click.echo(click.style(message, fg="cyan"))


def dim(message: str) -> None:
    click.echo(click.style(message, dim=True))


def bold(message: str) -> str:
    """Bold text, returned rather than echoed."""
    return click.style(message, bold=True)


_H_TL, _H_TR, _H_BL, _H_BR, _H_H, _H_V = "┏", "┓", "┗", "┛", "━", "┃"
_L_TL, _L_TR, _L_BL, _L_BR, _L_H, _L_V = "┌", "┐", "└", "┘", "─", "│"

_BULLET = "•"
_ARROW = "→"
_CHECK = "✓"
_CROSS = "✗"


def banner(title: str = "lvt", subtitle: str = "", *, fg: str = "cyan") -> None:
    """
    Bordered banner with a centred title.

        ┏━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━┓
        ┃                        lvt                          ┃
        ┗━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━┛
    """
    inner = min(_tw(), 60) - 2
    click.echo(click.style(f"{_H_TL}{_H_H * inner}{_H_TR}", fg=fg))
    click.echo(click.style(f"{_H_V}{title.center(inner)}{_H_V}", fg=fg, bold=True))
    if subtitle:
        click.echo(click.style(f"{_H_V}{subtitle.center(inner)}{_H_V}", fg=fg))
    click.echo(click.style(f"{_H_BL}{_H_H * inner}{_H_BR}", fg=fg))


def section(title: str, *, fg: str = "cyan") -> None:
    """``── Columns ─────────────``"""
    dashes = max(4, _tw() - len(title) - 6)
    click.echo(click.style(f"{_L_H}{_L_H} {title} {_L_H * dashes}", fg=fg, bold=True))


def kv(key: str, value: object, *, key_width: int = 18, indent: int = 2) -> None:
    """Aligned ``key:   value`` line."""
    padding = " " * max(1, key_width - len(key) - 1)
    click.echo(f"{' ' * indent}{key}:{padding}{click.style(str(value), fg='cyan')}")


def bullet(text: str, *, indent: int = 2) -> None:
    click.echo(f"{' ' * indent}{click.style(_BULLET, fg='cyan')} {text}")


def table(headers: Sequence[str], rows: Sequence[Sequence[object]], *, indent: int = 2) -> None:
    """
    Minimal aligned table; column widths fit the widest cell.

        Name      Type      Constraints
        ──────────────────────────────────
        id        TEXT      PRIMARY KEY
    """
    prefix = " " * indent
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row[: len(headers)]):
            widths[i] = max(widths[i], len(str(cell)))
    widths = [w + 2 for w in widths]

    header = "".join(h.ljust(widths[i]) for i, h in enumerate(headers))
    click.echo(prefix + click.style(header.rstrip(), fg="cyan", bold=True))
    click.echo(prefix + click.style(_L_H * sum(widths), dim=True))
    for row in rows:
        line = "".join(str(cell).ljust(widths[i]) for i, cell in enumerate(row[: len(headers)]))
        click.echo(prefix + line.rstrip())


def panel(lines: Sequence[str], *, title: str = "", fg: str = "cyan") -> None:
    """Bordered box around ``lines``; long lines are truncated."""
    width = min(_tw(), 60)
    inner = width - 4
    if title:
        top = f"{_L_TL}{_L_H} {title} {_L_H * max(1, width - len(title) - 5)}{_L_TR}"
    else:
        top = f"{_L_TL}{_L_H * (width - 2)}{_L_TR}"
    click.echo(click.style(top, fg=fg))
    for line in lines:
        body = line[:inner].ljust(inner)
        click.echo(click.style(f"{_L_V} ", fg=fg) + body + click.style(f" {_L_V}", fg=fg))
    click.echo(click.style(f"{_L_BL}{_L_H * (width - 2)}{_L_BR}", fg=fg))


def next_steps(steps: Sequence[str], *, title: str = "Next steps") -> None:
    panel([f"{i}. {s}" for i, s in enumerate(steps, 1)], title=title)


def file_written(label: str, *, verbose: bool = False, path: str = "") -> None:
    click.echo(f"{click.style(f'  {_CHECK}', fg='green')} {label}")
    if verbose and path:
        dim(f"    {_ARROW} {path}")


def fault(exc: Fault) -> None:
    """Report a fault the way every command does: ``✗ Error: <message>``."""
    error(f"{_CROSS} Error: {exc.message}")
