"""Shared utilities: paths, colors, table output, atomic writes."""

import os
import sys
import tempfile
from pathlib import Path
from typing import TextIO

PROJECT_ROOT = Path(os.environ.get("CODESCORE_ROOT", Path.cwd())).resolve()

COLORS = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "red": "\033[31m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "blue": "\033[34m",
    "cyan": "\033[36m",
    "orange": "\033[38;5;208m",
}

NO_COLOR = os.environ.get("NO_COLOR") is not None


def colorize(text: str, color: str, stream: TextIO | None = None) -> str:
    """Wrap ``text`` in ANSI codes when ``stream`` (stdout by default) is a terminal."""
    target = stream if stream is not None else sys.stdout
    if NO_COLOR or not target.isatty():
        return str(text)
    return f"{COLORS.get(color, '')}{text}{COLORS['reset']}"


def safe_write_text(filepath: str | Path, content: str) -> None:
    """Write UTF-8 text through a sibling temp file and rename it into place."""
    p = Path(filepath)
    p.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=p.parent, prefix=f".{p.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.replace(tmp, p)
    except OSError:
        Path(tmp).unlink(missing_ok=True)
        raise


def print_table(headers: list[str], rows: list[list[str]]) -> None:
    """Left-aligned columns, indented to line up with the command banners."""
    if not rows:
        return
    widths = [max(len(cell) for cell in column) for column in zip(headers, *rows)]

    def line(cells: list[str]) -> str:
        return "  " + "  ".join(cell.ljust(w) for cell, w in zip(cells, widths)).rstrip()

    print(colorize(line(headers), "bold"))
    print(colorize("  " + "─" * (sum(widths) + 2 * (len(widths) - 1)), "dim"))
    for row in rows:
        print(line(row))
