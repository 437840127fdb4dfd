import json
import os
from typing import List, Optional, Sequence

from rich.console import Console
from rich.table import Table

from .catalog import Catalog

# Environment variable to control CLI output mode
# Allowed values: 'plain' (default), 'json', 'rich'
OUTPUT_MODE_ENV = "LIB_CLI_OUTPUT"
OUTPUT_MODES = {"plain", "json", "rich"}

_console = Console()


def set_output_mode(mode: str) -> None:
    mode = (mode or "").lower().strip()
    if mode in OUTPUT_MODES:
        os.environ[OUTPUT_MODE_ENV] = mode
    # Unknown values are ignored; the current mode stays in effect


def get_output_mode() -> str:
    mode = os.environ.get(OUTPUT_MODE_ENV, "plain").lower()
    return mode if mode in OUTPUT_MODES else "plain"


def _headers(show_available: bool, show_borrowed: bool) -> List[str]:
    headers = ["#", "ID", "Title", "Author"]
    if show_available:
        headers.append("Available")
    if show_borrowed:
        headers.append("Borrowed")
    return headers


def _rows(catalog: Catalog, indices: Sequence[int], show_available: bool, show_borrowed: bool) -> List[List[str]]:
    rows = []
    for position, idx in enumerate(indices, 1):
        book = catalog[idx]
        row = [str(position), book.id, book.title, book.author]
        if show_available:
            row.append(str(book.copies_available))
        if show_borrowed:
            row.append(str(book.borrowed))
        rows.append(row)
    return rows


def format_book_table(catalog: Catalog, indices: Sequence[int],
                      show_available: bool = False, show_borrowed: bool = False) -> str:
    """Column-aligned plain text table of the books at ``indices``.

    Positions in the first column are 1-based and match what
    ``resolve_selection`` accepts for the same candidate set.
    """
    if not indices:
        return "No books to display."

    headers = _headers(show_available, show_borrowed)
    rows = _rows(catalog, indices, show_available, show_borrowed)
    widths = [max(len(r[col]) for r in [headers] + rows) for col in range(len(headers))]

    def fmt_row(values: List[str]) -> str:
        return " | ".join(value.ljust(widths[i]) for i, value in enumerate(values))

    lines = [fmt_row(headers), "-+-".join("-" * w for w in widths)]
    lines.extend(fmt_row(row) for row in rows)
    return "\n".join(lines)


def print_book_table(catalog: Catalog, indices: Sequence[int], show_available: bool = False,
                     show_borrowed: bool = False, title: Optional[str] = None) -> None:
    """Print books according to the current output mode.
    - plain: aligned text table, or 'No books to display.'
    - json: JSON array with the displayed columns
    - rich: Rich table
    """
    mode = get_output_mode()

    if mode == "json":
        payload = []
        for position, idx in enumerate(indices, 1):
            book = catalog[idx]
            entry = {"position": position, "id": book.id, "title": book.title, "author": book.author}
            if show_available:
                entry["available"] = book.copies_available
            if show_borrowed:
                entry["borrowed"] = book.borrowed
            payload.append(entry)
        print(json.dumps(payload, ensure_ascii=False))
    elif mode == "rich":
        if not indices:
            _console.print("[yellow]No books to display.[/]")
            return
        table = Table(title=title, show_lines=True, header_style="bold cyan")
        for header in _headers(show_available, show_borrowed):
            if header in ("#", "ID"):
                table.add_column(header, style="magenta", no_wrap=True)
            elif header in ("Available", "Borrowed"):
                table.add_column(header, justify="right", style="green")
            else:
                table.add_column(header, style="white")
        for row in _rows(catalog, indices, show_available, show_borrowed):
            table.add_row(*row)
        _console.print(table)
    else:
        if title:
            print(title)
        print(format_book_table(catalog, indices, show_available, show_borrowed))
