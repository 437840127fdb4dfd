import logging
import sys
from typing import Callable, Iterable, Optional

import typer

from .config import settings
from .errors import InventoryError
from .inventory import SelectionMethod
from .library import ChangeResult, Library
from .store import CatalogStore
from .ui_helpers import print_book_table, set_output_mode

APP_NAME = settings.app_name

MENU = """
Library Menu
1) View available books
2) View borrowed books
3) Borrow a book
4) Return a book
5) Exit"""

SELECT_PROMPT = "\nEnter # or ID (or press Enter to cancel): "

ReadFn = Callable[[str], Optional[str]]


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.effective_log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def read_choice(prompt: str) -> Optional[str]:
    """Read one trimmed line; None when the input stream is closed or broken."""
    try:
        return input(prompt).strip()
    except (EOFError, OSError):
        return None


def _report_warnings(warnings: Iterable[str]) -> None:
    for warning in warnings:
        print(warning, file=sys.stderr)


def open_library(data_file: Optional[str] = None) -> Library:
    library = Library(CatalogStore(data_file or settings.data_file))
    _report_warnings(library.warnings)
    return library


# ------------------------- Menu actions ------------------------- #
def view_available(library: Library) -> None:
    print_book_table(library.catalog, library.available(), show_available=True, title="\nAvailable books:")


def view_borrowed(library: Library) -> None:
    print_book_table(library.catalog, library.borrowed(), show_borrowed=True,
                     title="\nCurrently borrowed books:")


def _select_index(library: Library, candidates, token: Optional[str]) -> Optional[int]:
    selection = library.select(candidates, token)
    if selection.selected:
        return selection.index
    if selection.cancelled:
        return None
    if selection.method is SelectionMethod.POSITION:
        print("Invalid selection.")
    else:
        print("Book not found.")
    return None


def _apply(action: Callable[[int], ChangeResult], idx: int) -> Optional[ChangeResult]:
    try:
        result = action(idx)
    except InventoryError as e:
        print(e)
        return None
    if result.warning:
        _report_warnings([result.warning])
    return result


def borrow_book(library: Library, token: Optional[str] = None, read: ReadFn = read_choice) -> bool:
    """Borrow from the available books; prompts for a selection when no token is given."""
    candidates = library.available()
    if not candidates:
        print("\nNo books are currently available to borrow.")
        return False

    if token is None:
        print("\nSelect a book to borrow:")
        print_book_table(library.catalog, candidates, show_available=True)
        token = read(SELECT_PROMPT)

    idx = _select_index(library, candidates, token)
    if idx is None:
        return False
    result = _apply(library.borrow_at, idx)
    if result is None:
        return False
    print(f'You borrowed "{result.book.title}".')
    return True


def return_book(library: Library, token: Optional[str] = None, read: ReadFn = read_choice) -> bool:
    """Return one of the borrowed books; prompts for a selection when no token is given."""
    candidates = library.borrowed()
    if not candidates:
        print("\nYou have no borrowed books to return.")
        return False

    if token is None:
        print("\nSelect a book to return:")
        print_book_table(library.catalog, candidates, show_borrowed=True)
        token = read(SELECT_PROMPT)

    idx = _select_index(library, candidates, token)
    if idx is None:
        return False
    result = _apply(library.return_at, idx)
    if result is None:
        return False
    print(f'Thank you for returning "{result.book.title}".')
    return True


def run_menu(library: Library, read: ReadFn = read_choice) -> None:
    """Simple interactive menu; ends on option 5 or when input is exhausted."""
    while True:
        print(MENU)
        choice = read("Choose an option: ")
        if choice is None:
            print("Input error. Exiting.")
            break

        if choice == "1":
            view_available(library)
        elif choice == "2":
            view_borrowed(library)
        elif choice == "3":
            borrow_book(library, read=read)
        elif choice == "4":
            return_book(library, read=read)
        elif choice == "5":
            print("Goodbye!")
            break
        else:
            print("Please choose a valid option (1-5).")

        read("\nPress Enter to continue...")


# --- Typer CLI application ---
app = typer.Typer(help=f"{APP_NAME} CLI")


@app.callback()
def _global_options(
    ctx: typer.Context,
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output format: plain | json | rich (default: plain)",
    ),
    data_file: Optional[str] = typer.Option(
        None,
        "--data-file",
        "-d",
        help="Catalog JSON file (default: LIBRARY_DATA_FILE or library_data.json)",
    ),
):
    """Global CLI options (output mode, data file)."""
    configure_logging()
    set_output_mode(output or settings.output_mode)
    ctx.obj = {"data_file": data_file}


def _get_library(ctx: typer.Context) -> Library:
    """Open the library once per invocation and keep it on the context."""
    obj = ctx.ensure_object(dict)
    if obj.get("library") is None:
        obj["library"] = open_library(obj.get("data_file"))
    return obj["library"]


@app.command("available")
def cli_available(ctx: typer.Context):
    """List books with at least one copy on the shelf."""
    view_available(_get_library(ctx))


@app.command("borrowed")
def cli_borrowed(ctx: typer.Context):
    """List books with copies currently out."""
    view_borrowed(_get_library(ctx))


@app.command("borrow")
def cli_borrow(ctx: typer.Context, token: str = typer.Argument(..., help="Position in the available list or book ID")):
    """Borrow one copy of a book."""
    borrow_book(_get_library(ctx), token=token)


@app.command("return")
def cli_return(ctx: typer.Context, token: str = typer.Argument(..., help="Position in the borrowed list or book ID")):
    """Return one copy of a book."""
    return_book(_get_library(ctx), token=token)


@app.command("menu")
def cli_menu(ctx: typer.Context):
    """Start the interactive menu."""
    run_menu(_get_library(ctx))


def main() -> None:
    if len(sys.argv) > 1:
        app()
    else:
        configure_logging()
        set_output_mode(settings.output_mode)
        run_menu(open_library())


if __name__ == "__main__":
    main()
