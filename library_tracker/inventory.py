"""Borrow/return logic and candidate lookups over an in-memory catalog.

Nothing here touches the data file; callers persist the catalog after a
successful borrow or return. A refused operation leaves the catalog exactly
as it was.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence

from .book import Book
from .catalog import Catalog
from .errors import AllCopiesPresentError, NoCopiesAvailableError, NotFoundError

logger = logging.getLogger(__name__)

CANCEL_TOKEN = "q"


class SelectionStatus(Enum):
    SELECTED = "selected"
    CANCELLED = "cancelled"
    NOT_FOUND = "not_found"


class SelectionMethod(Enum):
    POSITION = "position"
    IDENTIFIER = "identifier"


@dataclass(frozen=True)
class Selection:
    """Outcome of resolving a user token against a candidate set."""

    status: SelectionStatus
    method: Optional[SelectionMethod] = None
    index: Optional[int] = None

    @property
    def selected(self) -> bool:
        return self.status is SelectionStatus.SELECTED

    @property
    def cancelled(self) -> bool:
        return self.status is SelectionStatus.CANCELLED


# ------------------------- Queries ------------------------- #
def available_indices(catalog: Catalog) -> List[int]:
    return [idx for idx, book in enumerate(catalog) if book.copies_available > 0]


def borrowed_indices(catalog: Catalog) -> List[int]:
    return [idx for idx, book in enumerate(catalog) if book.borrowed > 0]


def list_available(catalog: Catalog) -> List[Book]:
    """Books with at least one copy on the shelf, in catalog order."""
    return [catalog[idx] for idx in available_indices(catalog)]


def list_borrowed(catalog: Catalog) -> List[Book]:
    """Books with at least one copy out, in catalog order."""
    return [catalog[idx] for idx in borrowed_indices(catalog)]


def find_book(catalog: Catalog, book_id: str) -> Optional[Book]:
    wanted = book_id.strip().lower()
    for book in catalog:
        if book.id.lower() == wanted:
            return book
    return None


def resolve_selection(catalog: Catalog, candidates: Sequence[int], token: Optional[str]) -> Selection:
    """Resolve ``token`` to one of the catalog indices in ``candidates``.

    ``token`` is either a 1-based position within ``candidates`` as shown to
    the user (an optional leading ``+`` is allowed), or a book id compared
    case-insensitively. Positions are tried first. An empty token or ``q``
    cancels the selection.
    """
    token = (token or "").strip()
    if not token or token.lower() == CANCEL_TOKEN:
        return Selection(SelectionStatus.CANCELLED)

    digits = token[1:] if token.startswith("+") else token
    if digits.isascii() and digits.isdigit():
        # Longer than any valid position; also keeps int() clear of its digit limit
        digits = digits.lstrip("0") or "0"
        if len(digits) > len(str(len(candidates))):
            return Selection(SelectionStatus.NOT_FOUND, SelectionMethod.POSITION)
        position = int(digits)
        if 1 <= position <= len(candidates):
            return Selection(SelectionStatus.SELECTED, SelectionMethod.POSITION, candidates[position - 1])
        return Selection(SelectionStatus.NOT_FOUND, SelectionMethod.POSITION)

    lowered = token.lower()
    for idx in candidates:
        if catalog[idx].id.lower() == lowered:
            return Selection(SelectionStatus.SELECTED, SelectionMethod.IDENTIFIER, idx)
    return Selection(SelectionStatus.NOT_FOUND, SelectionMethod.IDENTIFIER)


# ------------------------- Mutations ------------------------- #
def _require(catalog: Catalog, book_id: str) -> Book:
    book = find_book(catalog, book_id)
    if book is None:
        logger.info("Book %r not found", book_id)
        raise NotFoundError(book_id)
    return book


def borrow_copy(book: Book) -> Book:
    """Take one copy of ``book`` off the shelf."""
    if book.copies_available <= 0:
        logger.info("Borrow refused for %s: no copies available", book.id)
        raise NoCopiesAvailableError(book.id)
    book.copies_available -= 1
    logger.debug("Borrowed %s, %d/%d left", book.id, book.copies_available, book.copies_total)
    return book


def return_copy(book: Book) -> Book:
    """Put one copy of ``book`` back on the shelf."""
    if book.copies_available >= book.copies_total:
        logger.info("Return refused for %s: all copies present", book.id)
        raise AllCopiesPresentError(book.id)
    book.copies_available += 1
    logger.debug("Returned %s, %d/%d on shelf", book.id, book.copies_available, book.copies_total)
    return book


def borrow(catalog: Catalog, book_id: str) -> Book:
    """Take one copy of ``book_id`` off the shelf and return the updated book."""
    return borrow_copy(_require(catalog, book_id))


def return_book(catalog: Catalog, book_id: str) -> Book:
    """Put one copy of ``book_id`` back on the shelf and return the updated book."""
    return return_copy(_require(catalog, book_id))
