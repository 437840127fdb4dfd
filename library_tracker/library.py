from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from . import inventory
from .book import Book
from .catalog import Catalog
from .errors import StoreError
from .inventory import Selection
from .store import CatalogStore

logger = logging.getLogger(__name__)


@dataclass
class ChangeResult:
    """A committed borrow/return and whether it reached the data file."""

    book: Book
    saved: bool = True
    warning: Optional[str] = None


class Library:
    """Owns the session's catalog and writes it back after every change."""

    def __init__(self, store: Optional[CatalogStore] = None) -> None:
        self.store = store or CatalogStore()
        result = self.store.load()
        self.catalog: Catalog = result.catalog
        self.origin = result.origin
        self.warnings: List[str] = list(result.warnings)

    # ------------------------- Queries ------------------------- #
    def available(self) -> List[int]:
        return inventory.available_indices(self.catalog)

    def borrowed(self) -> List[int]:
        return inventory.borrowed_indices(self.catalog)

    def find_book(self, book_id: str) -> Optional[Book]:
        return inventory.find_book(self.catalog, book_id)

    def select(self, candidates: Sequence[int], token: Optional[str]) -> Selection:
        return inventory.resolve_selection(self.catalog, candidates, token)

    # ------------------------- Core operations ------------------------- #
    def borrow(self, book_id: str) -> ChangeResult:
        """Borrow one copy and persist. Inventory errors propagate unchanged."""
        book = inventory.borrow(self.catalog, book_id)
        return self._commit(book)

    def return_book(self, book_id: str) -> ChangeResult:
        """Return one copy and persist. Inventory errors propagate unchanged."""
        book = inventory.return_book(self.catalog, book_id)
        return self._commit(book)

    def borrow_at(self, index: int) -> ChangeResult:
        """Borrow the book at a catalog index, e.g. one picked by ``select``."""
        book = inventory.borrow_copy(self.catalog[index])
        return self._commit(book)

    def return_at(self, index: int) -> ChangeResult:
        """Return the book at a catalog index, e.g. one picked by ``select``."""
        book = inventory.return_copy(self.catalog[index])
        return self._commit(book)

    def _commit(self, book: Book) -> ChangeResult:
        # The in-memory change stands even when the write fails
        try:
            self.store.save(self.catalog)
        except StoreError as e:
            message = f"Warning: could not save data: {e}"
            logger.warning(message)
            return ChangeResult(book, saved=False, warning=message)
        return ChangeResult(book)
