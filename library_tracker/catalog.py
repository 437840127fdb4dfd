from __future__ import annotations

import logging
from collections import Counter
from typing import Iterable, Iterator, List

from .book import Book
from .schemas import CatalogDocument

logger = logging.getLogger(__name__)

# (id, title, author, copies) for the built-in catalog
DEFAULT_BOOKS = [
    ("B001", "1984", "George Orwell", 3),
    ("B002", "Pride and Prejudice", "Jane Austen", 2),
    ("B003", "To Kill a Mockingbird", "Harper Lee", 4),
    ("B004", "The Great Gatsby", "F. Scott Fitzgerald", 2),
]


class Catalog:
    """Ordered collection of every book tracked during a session."""

    def __init__(self, books: Iterable[Book] | None = None) -> None:
        self.books: List[Book] = list(books or [])

    def __len__(self) -> int:
        return len(self.books)

    def __iter__(self) -> Iterator[Book]:
        return iter(self.books)

    def __getitem__(self, index: int) -> Book:
        return self.books[index]

    def __repr__(self) -> str:
        return f"Catalog({len(self.books)} books)"

    def duplicate_ids(self) -> List[str]:
        """Identifiers (case-insensitive) shared by more than one book."""
        counts = Counter(book.id.lower() for book in self.books)
        return sorted(book_id for book_id, count in counts.items() if count > 1)

    def to_dict(self) -> dict:
        return {"books": [book.to_dict() for book in self.books]}

    @staticmethod
    def from_dict(data: object) -> "Catalog":
        """Build a catalog from a decoded JSON document.

        Raises ``pydantic.ValidationError`` when a field is missing, has the
        wrong type or the copy counts are out of range.
        """
        document = CatalogDocument.model_validate(data)
        catalog = Catalog(Book.from_dict(record.model_dump()) for record in document.books)
        duplicates = catalog.duplicate_ids()
        if duplicates:
            # Lookups by identifier keep matching the first occurrence
            logger.warning("Catalog contains duplicate book ids: %s", ", ".join(duplicates))
        return catalog


def default_catalog() -> Catalog:
    """Return a fresh copy of the built-in catalog with every copy on the shelf."""
    return Catalog(
        Book(id=book_id, title=title, author=author, copies_total=copies)
        for book_id, title, author, copies in DEFAULT_BOOKS
    )
