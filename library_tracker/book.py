from __future__ import annotations


class Book:
    """A single lendable title in the catalog, with its copy counts."""

    def __init__(self, id: str, title: str, author: str, copies_total: int,
                 copies_available: int | None = None) -> None:
        self.id = id
        self.title = title
        self.author = author
        self.copies_total = copies_total
        # A freshly seeded book has every copy on the shelf
        self.copies_available = copies_total if copies_available is None else copies_available

    @property
    def borrowed(self) -> int:
        """Number of copies currently out of the library."""
        return max(self.copies_total - self.copies_available, 0)

    @property
    def is_available(self) -> bool:
        return self.copies_available > 0

    @property
    def is_borrowed(self) -> bool:
        return self.borrowed > 0

    def __str__(self) -> str:  # pragma: no cover - string formatting trivial
        return f"{self.title} by {self.author} (ID: {self.id})"

    def __repr__(self) -> str:
        return (f"Book(id={self.id!r}, title={self.title!r}, "
                f"copies_available={self.copies_available}/{self.copies_total})")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "copies_total": self.copies_total,
            "copies_available": self.copies_available,
        }

    @staticmethod
    def from_dict(data: dict) -> "Book":
        return Book(
            id=data["id"],
            title=data["title"],
            author=data["author"],
            copies_total=data["copies_total"],
            copies_available=data["copies_available"],
        )
