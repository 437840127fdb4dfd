"""Exception types raised by the catalog store and inventory operations."""


class LibraryError(Exception):
    """Base class for every error raised by the library tracker."""


class StoreError(LibraryError):
    """The data file could not be read or written."""


class CatalogParseError(LibraryError):
    """The data file was read but does not hold a valid catalog document."""


class NotFoundError(LibraryError, LookupError):
    """No book in the catalog matches the requested identifier."""

    def __init__(self, book_id: str) -> None:
        super().__init__(f"Book {book_id!r} not found.")
        self.book_id = book_id


class InventoryError(LibraryError, ValueError):
    """A borrow or return was refused; the catalog is left unchanged."""

    def __init__(self, book_id: str, message: str) -> None:
        super().__init__(message)
        self.book_id = book_id


class NoCopiesAvailableError(InventoryError):
    def __init__(self, book_id: str) -> None:
        super().__init__(book_id, "No copies left to borrow.")


class AllCopiesPresentError(InventoryError):
    def __init__(self, book_id: str) -> None:
        super().__init__(book_id, "All copies are already in the library.")
