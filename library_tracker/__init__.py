"""Library Tracker - Core Application Package

This package contains the core application modules including:
- Book and catalog models (book.py, catalog.py)
- Persisted document schema (schemas.py)
- Catalog store with default seeding and recovery (store.py)
- Borrow/return inventory operations (inventory.py)
- Library session tying the catalog to its store (library.py)
- CLI and interactive menu (main.py, ui_helpers.py)
"""

__version__ = "1.0.0"
