"""
Local JSON persistence for the catalog.

The store owns exactly one data file. Loading never raises: a missing file is
seeded with the default catalog, an unreadable file falls back to the default
catalog, and a corrupted file is replaced by it. Saving is atomic and reports
failures to the caller through ``StoreError``.
"""

from __future__ import annotations

import contextlib
import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from pydantic import ValidationError

from .catalog import Catalog, default_catalog
from .errors import CatalogParseError, StoreError

logger = logging.getLogger(__name__)

DATA_FILE = "library_data.json"

ORIGIN_FILE = "file"
ORIGIN_SEEDED = "seeded"
ORIGIN_RECOVERED = "recovered"


@dataclass
class LoadResult:
    """Catalog produced at startup plus any non-fatal problems met on the way."""

    catalog: Catalog
    origin: str = ORIGIN_FILE
    warnings: List[str] = field(default_factory=list)


class CatalogStore:
    """Reads and writes the catalog document at a single, fixed location."""

    def __init__(self, path: Optional[Union[str, Path]] = None) -> None:
        self.path = Path(path) if path else Path(DATA_FILE)

    def exists(self) -> bool:
        return self.path.exists()

    # ------------------------- Reading ------------------------- #
    def read(self) -> Catalog:
        """Read and decode the data file.

        Raises:
            StoreError: the file cannot be read
            CatalogParseError: the contents are not a valid catalog document
        """
        try:
            with self.path.open("r", encoding="utf-8") as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise StoreError(f"could not read {self.path}: {e}") from e

        try:
            return Catalog.from_dict(json.loads(content))
        except json.JSONDecodeError as e:
            raise CatalogParseError(f"invalid JSON in {self.path}: {e}") from e
        except ValidationError as e:
            raise CatalogParseError(
                f"invalid catalog in {self.path}: {e.error_count()} validation error(s)"
            ) from e
        except (RecursionError, ValueError) as e:
            # Nesting too deep for the decoder, or other undecodable content
            raise CatalogParseError(f"unreadable catalog in {self.path}: {e}") from e

    def load(self) -> LoadResult:
        """Produce a usable catalog, falling back to the default one on any problem."""
        if not self.exists():
            logger.info("No data file at %s, seeding default catalog", self.path)
            result = LoadResult(default_catalog(), origin=ORIGIN_SEEDED)
            self._persist_default(result)
            return result

        try:
            catalog = self.read()
        except CatalogParseError as e:
            message = f"Data file is corrupted ({e}). Resetting to defaults."
            logger.warning(message)
            result = LoadResult(default_catalog(), origin=ORIGIN_RECOVERED, warnings=[message])
            self._persist_default(result)
            return result
        except StoreError as e:
            # The unreadable file is left as it is
            message = f"Could not read data file ({e}). Using default catalog."
            logger.warning(message)
            return LoadResult(default_catalog(), origin=ORIGIN_RECOVERED, warnings=[message])

        logger.debug("Loaded %d books from %s", len(catalog), self.path)
        result = LoadResult(catalog)
        duplicates = catalog.duplicate_ids()
        if duplicates:
            result.warnings.append(f"Duplicate book ids in data file: {', '.join(duplicates)}")
        return result

    def _persist_default(self, result: LoadResult) -> None:
        try:
            self.save(result.catalog)
        except StoreError as e:
            message = f"Warning: failed to write default data: {e}"
            logger.warning(message)
            result.warnings.append(message)

    # ------------------------- Writing ------------------------- #
    def save(self, catalog: Catalog) -> Path:
        """Write the whole catalog, replacing the previous file contents.

        The document goes to a temporary sibling first and is swapped in with
        ``os.replace`` so readers never observe a half-written file.

        Raises:
            StoreError: the file could not be written
        """
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tmp_path.open("w", encoding="utf-8") as f:
                json.dump(catalog.to_dict(), f, indent=2, ensure_ascii=False)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp_path.unlink()
            raise StoreError(f"could not write {self.path}: {e}") from e

        logger.debug("Saved %d books to %s", len(catalog), self.path)
        return self.path
