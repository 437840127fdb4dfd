"""Pydantic models describing the on-disk catalog document.

The document root is an object with a single ``books`` list; every entry must
carry all five fields with the exact JSON types. Strict mode keeps ``true``
from passing as an integer and ``3`` from passing as a string.
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field, model_validator


class BookRecord(BaseModel):
    model_config = ConfigDict(strict=True)

    id: str
    title: str
    author: str
    copies_total: int = Field(ge=0)
    copies_available: int = Field(ge=0)

    @model_validator(mode="after")
    def check_counts(self) -> "BookRecord":
        if self.copies_available > self.copies_total:
            raise ValueError(
                f"copies_available ({self.copies_available}) exceeds "
                f"copies_total ({self.copies_total}) for book {self.id!r}"
            )
        return self


class CatalogDocument(BaseModel):
    model_config = ConfigDict(strict=True)

    books: List[BookRecord]
