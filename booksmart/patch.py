"""
Patch plugin: copy-on-write overrides of book records.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .records import BookRecord


@dataclass
class BookOverride:
    """Override of a book; only the name is ever changed."""
    form_key: str
    name: str | None
    source_plugin: str


class PatchMod:
    """In-memory patch plugin, written out as JSON."""

    def __init__(self, name: str = "BookSmart.esp"):
        self.name = name
        self._overrides: dict[str, BookOverride] = {}

    def get_or_add_override(self, book: BookRecord) -> BookOverride:
        """Return the override for a book, copying the winning record the first time."""
        override = self._overrides.get(book.form_key)
        if override is None:
            override = BookOverride(book.form_key, book.name, book.plugin)
            self._overrides[book.form_key] = override
        return override

    @property
    def overrides(self) -> list[BookOverride]:
        return list(self._overrides.values())

    def __len__(self) -> int:
        return len(self._overrides)

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "plugin": self.name,
            "overrides": [
                {
                    "formKey": o.form_key,
                    "name": o.name,
                    "overrides": o.source_plugin
                }
                for o in self._overrides.values()
            ]
        }

    def write(self, path: Path):
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(self.to_dict(), f, ensure_ascii=False, indent=2)
            f.write("\n")
