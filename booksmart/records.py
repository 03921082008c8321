"""
Record types read from the load order and written to the patch.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class Skill(IntEnum):
    """Actor-value skills a book can teach, numbered as the game numbers them."""
    ONE_HANDED = 6
    TWO_HANDED = 7
    ARCHERY = 8
    BLOCK = 9
    SMITHING = 10
    HEAVY_ARMOR = 11
    LIGHT_ARMOR = 12
    PICKPOCKET = 13
    LOCKPICKING = 14
    SNEAK = 15
    ALCHEMY = 16
    SPEECH = 17
    ALTERATION = 18
    CONJURATION = 19
    DESTRUCTION = 20
    ILLUSION = 21
    RESTORATION = 22
    ENCHANTING = 23


# Stored in the skill field of books that teach nothing
NO_SKILL = -1


@dataclass(frozen=True)
class BookRecord:
    """Winning version of a book record."""
    form_key: str
    name: str | None = None
    skill: int | None = None
    scripts: tuple[str, ...] = ()
    plugin: str = ""


@dataclass(frozen=True)
class Alias:
    """A quest alias: an optional object reference and optional item references."""
    object_ref: str | None = None
    items: tuple[str, ...] | None = None


@dataclass(frozen=True)
class QuestRecord:
    """Winning version of a quest record."""
    form_key: str
    name: str | None = None
    aliases: tuple[Alias, ...] = ()


@dataclass(frozen=True)
class PatchInstruction:
    """A single relabelled book."""
    form_key: str
    old_name: str
    new_name: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "formKey": self.form_key,
            "oldName": self.old_name,
            "newName": self.new_name,
        }


@dataclass
class PatchReport:
    """Outcome of one patch run."""
    instructions: list[PatchInstruction] = field(default_factory=list)
    books_scanned: int = 0
    books_unnamed: int = 0
    quest_books: int = 0

    @property
    def books_patched(self) -> int:
        return len(self.instructions)

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "patched": [i.to_dict() for i in self.instructions],
            "summary": {
                "books_scanned": self.books_scanned,
                "books_unnamed": self.books_unnamed,
                "books_patched": self.books_patched,
                "quest_books": self.quest_books,
            }
        }
