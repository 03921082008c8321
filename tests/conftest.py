"""Shared test fixtures."""

import pytest

from booksmart.db import LoadOrderDB
from booksmart.records import Alias, Skill


@pytest.fixture()
def db() -> LoadOrderDB:
    """Empty in-memory load order with the schema created."""
    database = LoadOrderDB(":memory:")
    database.create_schema()
    yield database
    database.close()


@pytest.fixture()
def load_order(db: LoadOrderDB) -> LoadOrderDB:
    """Small load order covering every kind of book."""
    db.add_plugin("Skyrim.esm", 0)
    db.add_plugin("Mod.esp", 2)
    db.add_plugin("Disabled.esp", 3, enabled=False)

    db.add_book("000001:Skyrim.esm", "Skyrim.esm", "Old Tome, Vanilla")
    db.add_book("000002:Skyrim.esm", "Skyrim.esm", "Treasure Map", scripts=["DunMapMarkerScript"])
    db.add_book("000003:Skyrim.esm", "Skyrim.esm", "Journal")
    db.add_book("000004:Skyrim.esm", "Skyrim.esm", "Letter")
    db.add_book("000005:Skyrim.esm", "Skyrim.esm", None, skill=int(Skill.ARCHERY))
    db.add_book("000006:Skyrim.esm", "Skyrim.esm", "Notes", scripts=["MQ101QuestScript"])
    db.add_book("000007:Skyrim.esm", "Skyrim.esm", "Plain Book")
    db.add_book("000008:Skyrim.esm", "Skyrim.esm", "Odd Book", scripts=["SomeActivatorScript"])
    db.add_record("00000A:Skyrim.esm", "Skyrim.esm", "WEAP", "Iron Sword")

    db.add_quest("000100:Skyrim.esm", "Skyrim.esm", "Main Quest", aliases=[
        Alias(object_ref="000003:Skyrim.esm"),
        Alias(items=("000004:Skyrim.esm", "00000A:Skyrim.esm", "FFFFFF:Missing.esp")),
        Alias(),
    ])
    db.add_quest("000101:Skyrim.esm", "Skyrim.esm", "Side Quest", aliases=[
        Alias(object_ref="000003:Skyrim.esm", items=()),
    ])

    db.add_book("000001:Skyrim.esm", "Mod.esp", "Old Tome", skill=int(Skill.ALCHEMY))
    db.add_book("000007:Skyrim.esm", "Disabled.esp", "Plain Book", skill=int(Skill.BLOCK))
    return db
