"""
Database access layer for the load-order SQLite database.

Each plugin contributes versions of records; the winning override of a record
is the version from the enabled plugin with the highest priority.
"""

import sqlite3
from pathlib import Path
from typing import Iterator

from .records import Alias, BookRecord, QuestRecord

BOOK = "BOOK"
QUEST = "QUST"

SCHEMA = """
CREATE TABLE IF NOT EXISTS plugins (
    name TEXT PRIMARY KEY,
    priority INTEGER NOT NULL,
    enabled INTEGER NOT NULL DEFAULT 1
);
CREATE TABLE IF NOT EXISTS records (
    id INTEGER PRIMARY KEY,
    form_key TEXT NOT NULL,
    plugin TEXT NOT NULL REFERENCES plugins(name),
    record_type TEXT NOT NULL,
    name TEXT,
    skill INTEGER,
    UNIQUE (form_key, plugin)
);
CREATE TABLE IF NOT EXISTS book_scripts (
    record_id INTEGER NOT NULL REFERENCES records(id),
    position INTEGER NOT NULL,
    script_name TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS quest_aliases (
    record_id INTEGER NOT NULL REFERENCES records(id),
    alias_index INTEGER NOT NULL,
    object_ref TEXT,
    has_items INTEGER NOT NULL DEFAULT 0
);
CREATE TABLE IF NOT EXISTS quest_alias_items (
    record_id INTEGER NOT NULL REFERENCES records(id),
    alias_index INTEGER NOT NULL,
    position INTEGER NOT NULL,
    item_ref TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_records_form_key ON records(form_key);
"""


class LoadOrderDB:
    """Wrapper for the load-order SQLite database."""

    def __init__(self, db_path: Path | str):
        self.db_path = db_path
        self._conn: sqlite3.Connection | None = None

    def connect(self) -> sqlite3.Connection:
        """Get or create database connection."""
        if self._conn is None:
            self._conn = sqlite3.connect(self.db_path)
            self._conn.row_factory = sqlite3.Row
        return self._conn

    def close(self):
        """Close database connection."""
        if self._conn:
            self._conn.close()
            self._conn = None

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def query(self, sql: str, params: tuple = ()) -> list[sqlite3.Row]:
        """Execute a query and return all results."""
        conn = self.connect()
        cursor = conn.execute(sql, params)
        return cursor.fetchall()

    def query_one(self, sql: str, params: tuple = ()) -> sqlite3.Row | None:
        """Execute a query and return first result."""
        conn = self.connect()
        cursor = conn.execute(sql, params)
        return cursor.fetchone()

    # ==========================================================================
    # Building a load order
    # ==========================================================================

    def create_schema(self):
        """Create all tables if they do not exist yet."""
        self.connect().executescript(SCHEMA)

    def add_plugin(self, name: str, priority: int, enabled: bool = True):
        conn = self.connect()
        conn.execute(
            "INSERT INTO plugins (name, priority, enabled) VALUES (?, ?, ?)",
            (name, priority, int(enabled))
        )
        conn.commit()

    def add_record(self, form_key: str, plugin: str, record_type: str,
                   name: str | None = None, skill: int | None = None) -> int:
        """Add one plugin's version of a record. Returns the row id."""
        conn = self.connect()
        cursor = conn.execute(
            "INSERT INTO records (form_key, plugin, record_type, name, skill) VALUES (?, ?, ?, ?, ?)",
            (form_key, plugin, record_type, name, skill)
        )
        conn.commit()
        return cursor.lastrowid

    def add_book(self, form_key: str, plugin: str, name: str | None = None,
                 skill: int | None = None, scripts: list[str] | tuple[str, ...] = ()) -> int:
        record_id = self.add_record(form_key, plugin, BOOK, name, skill)
        conn = self.connect()
        conn.executemany(
            "INSERT INTO book_scripts (record_id, position, script_name) VALUES (?, ?, ?)",
            [(record_id, pos, script) for pos, script in enumerate(scripts)]
        )
        conn.commit()
        return record_id

    def add_quest(self, form_key: str, plugin: str, name: str | None = None,
                  aliases: list[Alias] | tuple[Alias, ...] = ()) -> int:
        record_id = self.add_record(form_key, plugin, QUEST, name)
        conn = self.connect()
        for index, alias in enumerate(aliases):
            conn.execute(
                "INSERT INTO quest_aliases (record_id, alias_index, object_ref, has_items) VALUES (?, ?, ?, ?)",
                (record_id, index, alias.object_ref, int(alias.items is not None))
            )
            conn.executemany(
                "INSERT INTO quest_alias_items (record_id, alias_index, position, item_ref) VALUES (?, ?, ?, ?)",
                [(record_id, index, pos, item) for pos, item in enumerate(alias.items or ())]
            )
        conn.commit()
        return record_id

    # ==========================================================================
    # Winning overrides
    # ==========================================================================

    def _winning_rows(self, record_type: str) -> Iterator[sqlite3.Row]:
        """Yield the winning row of every record of a type, highest priority plugin first."""
        sql = """
            SELECT r.* FROM records r
            JOIN plugins p ON r.plugin = p.name
            WHERE p.enabled = 1 AND r.record_type = ?
            ORDER BY p.priority DESC, r.id
        """
        seen = set()
        for row in self.query(sql, (record_type,)):
            if row['form_key'] in seen:
                continue
            seen.add(row['form_key'])
            yield row

    def _book_from_row(self, row: sqlite3.Row) -> BookRecord:
        scripts = self.query(
            "SELECT script_name FROM book_scripts WHERE record_id = ? ORDER BY position",
            (row['id'],)
        )
        return BookRecord(
            form_key=row['form_key'],
            name=row['name'],
            skill=row['skill'],
            scripts=tuple(s['script_name'] for s in scripts),
            plugin=row['plugin']
        )

    def _quest_from_row(self, row: sqlite3.Row) -> QuestRecord:
        alias_rows = self.query(
            "SELECT alias_index, object_ref, has_items FROM quest_aliases WHERE record_id = ? ORDER BY alias_index",
            (row['id'],)
        )
        aliases = []
        for alias in alias_rows:
            items = None
            if alias['has_items']:
                item_rows = self.query(
                    "SELECT item_ref FROM quest_alias_items WHERE record_id = ? AND alias_index = ? ORDER BY position",
                    (row['id'], alias['alias_index'])
                )
                items = tuple(i['item_ref'] for i in item_rows)
            aliases.append(Alias(object_ref=alias['object_ref'], items=items))
        return QuestRecord(form_key=row['form_key'], name=row['name'], aliases=tuple(aliases))

    def winning_books(self) -> Iterator[BookRecord]:
        """Winning book records in load-order priority order."""
        for row in self._winning_rows(BOOK):
            yield self._book_from_row(row)

    def winning_quests(self) -> Iterator[QuestRecord]:
        """Winning quest records in load-order priority order."""
        for row in self._winning_rows(QUEST):
            yield self._quest_from_row(row)

    def resolve_book(self, form_key: str | None) -> BookRecord | None:
        """Resolve a reference to its winning book record, or None if it is not a book."""
        if not form_key:
            return None
        sql = """
            SELECT r.* FROM records r
            JOIN plugins p ON r.plugin = p.name
            WHERE p.enabled = 1 AND r.form_key = ?
            ORDER BY p.priority DESC, r.id
            LIMIT 1
        """
        row = self.query_one(sql, (form_key,))
        if row is None or row['record_type'] != BOOK:
            return None
        return self._book_from_row(row)

    def get_quest_name(self, form_key: str) -> str | None:
        """Display name of the winning version of a quest."""
        sql = """
            SELECT r.name FROM records r
            JOIN plugins p ON r.plugin = p.name
            WHERE p.enabled = 1 AND r.form_key = ? AND r.record_type = ?
            ORDER BY p.priority DESC
            LIMIT 1
        """
        row = self.query_one(sql, (form_key, QUEST))
        return row['name'] if row else None
