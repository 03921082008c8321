"""
Patch run: tag every winning book and relabel the ones that earn a tag.
"""

import logging

from .compose import compose_name
from .db import LoadOrderDB
from .graph import QuestBookIndex
from .labels import log_quest_matches, map_marker_label, quest_label, skill_label
from .patch import PatchMod
from .records import BookRecord, PatchInstruction, PatchReport
from .settings import Settings

logger = logging.getLogger(__name__)


def build_quest_book_index(db: LoadOrderDB, settings: Settings) -> QuestBookIndex:
    """Scan all quests for referenced books. Skipped when quest labels are off."""
    if not settings.addQuestLabels:
        return QuestBookIndex()

    logger.info("Searching the quest library for books, please wait...")
    return QuestBookIndex.build(db.winning_quests(), db.resolve_book)


def collect_tags(book: BookRecord, settings: Settings, quest_books: QuestBookIndex) -> list[str]:
    """Tags for one book, always in skill, map marker, quest order."""
    tags = []

    if settings.addSkillLabels:
        label = skill_label(book, settings)
        if label is not None:
            tags.append(label)

    if settings.addMapMarkerLabels:
        label = map_marker_label(book, settings)
        if label is not None:
            tags.append(label)

    if settings.addQuestLabels:
        label, matches = quest_label(book, settings, quest_books)
        log_quest_matches(matches)
        if label is not None:
            tags.append(label)

    return tags


def run_patch(db: LoadOrderDB, settings: Settings, patch: PatchMod) -> PatchReport:
    """
    Relabel every tagged book into the patch.

    Args:
        db: Load order supplying winning books and quests
        settings: Run configuration
        patch: Patch plugin receiving the overrides

    Returns:
        PatchReport listing every relabelled book
    """
    quest_books = build_quest_book_index(db, settings)
    report = PatchReport(quest_books=len(quest_books))

    for book in db.winning_books():
        report.books_scanned += 1
        if book.name is None:
            report.books_unnamed += 1
            continue

        tags = collect_tags(book, settings, quest_books)
        if not tags:
            continue

        override = patch.get_or_add_override(book)
        override.name = compose_name(book.name, tags, settings)

        logger.info("%s: '%s' -> '%s'", book.form_key, book.name, override.name)
        report.instructions.append(PatchInstruction(book.form_key, book.name, override.name))

    return report
