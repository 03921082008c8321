"""
Tag derivation: decide which labels a single book earns.

Every resolver returns a token, or None when the book does not qualify.
"""

import logging
from dataclasses import dataclass
from typing import Container

from .records import NO_SKILL, BookRecord, Skill
from .settings import LabelFormat, Settings, require

logger = logging.getLogger(__name__)

STAR = "*"

# Skill -> (long, short)
SKILL_LABELS: dict[Skill, tuple[str, str]] = {
    Skill.ALCHEMY: ("Alchimie", "Alch"),
    Skill.ALTERATION: ("Altération", "Altr"),
    Skill.ARCHERY: ("Archerie", "Arch"),
    Skill.BLOCK: ("Parade", "Pard"),
    Skill.CONJURATION: ("Conjuration", "Conj"),
    Skill.DESTRUCTION: ("Destruction", "Dest"),
    Skill.ENCHANTING: ("Enchantement", "Ench"),
    Skill.HEAVY_ARMOR: ("Armure lourde", "Arm.L"),
    Skill.ILLUSION: ("Illusion", "Illu"),
    Skill.LIGHT_ARMOR: ("Armure légère", "Arm.l"),
    Skill.LOCKPICKING: ("Crochetage", "Croch"),
    Skill.ONE_HANDED: ("Une main", "1M"),
    Skill.PICKPOCKET: ("Vol à la tir", "Vol"),
    Skill.RESTORATION: ("Guérison", "Guéri"),
    Skill.SMITHING: ("Forgeage", "Forge"),
    Skill.SNEAK: ("Furtivité", "Furti"),
    Skill.SPEECH: ("Éloquence", "Éloq"),
    Skill.TWO_HANDED: ("Deux mains", "2M"),
}

_LABEL_TO_SKILL: dict[str, Skill] = {
    label: skill
    for skill, labels in SKILL_LABELS.items()
    for label in labels
}

MAP_MARKER_LABELS = {
    LabelFormat.LONG: "Marqueur carte",
    LabelFormat.SHORT: "Marqueur",
    LabelFormat.STAR: STAR,
}

QUEST_LABELS = {
    LabelFormat.LONG: "Quête",
    LabelFormat.SHORT: "Q",
    LabelFormat.STAR: STAR,
}


def skill_from_label(label: str) -> Skill | None:
    """Reverse lookup of a long or short skill token."""
    return _LABEL_TO_SKILL.get(label)


def skill_label(book: BookRecord, settings: Settings) -> str | None:
    """Token for the skill a book teaches."""
    if book.skill is None or book.skill == NO_SKILL:
        return None

    label_format = require(LabelFormat, settings.labelFormat, "labelFormat")
    if label_format is LabelFormat.STAR:
        return STAR

    try:
        skill = Skill(book.skill)
    except ValueError:
        # Skills added by newer game versions keep their raw value
        return str(book.skill)

    long_label, short_label = SKILL_LABELS[skill]
    return long_label if label_format is LabelFormat.LONG else short_label


def map_marker_label(book: BookRecord, settings: Settings) -> str | None:
    """Token for books whose scripts place a map marker."""
    for script in book.scripts:
        if "mapmarker" in script.lower():
            label_format = require(LabelFormat, settings.labelFormat, "labelFormat")
            return MAP_MARKER_LABELS[label_format]
    return None


@dataclass(frozen=True)
class QuestScriptMatch:
    """A script taken as evidence that a book belongs to a quest."""
    form_key: str
    name: str | None
    script: str


def quest_script_matches(book: BookRecord, settings: Settings) -> list[QuestScriptMatch]:
    """All scripts of a book that count as quest evidence."""
    return [
        QuestScriptMatch(book.form_key, book.name, script)
        for script in book.scripts
        if settings.assumeBookScriptsAreQuests or "quest" in script.lower()
    ]


def quest_label(book: BookRecord, settings: Settings,
                quest_books: Container[str]) -> tuple[str | None, list[QuestScriptMatch]]:
    """
    Token for quest-related books.

    A book is quest-related when a quest alias references it, or failing
    that, when one of its scripts counts as quest evidence.

    Returns:
        (token or None, script matches that led to the decision)
    """
    matches: list[QuestScriptMatch] = []
    if book.form_key not in quest_books:
        matches = quest_script_matches(book, settings)
        if not matches:
            return None, []

    label_format = require(LabelFormat, settings.labelFormat, "labelFormat")
    return QUEST_LABELS[label_format], matches


def log_quest_matches(matches: list[QuestScriptMatch]):
    for match in matches:
        logger.info(
            "%s: '%s' has a quest script named '%s'",
            match.form_key, match.name, match.script,
            extra={"form_key": match.form_key, "script": match.script}
        )
