"""Patch run tests"""

import logging

import pytest

from booksmart.errors import ConfigurationError
from booksmart.graph import QuestBookIndex
from booksmart.patch import PatchMod
from booksmart.patcher import build_quest_book_index, collect_tags, run_patch
from booksmart.records import BookRecord, Skill
from booksmart.settings import (
    EncapsulatingCharacters,
    LabelFormat,
    LabelPosition,
    Settings,
)

NOTHING = Settings(addSkillLabels=False, addMapMarkerLabels=False, addQuestLabels=False)


def names(report):
    return {i.form_key: i.new_name for i in report.instructions}


class TestCollectTags:

    def test_fixed_order(self):
        book = BookRecord("B1", "Tome", skill=Skill.SNEAK, scripts=("QuestMapMarkerScript",))
        assert collect_tags(book, Settings(), QuestBookIndex()) == ["Furtivité", "Marqueur carte", "Quête"]

    def test_switches(self):
        book = BookRecord("B1", "Tome", skill=Skill.SNEAK, scripts=("QuestMapMarkerScript",))
        only_map = Settings(addSkillLabels=False, addQuestLabels=False)
        assert collect_tags(book, only_map, QuestBookIndex()) == ["Marqueur carte"]
        assert collect_tags(book, NOTHING, QuestBookIndex()) == []

    def test_quest_matches_are_logged(self, caplog):
        book = BookRecord("B1", "Tome", scripts=("MQ101QuestScript",))
        with caplog.at_level(logging.INFO, logger="booksmart.labels"):
            collect_tags(book, Settings(), QuestBookIndex())
        assert "B1: 'Tome' has a quest script named 'MQ101QuestScript'" in caplog.text


class TestQuestIndexPhase:

    def test_skipped_when_quest_labels_off(self, load_order, monkeypatch):
        def fail():
            raise AssertionError("quests should not be read")
        monkeypatch.setattr(load_order, "winning_quests", fail)
        index = build_quest_book_index(load_order, Settings(addQuestLabels=False))
        assert len(index) == 0

    def test_built_when_enabled(self, load_order):
        index = build_quest_book_index(load_order, Settings())
        assert list(index) == ["000003:Skyrim.esm", "000004:Skyrim.esm"]


class TestRunPatch:

    def test_default_settings(self, load_order):
        patch = PatchMod()
        report = run_patch(load_order, Settings(), patch)
        assert names(report) == {
            "000001:Skyrim.esm": "[Alchimie] Old Tome",
            "000002:Skyrim.esm": "[Marqueur carte] Treasure Map",
            "000003:Skyrim.esm": "[Quête] Journal",
            "000004:Skyrim.esm": "[Quête] Letter",
            "000006:Skyrim.esm": "[Quête] Notes",
        }
        assert [i.form_key for i in report.instructions] == sorted(names(report))
        assert report.books_scanned == 8
        assert report.books_unnamed == 1
        assert report.quest_books == 2
        assert len(patch) == 5

    def test_overrides_hold_new_names(self, load_order):
        patch = PatchMod()
        run_patch(load_order, Settings(), patch)
        override = patch.get_or_add_override(next(load_order.winning_books()))
        assert override.name == "[Alchimie] Old Tome"
        assert override.source_plugin == "Mod.esp"

    def test_only_skill_labels(self, load_order):
        settings = Settings(addMapMarkerLabels=False, addQuestLabels=False)
        report = run_patch(load_order, settings, PatchMod())
        assert names(report) == {"000001:Skyrim.esm": "[Alchimie] Old Tome"}

    def test_short_after_paren(self, load_order):
        settings = Settings(addMapMarkerLabels=False, addQuestLabels=False,
                            labelFormat=LabelFormat.SHORT,
                            labelPosition=LabelPosition.AFTER,
                            encapsulatingCharacters=EncapsulatingCharacters.PAREN)
        report = run_patch(load_order, settings, PatchMod())
        assert names(report) == {"000001:Skyrim.esm": "Old Tome (Alch)"}

    def test_star_after(self, load_order):
        settings = Settings(labelFormat=LabelFormat.STAR, labelPosition=LabelPosition.AFTER)
        report = run_patch(load_order, settings, PatchMod())
        assert names(report)["000001:Skyrim.esm"] == "Old Tome*"
        assert names(report)["000003:Skyrim.esm"] == "Journal*"

    def test_assume_book_scripts_are_quests(self, load_order):
        report = run_patch(load_order, Settings(assumeBookScriptsAreQuests=True), PatchMod())
        result = names(report)
        assert result["000002:Skyrim.esm"] == "[Marqueur carte/Quête] Treasure Map"
        assert result["000008:Skyrim.esm"] == "[Quête] Odd Book"
        assert "000007:Skyrim.esm" not in result

    def test_nothing_enabled(self, load_order):
        patch = PatchMod()
        report = run_patch(load_order, NOTHING, patch)
        assert report.instructions == []
        assert len(patch) == 0

    def test_unnamed_books_never_patched(self, load_order):
        report = run_patch(load_order, Settings(labelFormat=LabelFormat.STAR), PatchMod())
        assert "000005:Skyrim.esm" not in names(report)

    def test_relabel_lines_logged(self, load_order, caplog):
        with caplog.at_level(logging.INFO, logger="booksmart.patcher"):
            run_patch(load_order, Settings(), PatchMod())
        assert "000001:Skyrim.esm: 'Old Tome' -> '[Alchimie] Old Tome'" in caplog.text

    def test_bad_configuration_aborts(self, load_order):
        with pytest.raises(ConfigurationError):
            run_patch(load_order, Settings(labelPosition="Middle"), PatchMod())
