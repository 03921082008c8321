"""Load-order database tests"""

from booksmart.records import Alias, Skill


class TestWinningOverrides:

    def test_books_in_priority_order(self, load_order):
        keys = [b.form_key for b in load_order.winning_books()]
        assert keys == [
            "000001:Skyrim.esm",
            "000002:Skyrim.esm",
            "000003:Skyrim.esm",
            "000004:Skyrim.esm",
            "000005:Skyrim.esm",
            "000006:Skyrim.esm",
            "000007:Skyrim.esm",
            "000008:Skyrim.esm",
        ]

    def test_highest_enabled_plugin_wins(self, load_order):
        books = {b.form_key: b for b in load_order.winning_books()}
        assert books["000001:Skyrim.esm"].name == "Old Tome"
        assert books["000001:Skyrim.esm"].skill == Skill.ALCHEMY
        assert books["000001:Skyrim.esm"].plugin == "Mod.esp"
        # Disabled.esp does not take part
        assert books["000007:Skyrim.esm"].skill is None

    def test_scripts_keep_order(self, db):
        db.add_plugin("Skyrim.esm", 0)
        db.add_book("000001:Skyrim.esm", "Skyrim.esm", "Book", scripts=["B", "A", "C"])
        book = next(db.winning_books())
        assert book.scripts == ("B", "A", "C")

    def test_quests(self, load_order):
        quests = list(load_order.winning_quests())
        assert [q.form_key for q in quests] == ["000100:Skyrim.esm", "000101:Skyrim.esm"]
        main = quests[0]
        assert main.aliases[0] == Alias(object_ref="000003:Skyrim.esm")
        assert main.aliases[1].items == ("000004:Skyrim.esm", "00000A:Skyrim.esm", "FFFFFF:Missing.esp")
        assert main.aliases[2] == Alias()
        assert quests[1].aliases[0].items == ()


class TestResolveBook:

    def test_book(self, load_order):
        book = load_order.resolve_book("000001:Skyrim.esm")
        assert book.name == "Old Tome"

    def test_non_book(self, load_order):
        assert load_order.resolve_book("00000A:Skyrim.esm") is None

    def test_quest_is_not_a_book(self, load_order):
        assert load_order.resolve_book("000100:Skyrim.esm") is None

    def test_missing(self, load_order):
        assert load_order.resolve_book("FFFFFF:Missing.esp") is None
        assert load_order.resolve_book(None) is None

    def test_quest_name(self, load_order):
        assert load_order.get_quest_name("000100:Skyrim.esm") == "Main Quest"
        assert load_order.get_quest_name("000003:Skyrim.esm") is None
