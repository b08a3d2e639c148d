"""Tests for assigning bulk-uploaded files to categories."""
from __future__ import annotations

import pytest

from core import deck
from core.bulk_assign import apply_report, assign_tables, bulk_upload, detect_category
from core.table_loader import TableLoadResult
from tests.conftest import make_records


def ok(name, *rows):
    return TableLoadResult(name=name, records=make_records(*rows))


def failed(name):
    return TableLoadResult(name=name, error="bad file")


class TestDetectCategory:
    """Tests for detect_category."""

    @pytest.mark.parametrize(
        "filename,expected",
        [
            ("characters.csv", "characters"),
            ("My_Character_List.CSV", "characters"),
            ("items_v2.csv", "items"),
            ("LOCATION.csv", "locations"),
            ("side-quests.csv", "quests"),
            ("monsters.csv", None),
            ("random.csv", None),
        ],
    )
    def test_matches_plural_and_singular(self, filename, expected):
        assert detect_category(filename) == expected

    def test_first_category_in_order_wins(self):
        assert detect_category("character_items.csv") == "characters"


class TestAssignTables:
    """Tests for assign_tables."""

    def test_unmatched_files_fall_back_in_order(self):
        """
        Given: monsters.csv, items_v2.csv, random.csv
        When: Assigned
        Then: items_v2 -> items; monsters -> characters and random -> locations, both as defaults
        """
        report = assign_tables([ok("monsters.csv", "m"), ok("items_v2.csv", "i"), ok("random.csv", "r")])

        assert report.tables["items"][0] == "items_v2.csv"
        assert report.tables["characters"][0] == "monsters.csv"
        assert report.tables["locations"][0] == "random.csv"
        assert "quests" not in report.tables
        assert report.assignments == [
            "items_v2.csv → Items",
            "monsters.csv → Characters (default)",
            "random.csv → Locations (default)",
        ]

    def test_later_match_overrides_earlier(self):
        report = assign_tables([ok("quests_old.csv", "old"), ok("quests_new.csv", "new")])

        name, records = report.tables["quests"]
        assert name == "quests_new.csv"
        assert records == [{"name": "new"}]
        assert report.assignments[-1] == "quests_new.csv → Quests (overrides previous)"

    def test_files_beyond_free_slots_are_skipped(self):
        results = [ok(f"file{i}.csv", str(i)) for i in range(5)]

        report = assign_tables(results)

        assert [report.tables[c][0] for c in deck.CATEGORIES] == [
            "file0.csv", "file1.csv", "file2.csv", "file3.csv",
        ]
        assert report.skipped == ["file4.csv"]

    def test_failures_do_not_take_slots(self):
        report = assign_tables([failed("broken.csv"), ok("other.csv", "x")])

        assert report.failures == ["broken.csv"]
        assert report.tables["characters"][0] == "other.csv"

    def test_status_lists_every_outcome(self):
        results = [ok("items.csv", "a")] + [ok(f"x{i}.csv", "b") for i in range(4)] + [failed("bad.csv")]

        status = assign_tables(results).status

        assert status == (
            "Loaded 4 files: items.csv → Items, x0.csv → Characters (default), "
            "x1.csv → Locations (default), x2.csv → Quests (default)"
            " | Skipped (no slots left): x3.csv"
            " | Failed to parse: bad.csv"
        )

    def test_status_singular_and_empty(self):
        assert assign_tables([ok("quest.csv", "q")]).status == "Loaded 1 file: quest.csv → Quests"
        assert assign_tables([]).status == "No files were processed."


class TestBulkUpload:
    """Tests for bulk_upload and apply_report."""

    def test_non_csv_files_are_ignored(self):
        report = bulk_upload([("notes.txt", b"a\n1\n"), ("image.png", b"\x89PNG")])

        assert report.status == "No CSV files selected."
        assert report.tables == {}

    def test_parses_and_assigns(self):
        report = bulk_upload([
            ("Items.CSV", b"name\nSword\nShield\n"),
            ("broken.csv", b"\xff\xfe"),
            ("readme.txt", b"ignored"),
        ])

        assert report.tables["items"] == ("Items.CSV", [{"name": "Sword"}, {"name": "Shield"}])
        assert report.failures == ["broken.csv"]

    def test_apply_report_loads_each_category(self, abc_state, rng):
        """
        Given: A deck with characters loaded and a card drawn
        When: A bulk report for items and quests is applied
        Then: Those tables are replaced, characters is kept, history is cleared
        """
        deck.draw(abc_state, rng)
        report = assign_tables([ok("items.csv", "i1", "i2"), ok("quests.csv", "q1")])

        apply_report(abc_state, report)

        assert deck.table_counts(abc_state) == {"characters": 3, "items": 2, "locations": 0, "quests": 1}
        assert abc_state.sources["items"] == "items.csv"
        assert abc_state.history == []
        assert deck.remaining_count(abc_state) == 3

    def test_failed_file_leaves_table_untouched(self, abc_state):
        report = assign_tables([failed("characters.csv")])

        apply_report(abc_state, report)

        assert deck.deck_size(abc_state) == 3
        assert abc_state.sources["characters"] == "characters.csv"
