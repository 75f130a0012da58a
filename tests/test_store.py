"""Tests for src.data.store — StateStore (JSON + log files) and pure mutators."""

import json
from datetime import datetime

import pytest

from src.data.models import Checklist
from src.data.store import (
    LogNotFoundError,
    StateStore,
    append_note,
    clear_notes,
    set_budget,
    set_field,
)


class TestChecklistStorage:
    def test_missing_file_created_with_defaults(self, store):
        checklist = store.load_checklist()
        assert checklist == Checklist()
        assert store.checklist_path.exists()
        assert json.loads(store.checklist_path.read_text()) == {
            "visa": False, "flight": False, "ticket": False, "savedBudget": 0,
        }

    def test_file_is_indented_json(self, store):
        store.save_checklist(Checklist(visa=True))
        assert store.checklist_path.read_text().startswith('{\n  "visa": true')

    def test_save_then_load_in_fresh_store(self, store, tmp_path):
        store.save_checklist(Checklist(ticket=True, saved_budget=1500))
        reloaded = StateStore(data_dir=tmp_path).load_checklist()
        assert reloaded.ticket is True
        assert reloaded.saved_budget == 1500

    def test_corrupt_file_returns_defaults_and_is_untouched(self, store):
        store.checklist_path.write_text("{not json")
        assert store.load_checklist() == Checklist()
        assert store.checklist_path.read_text() == "{not json"

    def test_wrong_shape_returns_defaults_and_is_untouched(self, store):
        store.checklist_path.write_text('["visa"]')
        assert store.load_checklist() == Checklist()
        assert store.checklist_path.read_text() == '["visa"]'

    def test_creates_missing_data_dir(self, tmp_path):
        nested = StateStore(data_dir=tmp_path / "a" / "b")
        nested.load_checklist()
        assert (tmp_path / "a" / "b" / "checklist.json").exists()


class TestNotesStorage:
    def test_missing_file_created_empty(self, store):
        assert store.load_notes() == []
        assert json.loads(store.notes_path.read_text()) == []

    def test_save_and_load_preserves_order_and_duplicates(self, store):
        store.save_notes(["b", "a", "b"])
        assert store.load_notes() == ["b", "a", "b"]

    def test_unicode_notes_round_trip(self, store):
        store.save_notes(["pasaporte ✈️"])
        assert store.load_notes() == ["pasaporte ✈️"]

    def test_corrupt_file_returns_empty_and_is_untouched(self, store):
        store.notes_path.write_text("oops")
        assert store.load_notes() == []
        assert store.notes_path.read_text() == "oops"

    def test_non_string_items_treated_as_corrupt(self, store):
        store.notes_path.write_text("[1, 2]")
        assert store.load_notes() == []


class TestLog:
    def test_append_creates_file_with_timestamp(self, store):
        store.append_log_entry("hello", now=datetime(2026, 1, 9, 9, 0))
        assert store.log_path.read_text() == "\n[2026-01-09 09:00] hello"

    def test_append_never_truncates(self, store):
        store.append_log_entry("one", now=datetime(2026, 1, 2, 9, 0))
        store.append_log_entry("two", now=datetime(2026, 1, 9, 9, 0))
        assert store.log_path.read_text() == (
            "\n[2026-01-02 09:00] one\n[2026-01-09 09:00] two"
        )

    def test_read_last_five_of_seven(self, store):
        for i in range(1, 8):
            store.append_log_entry(f"entry {i}", now=datetime(2026, 1, i, 9, 0))
        lines = store.read_last_log_lines(5)
        assert lines == [f"[2026-01-0{i} 09:00] entry {i}" for i in range(3, 8)]

    def test_read_fewer_than_n(self, store):
        store.append_log_entry("only", now=datetime(2026, 1, 1, 9, 0))
        assert store.read_last_log_lines(5) == ["[2026-01-01 09:00] only"]

    def test_trailing_blank_lines_ignored(self, store):
        store.log_path.write_text("\n[2026-01-01 09:00] a\n\n\n")
        assert store.read_last_log_lines(5) == ["[2026-01-01 09:00] a"]

    def test_splits_on_newline_only(self, store):
        store.log_path.write_text(
            "\n[2026-01-01 09:00] a\u2028b\x0bc\n[2026-01-02 09:00] d\x0ce",
            encoding="utf-8",
        )
        assert store.read_last_log_lines(5) == [
            "[2026-01-01 09:00] a\u2028b\x0bc",
            "[2026-01-02 09:00] d\x0ce",
        ]

    def test_missing_log_raises_not_found(self, store):
        with pytest.raises(LogNotFoundError):
            store.read_last_log_lines(5)

    def test_empty_log_returns_empty(self, store):
        store.log_path.write_text("")
        assert store.read_last_log_lines(5) == []


class TestMutators:
    @pytest.mark.parametrize("item", ["visa", "flight", "ticket"])
    def test_set_field(self, item):
        checklist = Checklist()
        set_field(checklist, item, True)
        assert getattr(checklist, item) is True
        set_field(checklist, item, False)
        assert getattr(checklist, item) is False

    def test_set_field_is_independent(self):
        checklist = set_field(Checklist(), "flight", True)
        assert checklist.visa is False
        assert checklist.ticket is False

    def test_set_field_unknown_item(self):
        with pytest.raises(ValueError):
            set_field(Checklist(), "hotel", True)

    def test_set_budget_overwrites(self):
        checklist = Checklist(saved_budget=900)
        set_budget(checklist, 1500)
        assert checklist.saved_budget == 1500

    def test_set_budget_rejects_negative(self):
        with pytest.raises(ValueError):
            set_budget(Checklist(), -5)

    def test_append_note_returns_new_list(self):
        notes = ["a"]
        updated = append_note(notes, "b")
        assert updated == ["a", "b"]
        assert notes == ["a"]

    def test_clear_notes(self):
        assert clear_notes() == []
