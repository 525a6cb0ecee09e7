"""Tests for the work and home to-do lists."""

from __future__ import annotations

import pytest

from habitledger.errors import InvalidDateError, NotFoundError


class TestTodoLists:
    def test_add_and_list(self, tracker):
        item = tracker.add_todo("work", "  Send report  ", today="2024-01-05")

        assert item.name == "Send report"
        assert item.created_date == "2024-01-05"
        assert len(item.id) == 8
        assert [t.to_dict() for t in tracker.list_todos("work")] == [
            {"id": item.id, "name": "Send report", "createdDate": "2024-01-05"}
        ]
        assert tracker.list_todos("home") == []

    def test_remove_deletes_the_item(self, tracker):
        keep = tracker.add_todo("home", "Water plants", today="2024-01-01")
        drop = tracker.add_todo("home", "Fix tap", today="2024-01-01")

        tracker.remove_todo("home", drop.id)

        assert [t.id for t in tracker.list_todos("home")] == [keep.id]

    def test_remove_from_the_wrong_list_is_not_found(self, tracker):
        item = tracker.add_todo("work", "Send report", today="2024-01-01")

        with pytest.raises(NotFoundError, match="Todo not found"):
            tracker.remove_todo("home", item.id)
        assert [t.id for t in tracker.list_todos("work")] == [item.id]

    def test_unknown_list_is_rejected(self, tracker):
        with pytest.raises(ValueError, match="Unknown list"):
            tracker.add_todo("garden", "Weed", today="2024-01-01")
        with pytest.raises(ValueError):
            tracker.list_todos("garden")

    def test_blank_name_and_bad_date_are_rejected(self, tracker):
        with pytest.raises(ValueError, match="Name is required"):
            tracker.add_todo("work", "   ", today="2024-01-01")
        with pytest.raises(InvalidDateError):
            tracker.add_todo("work", "Send report", today="2024-02-30")

    def test_todos_do_not_affect_habits(self, tracker):
        tracker.add_todo("work", "Send report", today="2024-01-01")

        assert tracker.list_habits() == []
        assert tracker.day_view("2024-01-01") == []
