"""Tests for grouping notes and picking the latest note per category."""

from datetime import datetime, timezone

from lib.notes import Note
from lib.schema import NoteCategory
from services.status_summary.classifier import group_by_category, latest_by_category


def _note(category, text, day, hour=12):
    return Note(
        category=category,
        text=text,
        added_on=datetime(2024, 1, day, hour, tzinfo=timezone.utc),
    )


def test_latest_by_category_picks_newest_note() -> None:
    older = _note(NoteCategory.ACCOMPLISHMENT, "Design done", 10)
    newer = _note(NoteCategory.ACCOMPLISHMENT, "Build done", 15)
    blocker = _note(NoteCategory.BLOCKER, "API down", 12)

    latest = latest_by_category([older, blocker, newer])

    assert latest == {NoteCategory.ACCOMPLISHMENT: newer, NoteCategory.BLOCKER: blocker}


def test_latest_by_category_keeps_first_seen_on_ties() -> None:
    first = _note(NoteCategory.INTERNAL_NOTE, "first", 15)
    second = _note(NoteCategory.INTERNAL_NOTE, "second", 15)

    assert latest_by_category([first, second])[NoteCategory.INTERNAL_NOTE] is first


def test_latest_by_category_ignores_unknown_categories_and_missing_dates() -> None:
    notes = [
        Note(category=None, text="mystery", added_on=datetime(2024, 1, 20, tzinfo=timezone.utc)),
        Note(category=NoteCategory.DEPENDENCY, text="undated"),
    ]

    assert latest_by_category(notes) == {}


def test_group_by_category_has_every_category_and_preserves_order() -> None:
    a = _note(NoteCategory.PLANNED_ACTION, "a", 3)
    b = _note(NoteCategory.PLANNED_ACTION, "b", 1)
    grouped = group_by_category([a, Note(text="unknown"), b])

    assert set(grouped) == set(NoteCategory)
    assert grouped[NoteCategory.PLANNED_ACTION] == [a, b]
    assert grouped[NoteCategory.DEPENDENCY] == []
