"""Group status notes by category and pick the latest note per category."""
from __future__ import annotations

from typing import Dict, Iterable, List

from lib.notes import Note
from lib.schema import NoteCategory


def group_by_category(notes: Iterable[Note]) -> Dict[NoteCategory, List[Note]]:
    """Bucket notes under the five categories, keeping input order; unknown categories are dropped."""
    grouped: Dict[NoteCategory, List[Note]] = {category: [] for category in NoteCategory}
    for note in notes:
        if note.category is None:
            continue
        grouped[note.category].append(note)
    return grouped


def latest_by_category(notes: Iterable[Note]) -> Dict[NoteCategory, Note]:
    """
    Select the most recently added note for each recognized category.

    Notes without an ``added_on`` timestamp are ignored. On equal timestamps
    the note seen first wins. Categories with no notes are absent from the
    result.
    """
    latest: Dict[NoteCategory, Note] = {}
    for note in notes:
        if note.category is None or note.added_on is None:
            continue
        current = latest.get(note.category)
        if current is None or note.added_on > current.added_on:
            latest[note.category] = note
    return latest
