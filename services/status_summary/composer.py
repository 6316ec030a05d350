"""Compose the plain-text status digest that is reviewed (and optionally refined)."""
from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Iterable, List, Optional

from lib.dates import extract_future_date, format_date, is_within_last_days, parse_date
from lib.notes import Note
from lib.schema import NoteCategory
from services.status_summary.classifier import group_by_category

NO_VALID_UPDATES = "No valid status updates available."
NO_RECENT_UPDATES = "No recent updates available."

MAX_RECENT_UPDATES = 3
MAX_BLOCKERS = 2
MAX_NEXT_STEPS = 2
NEXT_STEP_WINDOW_DAYS = 7
ETA_KEYWORD = "eta"


class NextStepRule(str, Enum):
    """How planned actions are chosen for the "Next Steps" section."""

    # Text mentions a date after the newest note, or says "eta"; note is from the last week.
    MENTIONED_DATE = "mentioned_date"
    # The note's own Added On lies in the future.
    FUTURE_ADDED_ON = "future_added_on"


def _sorted_newest_first(notes: Iterable[Note]) -> List[Note]:
    return sorted(notes, key=lambda note: note.added_on, reverse=True)


def _render_lines(notes: Iterable[Note]) -> List[str]:
    return [f"* {format_date(note.added_on)}: {note.text}" for note in notes]


def _is_next_step(note: Note, rule: NextStepRule, latest: datetime, now: datetime) -> bool:
    if rule is NextStepRule.FUTURE_ADDED_ON:
        return note.added_on > now
    mentions_future = (
        extract_future_date(note.text, latest) is not None
        or ETA_KEYWORD in note.text.lower()
    )
    return mentions_future and is_within_last_days(note.added_on, NEXT_STEP_WINDOW_DAYS, latest)


def compose_digest(
    notes: Iterable[Note],
    *,
    now: Optional[datetime] = None,
    next_step_rule: NextStepRule = NextStepRule.MENTIONED_DATE,
) -> str:
    """
    Build the digest text from status notes.

    Args:
        notes: Notes for one intake, in any order.
        now: Processing time, used by ``NextStepRule.FUTURE_ADDED_ON``.
        next_step_rule: Selection rule for the "Next Steps" section.

    Returns:
        The digest, e.g.::

            Status Summary (as of Jan 17)

            Recent Updates:
            * Jan 17: Shipped v2

            Current Blockers:
            * Jan 17: API down
    """
    valid_notes = _sorted_newest_first(note for note in notes if note.added_on is not None)
    if not valid_notes:
        return NO_VALID_UPDATES

    now = parse_date(now) or datetime.now(timezone.utc)
    latest = valid_notes[0].added_on
    grouped = group_by_category(valid_notes)

    recent_updates = _sorted_newest_first(
        grouped[NoteCategory.INTERNAL_NOTE] + grouped[NoteCategory.ACCOMPLISHMENT]
    )[:MAX_RECENT_UPDATES]
    blockers = grouped[NoteCategory.BLOCKER][:MAX_BLOCKERS]
    next_steps = [
        note
        for note in grouped[NoteCategory.PLANNED_ACTION]
        if _is_next_step(note, next_step_rule, latest, now)
    ][:MAX_NEXT_STEPS]

    sections = []
    for title, section_notes in (
        ("Recent Updates", recent_updates),
        ("Current Blockers", blockers),
        ("Next Steps", next_steps),
    ):
        if section_notes:
            sections.append("\n".join([f"{title}:", *_render_lines(section_notes)]))

    header = f"Status Summary (as of {format_date(latest)})"
    body = "\n\n".join(sections) if sections else NO_RECENT_UPDATES
    return f"{header}\n\n{body}"
