"""Collect JIRA comment text for issues whose parent matches requested epic ids."""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

from lib.airtable_client import StatusStore
from lib.schema import IssueField
from utils.decorators import log_execution
from utils.logging import log_event

logger = logging.getLogger(__name__)

WORKFLOW_ID = "comment_indexer"


def normalize_issue_ids(value: Any) -> List[str]:
    """Accept "A, B", ["A", "B"], or a scalar and return trimmed, non-empty ids."""
    if value is None:
        return []
    if isinstance(value, (list, tuple, set)):
        items = [str(item) for item in value if item is not None]
    else:
        items = str(value).split(",")
    return [item.strip() for item in items if item.strip()]


def _reference_contains(reference: Any, issue_id: str) -> bool:
    if not isinstance(reference, dict):
        return False
    return any(
        isinstance(reference.get(key), str) and issue_id in reference[key]
        for key in ("name", "id")
    )


def format_parent(parent: Any) -> str:
    """Render a Parent cell as text, the way Airtable displays it."""
    if parent is None:
        return ""
    if isinstance(parent, str):
        return parent
    if isinstance(parent, dict):
        return str(parent.get("name") or parent.get("id") or "")
    if isinstance(parent, (list, tuple)):
        return ", ".join(filter(None, (format_parent(item) for item in parent)))
    return str(parent)


def parent_matches(parent: Any, issue_id: str) -> bool:
    """
    True when ``issue_id`` appears in the parent, either in its display text
    or in the name/id of a linked reference (single object or list).
    """
    if issue_id in format_parent(parent):
        return True
    if isinstance(parent, (list, tuple)):
        return any(_reference_contains(item, issue_id) for item in parent)
    return _reference_contains(parent, issue_id)


def _comment_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return ", ".join(str(item) for item in value)
    return str(value)


def index_comments(records: Iterable[Dict[str, Any]], issue_ids: List[str]) -> List[Dict[str, str]]:
    """
    Emit ``{"parentEpic", "comments"}`` for each record whose parent matches
    one of ``issue_ids``; the first matching id wins and a record is emitted
    at most once.
    """
    matches: List[Dict[str, str]] = []
    for record in records:
        fields = record.get("fields", {})
        parent = fields.get(IssueField.PARENT.value)
        for issue_id in issue_ids:
            if parent_matches(parent, issue_id):
                matches.append(
                    {
                        "parentEpic": issue_id,
                        "comments": _comment_text(fields.get(IssueField.COMMENTS.value)),
                    }
                )
                break
    return matches


@log_execution
def run_comment_index(issue_ids: Any, *, store: Optional[StatusStore] = None) -> List[Dict[str, str]]:
    """Scan every JIRA Sync record and return the matching comment entries."""
    requested = normalize_issue_ids(issue_ids)
    if not requested:
        logger.info("No issue ids requested; nothing to index")
        return []
    store = store or StatusStore.from_env()
    records = store.list_issue_records()
    matches = index_comments(records, requested)
    log_event(
        WORKFLOW_ID,
        "index",
        "Matched issue comments",
        {"requested": requested, "scanned": len(records), "matched": len(matches)},
    )
    return matches
