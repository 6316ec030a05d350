"""Tests for indexing JIRA comments by parent epic."""

from services.comment_indexer.run import (
    index_comments,
    normalize_issue_ids,
    parent_matches,
    run_comment_index,
)


def _issue(parent, comments="Looks good", key="DATA-1"):
    return {"id": f"rec{key}", "fields": {"Issue Key": key, "Parent": parent, "Comments": comments}}


def test_normalize_issue_ids_accepts_strings_lists_and_scalars() -> None:
    assert normalize_issue_ids("EPIC-7, EPIC-9 ,") == ["EPIC-7", "EPIC-9"]
    assert normalize_issue_ids([" EPIC-7", 12, None]) == ["EPIC-7", "12"]
    assert normalize_issue_ids(42) == ["42"]
    assert normalize_issue_ids(None) == []


def test_parent_matches_text_and_references() -> None:
    assert parent_matches("EPIC-7 Data platform", "EPIC-7")
    assert parent_matches({"id": "recEPIC7", "name": "Platform"}, "EPIC7")
    assert parent_matches([{"name": "Other"}, {"name": "EPIC-9"}], "EPIC-9")
    assert not parent_matches(None, "EPIC-7")
    assert not parent_matches([{"name": "EPIC-8"}], "EPIC-7")


def test_index_comments_emits_one_entry_per_matching_record() -> None:
    records = [_issue([{"name": "EPIC-7"}], comments="Blocked on QA")]

    assert index_comments(records, ["EPIC-7", "EPIC-9"]) == [
        {"parentEpic": "EPIC-7", "comments": "Blocked on QA"}
    ]


def test_index_comments_first_matching_identifier_wins() -> None:
    records = [
        _issue("EPIC-7 / EPIC-9", key="DATA-1"),
        _issue("EPIC-9", comments=None, key="DATA-2"),
        _issue("EPIC-3", key="DATA-3"),
    ]

    assert index_comments(records, ["EPIC-9", "EPIC-7"]) == [
        {"parentEpic": "EPIC-9", "comments": "Looks good"},
        {"parentEpic": "EPIC-9", "comments": ""},
    ]


def test_run_comment_index_reads_issue_records(make_store) -> None:
    store = make_store(issues=[_issue("EPIC-7"), _issue("EPIC-8", key="DATA-2")])

    assert run_comment_index("EPIC-7", store=store) == [{"parentEpic": "EPIC-7", "comments": "Looks good"}]
    assert run_comment_index("", store=store) == []
